"""IP-based geolocation fallback service."""

__all__ = []
