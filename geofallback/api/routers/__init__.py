"""Router modules exposed for convenient imports."""

from . import geolocate, healthz, readyz

__all__ = [
    "geolocate",
    "healthz",
    "readyz",
]
