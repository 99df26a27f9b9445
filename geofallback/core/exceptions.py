"""Domain-level exception hierarchy for the fetch, cache and API layers."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for domain-specific failures."""


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""


class CacheMissError(NotFoundError):
    """Raised when no fresh location fix is cached."""


class FetchError(DomainError):
    """A single upstream lookup failed (network, timeout or non-2xx status)."""

    def __init__(self, message: str, *, url: str, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ExhaustedRetriesError(DomainError):
    """The retry budget was spent without a successful lookup."""

    def __init__(self, attempts: int, last_error: FetchError):
        super().__init__(f"gave up after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error
