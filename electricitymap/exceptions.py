"""Errors raised by the Electricity Maps client."""

from typing import Optional


class ElectricityMapError(Exception):
    """Base class for all client errors."""


class RequestConstructionError(ElectricityMapError):
    """Raised when a request cannot be built from the given URL or parameters."""


class TransportError(ElectricityMapError):
    """Raised when the request fails at the network level."""


class HTTPStatusError(ElectricityMapError):
    """Raised when the API answers with anything other than 200."""

    def __init__(self, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(f"{status_code} {self.reason}".strip())


class DecodeError(ElectricityMapError):
    """Raised when a 200 response body is not valid JSON for the expected type."""
