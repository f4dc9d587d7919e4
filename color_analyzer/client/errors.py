"""
Client error taxonomy.
"""
from typing import Optional


class ColorAnalyzerError(Exception):
    """Base class for all client-side failures."""


class InvalidImageError(ColorAnalyzerError):
    """The selected file is not an image; nothing was sent."""


class RequestFailedError(ColorAnalyzerError):
    """Network failure or non-2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 server_error: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.server_error = server_error


class UnexpectedResponseError(ColorAnalyzerError):
    """2xx response whose body lacks the expected field."""
