"""
Custom exceptions for makeimage.

This module defines all custom exceptions used throughout the application.
Every error is local to a single image request; none of them is retried.
"""


class MakeImageError(Exception):
    """Base exception for all makeimage errors."""

    pass


class ConfigurationError(MakeImageError):
    """Raised when required settings are missing or invalid."""

    def __init__(self, message: str, key: str = "") -> None:
        """
        Initialize configuration error.

        Args:
            message: Error message
            key: Settings key that was missing or invalid (optional)
        """
        self.key = key
        super().__init__(message)


class UrlError(MakeImageError):
    """Raised when the endpoint URL built from settings is not a valid URL."""

    def __init__(self, message: str, url: str = "") -> None:
        self.url = url
        super().__init__(message)


class EncodeError(MakeImageError):
    """Raised when the request body cannot be serialized."""

    pass


class ResponseError(MakeImageError):
    """Raised when the API answers with a status outside [200, 400)."""

    def __init__(self, message: str, status_code: int = 0, response: str = "") -> None:
        """
        Initialize response error.

        Args:
            message: Error message
            status_code: HTTP status code
            response: Raw response body (if available)
        """
        self.status_code = status_code
        self.response = response
        super().__init__(message)


class DecodeError(MakeImageError):
    """Raised when a response body cannot be parsed into the expected shape."""

    def __init__(self, message: str, response: str = "") -> None:
        self.response = response
        super().__init__(message)


class NetworkError(MakeImageError):
    """Raised when a network operation fails."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        """
        Initialize network error.

        Args:
            message: Error message
            original_error: The underlying exception that caused this error
        """
        self.original_error = original_error
        super().__init__(message)
