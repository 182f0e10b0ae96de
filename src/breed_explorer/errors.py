"""
Closed error taxonomy for API requests.

Every failure the HTTP client can report is one of the `NetworkError`
subclasses below. `description` is the human-readable text shown in the
`Error` view state.
"""
from __future__ import annotations
from typing import Optional


class NetworkError(Exception):
    """Base class for all request failures."""

    def __init__(self, description: str, cause: Optional[BaseException] = None):
        super().__init__(description)
        self.description = description
        self.cause = cause


class InvalidURLError(NetworkError):
    def __init__(self) -> None:
        super().__init__("Invalid URL")


class NoDataError(NetworkError):
    def __init__(self) -> None:
        super().__init__("No data received")


class DecodingError(NetworkError):
    def __init__(self, cause: BaseException):
        super().__init__(f"Failed to decode response: {cause}", cause)


class HttpError(NetworkError):
    def __init__(self, status_code: int):
        super().__init__(f"HTTP error with status code: {status_code}")
        self.status_code = status_code


class UnknownNetworkError(NetworkError):
    """Transport-level fault (connection, timeout, ...) wrapping the original exception."""

    def __init__(self, cause: BaseException):
        super().__init__(f"Unknown error: {cause}", cause)


def describe_error(error: BaseException) -> str:
    """Best available human-readable text for a load failure."""
    if isinstance(error, NetworkError):
        return error.description
    return str(error) or "An unexpected error occurred. Please try again."
