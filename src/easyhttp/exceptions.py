"""
Custom exceptions for easyhttp.
"""


class EasyHTTPError(Exception):
    """Base exception for all easyhttp errors."""

    pass


class TransportError(EasyHTTPError):
    """
    Raised when a request fails below HTTP (connection, DNS, TLS, timeout).

    Only raised by clients created with ``strict=True``. Otherwise the
    failure is logged and the call returns an empty body.

    Attributes:
        method: HTTP method of the failed request.
        url: Target URL of the failed request.
        description: The transport's error description.
    """

    def __init__(self, method: str, url: str, description: str):
        self.method = method
        self.url = url
        self.description = description
        super().__init__(f"{method} {url} failed: {description}")


class InvalidBatchEntryError(EasyHTTPError, ValueError):
    """Raised when a batch entry cannot be turned into a request."""

    def __init__(self, index: int, message: str):
        self.index = index
        super().__init__(f"Batch entry {index}: {message}")
