from typing import Optional


class SwiftlinkClientError(Exception):
    """Base class for errors raised by the swiftlink clients."""


class RequestError(SwiftlinkClientError):
    """The HTTP request failed or the server answered with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class UnexpectedResponse(SwiftlinkClientError):
    """The server returned an unexpected or malformed response."""
