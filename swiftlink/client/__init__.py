"""Client library for the swiftlink short link API."""

from .client_async import AsyncSwiftlinkClient
from .client_blocking import SwiftlinkClient
from .errors import RequestError, SwiftlinkClientError, UnexpectedResponse

__all__ = [
    "AsyncSwiftlinkClient",
    "SwiftlinkClient",
    "SwiftlinkClientError",
    "RequestError",
    "UnexpectedResponse",
]
