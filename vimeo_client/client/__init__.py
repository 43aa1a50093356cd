from ._client import VimeoClient
from ._dispatcher import Dispatcher, RetrySettings
from .cache import CacheStore, FileCacheStore, MemoryCacheStore
from .decoder import Decoder, PydanticDecoder
from .exceptions import (
    AuthenticationError,
    PinCodeExpiredError,
    VimeoClientError,
    VimeoRequestError,
)
from .transport import HTTPXTransport, Transport, TransportResponse

__all__ = [
    "VimeoClient",
    "Dispatcher",
    "RetrySettings",
    "CacheStore",
    "FileCacheStore",
    "MemoryCacheStore",
    "Decoder",
    "PydanticDecoder",
    "AuthenticationError",
    "PinCodeExpiredError",
    "VimeoClientError",
    "VimeoRequestError",
    "HTTPXTransport",
    "Transport",
    "TransportResponse",
]
