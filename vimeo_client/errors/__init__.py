from .codes import ErrorDomain, HTTPStatusCode, LocalErrorCode, ServerErrorCode
from .taxonomy import ErrorKind, classify, local_error

__all__ = [
    "ErrorDomain",
    "ErrorKind",
    "HTTPStatusCode",
    "LocalErrorCode",
    "ServerErrorCode",
    "classify",
    "local_error",
]
