from pathlib import Path
from typing import Final

__version__: Final[str] = "0.1.0"

VIMEO_CLIENT_ID_NAME: Final[str] = "VIMEO_CLIENT_ID"
VIMEO_CLIENT_SECRET_NAME: Final[str] = "VIMEO_CLIENT_SECRET"
VIMEO_ACCESS_TOKEN_NAME: Final[str] = "VIMEO_ACCESS_TOKEN"
VIMEO_BASE_URL_NAME: Final[str] = "VIMEO_BASE_URL"
VIMEO_CACHE_NAME: Final[str] = "VIMEO_CACHE_DIR"
DEFAULT_VIMEO_BASE_URL: Final[str] = "https://api.vimeo.com"
DEFAULT_VIMEO_CACHE: Final[Path] = Path("~/.cache/vimeo_client").expanduser()
VIMEO_API_VERSION: Final[str] = "3.2"
VIMEO_ACCEPT_HEADER: Final[str] = (
    f"application/vnd.vimeo.*+json;version={VIMEO_API_VERSION}"
)

from .client import Dispatcher, VimeoClient  # noqa: E402
from .errors import ErrorDomain, ErrorKind, classify  # noqa: E402
from .types.request import (  # noqa: E402
    CacheFetchPolicy,
    HTTPMethod,
    Request,
    RetryPolicy,
)
from .types.response import Response  # noqa: E402
from .types.scope import Scope  # noqa: E402

__all__ = [
    "CacheFetchPolicy",
    "Dispatcher",
    "ErrorDomain",
    "ErrorKind",
    "HTTPMethod",
    "Request",
    "Response",
    "RetryPolicy",
    "Scope",
    "VimeoClient",
    "classify",
]
