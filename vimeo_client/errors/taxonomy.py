"""Map raw failure signals onto a single error taxonomy."""

import logging
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from vimeo_client.errors.codes import (
    HTTP_STATUS_MESSAGES,
    LOCAL_ERROR_MESSAGES,
    SERVER_ERROR_MESSAGES,
    ErrorDomain,
    HTTPStatusCode,
    LocalErrorCode,
    ServerErrorCode,
)

logger = logging.getLogger(__name__)

SERVER_ERROR_CODE_KEY = "error_code"
SERVER_MESSAGE_KEYS = ("developer_message", "error")
INSPECTED_HTTP_STATUSES = frozenset(status.value for status in HTTPStatusCode)


class ErrorKind(BaseModel):
    """A classified failure: where it came from, its code and a description."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    domain: ErrorDomain
    code: int
    message: str
    http_status: int | None = Field(
        default=None, description="HTTP status of the response, if one arrived"
    )
    underlying: Any = Field(
        default=None,
        description="Original payload or exception, for diagnostics",
        exclude=True,
    )

    @property
    def is_retryable(self) -> bool:
        if self.domain is ErrorDomain.TRANSPORT:
            return True
        return (
            self.domain is ErrorDomain.HTTP_STATUS
            and self.code == HTTPStatusCode.SERVICE_UNAVAILABLE
        )

    @property
    def server_code(self) -> ServerErrorCode | None:
        """The recognized server code, or None for unknown or non-server errors."""
        if self.domain is not ErrorDomain.SERVER_REPORTED:
            return None
        try:
            return ServerErrorCode(self.code)
        except ValueError:
            return None

    def is_local(self, code: LocalErrorCode) -> bool:
        return self.domain is ErrorDomain.LOCAL and self.code == code

    @property
    def is_pin_code_expired(self) -> bool:
        return self.is_local(LocalErrorCode.PIN_CODE_EXPIRED)

    def __str__(self) -> str:
        return f"{self.domain.value}/{self.code}: {self.message}"


def local_error(
    code: LocalErrorCode,
    message: str | None = None,
    *,
    underlying: Any = None,
    http_status: int | None = None,
) -> ErrorKind:
    return ErrorKind(
        domain=ErrorDomain.LOCAL,
        code=int(code),
        message=message or LOCAL_ERROR_MESSAGES[code],
        underlying=underlying,
        http_status=http_status,
    )


def _server_error_code(payload: Any) -> int | None:
    if not isinstance(payload, Mapping):
        return None
    raw = payload.get(SERVER_ERROR_CODE_KEY)
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().lstrip("-").isdigit():
        return int(raw.strip())
    return None


def _server_message(payload: Mapping[str, Any], code: int) -> str:
    for key in SERVER_MESSAGE_KEYS:
        if isinstance(value := payload.get(key), str) and value:
            return value
    try:
        return SERVER_ERROR_MESSAGES[ServerErrorCode(code)]
    except ValueError:
        return f"Unrecognized server error code {code}"


def _classify(
    transport_error: BaseException | None,
    http_status: int | None,
    payload: Any,
    local_code: LocalErrorCode | None,
) -> ErrorKind:
    if transport_error is not None:
        return ErrorKind(
            domain=ErrorDomain.TRANSPORT,
            code=int(LocalErrorCode.NO_RESPONSE),
            message=f"No response received: {transport_error}",
            underlying=transport_error,
        )

    if (server_code := _server_error_code(payload)) is not None:
        return ErrorKind(
            domain=ErrorDomain.SERVER_REPORTED,
            code=server_code,
            message=_server_message(payload, server_code),
            http_status=http_status,
            underlying=payload,
        )

    if http_status in INSPECTED_HTTP_STATUSES:
        status = HTTPStatusCode(http_status)
        return ErrorKind(
            domain=ErrorDomain.HTTP_STATUS,
            code=int(status),
            message=HTTP_STATUS_MESSAGES[status],
            http_status=http_status,
            underlying=payload,
        )

    if local_code is not None:
        return local_error(local_code, underlying=payload, http_status=http_status)

    message = LOCAL_ERROR_MESSAGES[LocalErrorCode.UNDEFINED]
    if http_status is not None:
        message = f"{message} (HTTP {http_status})"
    return local_error(
        LocalErrorCode.UNDEFINED, message, underlying=payload, http_status=http_status
    )


def classify(
    transport_error: BaseException | None = None,
    http_status: int | None = None,
    payload: Any = None,
    local_code: LocalErrorCode | None = None,
) -> ErrorKind:
    """Classify a failure into an `ErrorKind`.

    Precedence: transport failure, then a server supplied ``error_code``
    (recognized or not), then the directly inspected HTTP statuses, then the
    given local code. Anything else is ``LOCAL/UNDEFINED``. Never raises.
    """
    try:
        return _classify(transport_error, http_status, payload, local_code)
    except Exception as e:
        logger.warning(f"Error classification failed, falling back to undefined: {e}")
        return ErrorKind(
            domain=ErrorDomain.LOCAL,
            code=int(LocalErrorCode.UNDEFINED),
            message=LOCAL_ERROR_MESSAGES[LocalErrorCode.UNDEFINED],
        )
