"""Custom exceptions for Vimeo client operations."""

from vimeo_client.errors import ErrorKind, LocalErrorCode, local_error


class VimeoClientError(Exception):
    """Base error; always carries a classified `ErrorKind`."""

    def __init__(self, kind: ErrorKind, message: str | None = None):
        self.kind = kind
        self.message = message or kind.message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.message} [{self.kind.domain.value}/{self.kind.code}]"


class VimeoRequestError(VimeoClientError):
    """Raised when a request terminates without a final response."""


class AuthenticationError(VimeoClientError):
    """Raised when an authentication flow cannot produce a session."""


class PinCodeExpiredError(AuthenticationError):
    """Raised when the active pin code expires before it was authorized.

    An expected outcome; callers should offer to start a new pin code.
    """

    def __init__(self, message: str | None = None):
        super().__init__(local_error(LocalErrorCode.PIN_CODE_EXPIRED), message)


class TransportError(Exception):
    """Raised by a transport when no response was received."""


class DecodeError(Exception):
    """Raised by a decoder when a payload cannot become the target model."""

    def __init__(self, code: LocalErrorCode, message: str | None = None):
        self.code = code
        self.message = message or f"Decoding failed ({code.name})"
        super().__init__(self.message)
