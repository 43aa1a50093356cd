from .controller import AuthenticationController, session_from_token_response
from .pin_code import PinCodePoller, is_authorization_pending
from .requests import GrantType, build_auth_request
from .session import AuthSessionHandle

__all__ = [
    "AuthenticationController",
    "AuthSessionHandle",
    "GrantType",
    "PinCodePoller",
    "build_auth_request",
    "is_authorization_pending",
    "session_from_token_response",
]
