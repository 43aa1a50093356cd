"""Request builders for every supported grant type.

All builders are pure: they return a POST descriptor that only ever goes to
the network and is never cached. Token deletion is the exception, a DELETE
retried a fixed number of times.
"""

from enum import Enum
from typing import Any, Callable, Iterable

from vimeo_client.types.auth_session import NullResponse, TokenResponse
from vimeo_client.types.request import (
    TRY_THREE_TIMES,
    CacheFetchPolicy,
    HTTPMethod,
    Request,
)
from vimeo_client.types.scope import Scope

GRANT_TYPE_KEY = "grant_type"
SCOPE_KEY = "scope"
CODE_KEY = "code"
REDIRECT_URI_KEY = "redirect_uri"
USERNAME_KEY = "username"
PASSWORD_KEY = "password"
DISPLAY_NAME_KEY = "display_name"
EMAIL_KEY = "email"
TOKEN_KEY = "token"
USER_CODE_KEY = "user_code"
DEVICE_CODE_KEY = "device_code"
ACCESS_TOKEN_KEY = "access_token"

GRANT_TYPE_CLIENT_CREDENTIALS = "client_credentials"
GRANT_TYPE_AUTHORIZATION_CODE = "authorization_code"
GRANT_TYPE_PASSWORD = "password"
GRANT_TYPE_FACEBOOK = "facebook"
GRANT_TYPE_PIN_CODE = "device_grant"

PATH_CLIENT_CREDENTIALS = "oauth/authorize/client"
PATH_PASSWORD = "oauth/authorize/password"
PATH_USERS = "users"
PATH_FACEBOOK = "oauth/authorize/facebook"
PATH_CODE_GRANT = "oauth/access_token"
PATH_PIN_CODE = "oauth/device"
PATH_PIN_CODE_AUTHORIZE = "oauth/device/authorize"
PATH_APP_TOKEN_EXCHANGE = "oauth/appexchange"
PATH_TOKENS = "/tokens"
PATH_AUTHORIZE = "oauth/authorize"


class GrantType(str, Enum):
    CLIENT_CREDENTIALS = "client_credentials"
    CODE_GRANT = "code_grant"
    PASSWORD = "password"
    JOIN = "join"
    FACEBOOK_LOG_IN = "facebook_log_in"
    FACEBOOK_JOIN = "facebook_join"
    PIN_CODE_AUTHORIZE = "pin_code_authorize"
    PIN_CODE_INITIATE = "pin_code_initiate"
    APP_TOKEN_EXCHANGE = "app_token_exchange"
    DELETE_TOKEN = "delete_token"


def _auth_request(path: str, parameters: dict[str, Any], model: Any) -> Request:
    return Request(
        method=HTTPMethod.POST,
        path=path,
        parameters=parameters,
        cache_fetch_policy=CacheFetchPolicy.NETWORK_ONLY,
        should_cache_response=False,
        authenticates_client=True,
        model=model,
    )


def client_credentials_request(scopes: Iterable[Scope]) -> Request:
    return _auth_request(
        PATH_CLIENT_CREDENTIALS,
        {
            GRANT_TYPE_KEY: GRANT_TYPE_CLIENT_CREDENTIALS,
            SCOPE_KEY: Scope.combine(scopes),
        },
        TokenResponse,
    )


def code_grant_request(code: str, redirect_uri: str) -> Request:
    return _auth_request(
        PATH_CODE_GRANT,
        {
            GRANT_TYPE_KEY: GRANT_TYPE_AUTHORIZATION_CODE,
            CODE_KEY: code,
            REDIRECT_URI_KEY: redirect_uri,
        },
        TokenResponse,
    )


def log_in_request(email: str, password: str, scopes: Iterable[Scope]) -> Request:
    return _auth_request(
        PATH_PASSWORD,
        {
            GRANT_TYPE_KEY: GRANT_TYPE_PASSWORD,
            SCOPE_KEY: Scope.combine(scopes),
            USERNAME_KEY: email,
            PASSWORD_KEY: password,
        },
        TokenResponse,
    )


def join_request(
    name: str, email: str, password: str, scopes: Iterable[Scope]
) -> Request:
    return _auth_request(
        PATH_USERS,
        {
            SCOPE_KEY: Scope.combine(scopes),
            DISPLAY_NAME_KEY: name,
            EMAIL_KEY: email,
            PASSWORD_KEY: password,
        },
        TokenResponse,
    )


def facebook_log_in_request(facebook_token: str, scopes: Iterable[Scope]) -> Request:
    return _auth_request(
        PATH_FACEBOOK,
        {
            GRANT_TYPE_KEY: GRANT_TYPE_FACEBOOK,
            SCOPE_KEY: Scope.combine(scopes),
            TOKEN_KEY: facebook_token,
        },
        TokenResponse,
    )


def facebook_join_request(facebook_token: str, scopes: Iterable[Scope]) -> Request:
    return _auth_request(
        PATH_USERS,
        {SCOPE_KEY: Scope.combine(scopes), TOKEN_KEY: facebook_token},
        TokenResponse,
    )


def authorize_pin_code_request(user_code: str, device_code: str) -> Request:
    return _auth_request(
        PATH_PIN_CODE_AUTHORIZE,
        {USER_CODE_KEY: user_code, DEVICE_CODE_KEY: device_code},
        TokenResponse,
    )


def pin_code_request(scopes: Iterable[Scope]) -> Request:
    # Decoded loosely; PinCodeInfo validation reports missing fields itself
    return _auth_request(
        PATH_PIN_CODE,
        {GRANT_TYPE_KEY: GRANT_TYPE_PIN_CODE, SCOPE_KEY: Scope.combine(scopes)},
        dict[str, Any],
    )


def app_token_exchange_request(access_token: str) -> Request:
    return _auth_request(
        PATH_APP_TOKEN_EXCHANGE, {ACCESS_TOKEN_KEY: access_token}, TokenResponse
    )


def delete_tokens_request() -> Request:
    return Request(
        method=HTTPMethod.DELETE,
        path=PATH_TOKENS,
        cache_fetch_policy=CacheFetchPolicy.NETWORK_ONLY,
        should_cache_response=False,
        retry_policy=TRY_THREE_TIMES,
        model=NullResponse,
    )


GRANT_BUILDERS: dict[GrantType, Callable[..., Request]] = {
    GrantType.CLIENT_CREDENTIALS: client_credentials_request,
    GrantType.CODE_GRANT: code_grant_request,
    GrantType.PASSWORD: log_in_request,
    GrantType.JOIN: join_request,
    GrantType.FACEBOOK_LOG_IN: facebook_log_in_request,
    GrantType.FACEBOOK_JOIN: facebook_join_request,
    GrantType.PIN_CODE_AUTHORIZE: authorize_pin_code_request,
    GrantType.PIN_CODE_INITIATE: pin_code_request,
    GrantType.APP_TOKEN_EXCHANGE: app_token_exchange_request,
    GrantType.DELETE_TOKEN: delete_tokens_request,
}


def build_auth_request(grant: GrantType | str, **kwargs: Any) -> Request:
    """Build the descriptor for `grant`; keyword arguments go to its builder."""
    return GRANT_BUILDERS[GrantType(grant)](**kwargs)
