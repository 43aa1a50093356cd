import logging
import secrets
from typing import Any, Awaitable, Callable, Iterable

import httpx
from pydantic import ValidationError

from vimeo_client.auth import requests as auth_requests
from vimeo_client.auth.pin_code import PinCodePoller
from vimeo_client.auth.session import AuthSessionHandle
from vimeo_client.client._dispatcher import Dispatcher
from vimeo_client.client.exceptions import AuthenticationError, VimeoRequestError
from vimeo_client.errors import LocalErrorCode, local_error
from vimeo_client.types.auth_session import AuthSession, TokenResponse
from vimeo_client.types.pin_code import PinCodeInfo, PinCodeSession
from vimeo_client.types.request import Request
from vimeo_client.types.response import Response
from vimeo_client.types.scope import Scope

logger = logging.getLogger(__name__)

PinCodeCallback = Callable[[PinCodeSession], Awaitable[None] | None]


def session_from_token_response(
    payload: TokenResponse | dict[str, Any],
) -> AuthSession:
    """Interpret a grant exchange response; a missing access token is an error."""
    if isinstance(payload, dict):
        payload = TokenResponse.model_validate(payload)
    if not payload.access_token:
        raise AuthenticationError(local_error(LocalErrorCode.AUTH_TOKEN))
    return AuthSession(
        access_token=payload.access_token,
        token_type=payload.token_type or "bearer",
        scopes=Scope.parse(payload.scope),
        user=payload.user,
    )


class AuthenticationController:
    """Runs grant exchanges through the dispatcher and installs the result.

    Nothing here retries on its own, apart from token deletion whose request
    carries a fixed retry policy.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        session_handle: AuthSessionHandle,
        *,
        client_id: str | None = None,
        base_url: httpx.URL | str = "https://api.vimeo.com",
    ):
        self.dispatcher = dispatcher
        self.session_handle = session_handle
        self.client_id = client_id
        self.base_url = httpx.URL(str(base_url).rstrip("/"))
        self.active_pin_code: PinCodePoller | None = None
        self._code_grant_state: str | None = None
        self._code_grant_redirect_uri: str | None = None

    # Grant exchanges

    async def client_credentials_grant(self, scopes: Iterable[Scope]) -> AuthSession:
        return await self._authenticate(
            auth_requests.client_credentials_request(scopes)
        )

    async def code_grant(self, code: str, redirect_uri: str) -> AuthSession:
        return await self._authenticate(
            auth_requests.code_grant_request(code, redirect_uri)
        )

    async def log_in(
        self, email: str, password: str, scopes: Iterable[Scope]
    ) -> AuthSession:
        return await self._authenticate(
            auth_requests.log_in_request(email, password, scopes)
        )

    async def join(
        self, name: str, email: str, password: str, scopes: Iterable[Scope]
    ) -> AuthSession:
        return await self._authenticate(
            auth_requests.join_request(name, email, password, scopes)
        )

    async def facebook_log_in(
        self, facebook_token: str, scopes: Iterable[Scope]
    ) -> AuthSession:
        return await self._authenticate(
            auth_requests.facebook_log_in_request(facebook_token, scopes)
        )

    async def facebook_join(
        self, facebook_token: str, scopes: Iterable[Scope]
    ) -> AuthSession:
        return await self._authenticate(
            auth_requests.facebook_join_request(facebook_token, scopes)
        )

    async def app_token_exchange(self, access_token: str) -> AuthSession:
        return await self._authenticate(
            auth_requests.app_token_exchange_request(access_token)
        )

    async def log_out(self) -> None:
        """Delete the current token on the server and forget the session.

        The local session is cleared even when the server call fails.
        """
        try:
            await self._fetch(auth_requests.delete_tokens_request())
        finally:
            self.session_handle.clear()
        logger.info("Logged out")

    # Code grant (redirect) helpers

    def code_grant_authorization_url(
        self, redirect_uri: str, scopes: Iterable[Scope]
    ) -> str:
        """URL to open in a browser; the redirect comes back with code and state."""
        if not self.client_id:
            raise AuthenticationError(
                local_error(
                    LocalErrorCode.REQUEST_MALFORMED,
                    "A client id is required to build an authorization URL",
                )
            )
        self._code_grant_state = secrets.token_urlsafe(16)
        self._code_grant_redirect_uri = redirect_uri
        url = httpx.URL(
            f"{self.base_url}/{auth_requests.PATH_AUTHORIZE}",
            params={
                "response_type": "code",
                "client_id": self.client_id,
                "redirect_uri": redirect_uri,
                "scope": Scope.combine(scopes),
                "state": self._code_grant_state,
            },
        )
        return str(url)

    async def code_grant_from_redirect(
        self, redirect_url: str, redirect_uri: str | None = None
    ) -> AuthSession:
        params = httpx.URL(redirect_url).params
        code = params.get("code")
        if params.get("error") or not code:
            raise AuthenticationError(
                local_error(
                    LocalErrorCode.CODE_GRANT,
                    underlying=dict(params),
                )
            )
        state = params.get("state")
        if self._code_grant_state is None or state != self._code_grant_state:
            raise AuthenticationError(local_error(LocalErrorCode.CODE_GRANT_STATE))

        redirect_uri = redirect_uri or self._code_grant_redirect_uri
        if not redirect_uri:
            raise AuthenticationError(
                local_error(LocalErrorCode.CODE_GRANT, "No redirect URI to exchange")
            )
        self._code_grant_state = None
        return await self.code_grant(code, redirect_uri)

    # Pin code (device authorization)

    async def initiate_pin_code(self, scopes: Iterable[Scope]) -> PinCodeSession:
        response = await self._fetch(auth_requests.pin_code_request(scopes))
        try:
            info = PinCodeInfo.model_validate(response.raw_payload)
        except ValidationError as e:
            raise AuthenticationError(
                local_error(
                    LocalErrorCode.PIN_CODE_INFO, underlying=response.raw_payload
                )
            ) from e
        session = PinCodeSession.from_info(info)
        logger.debug(f"Pin code issued, expires at {session.expires_at.isoformat()}")
        return session

    async def exchange_pin_code(self, pin_code: PinCodeSession) -> AuthSession:
        """One authorization check; does not install the session."""
        return await self._exchange(
            auth_requests.authorize_pin_code_request(
                pin_code.user_code, pin_code.device_code
            )
        )

    def pin_code_poller(
        self, pin_code: PinCodeSession, **kwargs: Any
    ) -> PinCodePoller:
        poller = PinCodePoller(self, pin_code, **kwargs)
        self.active_pin_code = poller
        return poller

    async def authenticate_pin_code(
        self,
        scopes: Iterable[Scope],
        on_code: PinCodeCallback | None = None,
        **poller_kwargs: Any,
    ) -> AuthSession | None:
        """Initiate a pin code, report it, then poll until a terminal state.

        Returns None when cancelled; raises `PinCodeExpiredError` on expiry.
        """
        pin_code = await self.initiate_pin_code(scopes)
        if on_code is not None:
            result = on_code(pin_code)
            if result is not None:
                await result
        poller = self.pin_code_poller(pin_code, **poller_kwargs)
        try:
            return await poller.run()
        finally:
            if self.active_pin_code is poller:
                self.active_pin_code = None

    def cancel_pin_code(self) -> None:
        if self.active_pin_code is not None:
            self.active_pin_code.cancel()

    def install(self, session: AuthSession) -> None:
        self.session_handle.swap(session)
        logger.info(f"Authenticated with scopes: {' '.join(sorted(session.scopes))}")

    # Internals

    async def _authenticate(self, request: Request) -> AuthSession:
        async with self.session_handle.exchange_lock:
            session = await self._exchange(request)
            self.install(session)
        return session

    async def _exchange(self, request: Request) -> AuthSession:
        response = await self._fetch(request)
        return session_from_token_response(response.model)

    async def _fetch(self, request: Request) -> Response[Any]:
        try:
            return await self.dispatcher.fetch(request)
        except VimeoRequestError as e:
            raise AuthenticationError(e.kind, e.message) from e

