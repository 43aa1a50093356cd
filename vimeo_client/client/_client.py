import base64
import logging
import os
from pathlib import Path
from typing import Any, AsyncIterator, Iterable

import httpx

from vimeo_client import (
    DEFAULT_VIMEO_BASE_URL,
    DEFAULT_VIMEO_CACHE,
    VIMEO_ACCESS_TOKEN_NAME,
    VIMEO_BASE_URL_NAME,
    VIMEO_CACHE_NAME,
    VIMEO_CLIENT_ID_NAME,
    VIMEO_CLIENT_SECRET_NAME,
)
from vimeo_client.auth.controller import AuthenticationController
from vimeo_client.auth.session import AuthSessionHandle
from vimeo_client.client._dispatcher import Dispatcher, RetrySettings
from vimeo_client.client.cache import CacheStore, FileCacheStore
from vimeo_client.client.decoder import Decoder
from vimeo_client.client.transport import DEFAULT_TIMEOUT, HTTPXTransport, SessionAuth
from vimeo_client.types.auth_session import AuthSession
from vimeo_client.types.request import HTTPMethod, Request
from vimeo_client.types.response import Response
from vimeo_client.types.scope import Scope

logger = logging.getLogger(__name__)

error_credentials_missing_msg = (
    "The Vimeo application credentials are not set. "
    + "Please provide them as arguments or "
    + f"set the `{VIMEO_CLIENT_ID_NAME}` and `{VIMEO_CLIENT_SECRET_NAME}` "
    + "environment variables."
)


def basic_authorization(client_id: str, client_secret: str) -> str:
    credentials = f"{client_id}:{client_secret}".encode("utf-8")
    return f"Basic {base64.b64encode(credentials).decode('ascii')}"


class VimeoClient(httpx.AsyncClient):
    """Async Vimeo API client.

    Requests go through a `Dispatcher` (cache policy, retries, error
    classification); authentication flows live on `client.oauth`.

    Example:
        >>> async with VimeoClient() as client:
        ...     await client.oauth.client_credentials_grant([Scope.PUBLIC])
        ...     async for response in client.execute(request):
        ...         render(response.model)
    """

    def __init__(
        self,
        *,
        client_id: str | None = None,
        client_secret: str | None = None,
        access_token: str | None = None,
        base_url: httpx.URL | str | None = None,
        cache: CacheStore | None = None,
        cache_dir: Path | str | None = None,
        decoder: Decoder | None = None,
        retry_settings: RetrySettings | None = None,
        **kwargs: Any,
    ):
        client_id = client_id or os.getenv(VIMEO_CLIENT_ID_NAME)
        client_secret = client_secret or os.getenv(VIMEO_CLIENT_SECRET_NAME)
        if not client_id or not client_secret:
            raise ValueError(error_credentials_missing_msg)
        self.client_id = client_id

        if base_url is None:
            base_url = os.getenv(VIMEO_BASE_URL_NAME) or DEFAULT_VIMEO_BASE_URL

        if cache is None:
            if cache_dir is None:
                cache_dir = os.getenv(VIMEO_CACHE_NAME) or DEFAULT_VIMEO_CACHE
            cache = FileCacheStore(cache_dir)
        self.response_cache = cache

        # Seed the session from a stored token when one is available
        access_token = access_token or os.getenv(VIMEO_ACCESS_TOKEN_NAME)
        self.session_handle = AuthSessionHandle(
            AuthSession(access_token=access_token) if access_token else None
        )

        auth = SessionAuth(self.session_handle, client_id, client_secret)
        headers = dict(kwargs.pop("headers", None) or {})
        timeout = kwargs.pop("timeout", DEFAULT_TIMEOUT)

        super().__init__(
            base_url=base_url, auth=auth, headers=headers, timeout=timeout, **kwargs
        )

        self.dispatcher = Dispatcher(
            HTTPXTransport(self),
            cache,
            decoder,
            session_handle=self.session_handle,
            retry_settings=retry_settings,
            client_headers={
                "Authorization": basic_authorization(client_id, client_secret)
            },
        )
        self.oauth = AuthenticationController(
            self.dispatcher,
            self.session_handle,
            client_id=client_id,
            base_url=base_url,
        )

    @property
    def session(self) -> AuthSession | None:
        return self.session_handle.current

    def execute(self, request: Request) -> AsyncIterator[Response[Any]]:
        """Yield the responses for `request`; the last one is final."""
        return self.dispatcher.execute(request)

    async def fetch(self, request: Request) -> Response[Any]:
        """Run `request` and return its final response only."""
        return await self.dispatcher.fetch(request)

    async def get_model(
        self,
        path: str,
        model: Any,
        parameters: dict[str, Any] | None = None,
        *,
        scopes: Iterable[Scope] = (),
        **request_kwargs: Any,
    ) -> Any:
        """GET `path` and return the decoded model of the final response."""
        request = Request(
            method=HTTPMethod.GET,
            path=path,
            parameters=parameters or {},
            scopes=frozenset(scopes),
            model=model,
            **request_kwargs,
        )
        logger.debug(f"Fetching {path} as {getattr(model, '__name__', model)}")
        response = await self.fetch(request)
        return response.model
