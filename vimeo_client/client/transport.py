"""Network transport used by the dispatcher."""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generator, Mapping, Protocol

import httpx

from vimeo_client.client.exceptions import TransportError

if TYPE_CHECKING:
    from vimeo_client.auth.session import AuthSessionHandle

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(timeout=30.0, connect=10.0)


@dataclass(frozen=True)
class TransportResponse:
    """
    What came back over the wire.

    Attributes:
        status_code: HTTP status code
        headers: Response headers
        body: Raw response body
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None,
    ) -> TransportResponse:
        """Send one HTTP request; raise `TransportError` if nothing came back."""
        ...


class SessionAuth(httpx.Auth):
    """Bearer auth from the current session, client basic auth before one exists."""

    def __init__(
        self,
        session_handle: "AuthSessionHandle",
        client_id: str,
        client_secret: str,
    ):
        self.session_handle = session_handle
        self._client_auth = httpx.BasicAuth(client_id, client_secret)

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, None, None]:
        if "Authorization" in request.headers:
            yield request
        elif (session := self.session_handle.current) is not None:
            request.headers["Authorization"] = f"Bearer {session.access_token}"
            yield request
        else:
            yield from self._client_auth.auth_flow(request)


class HTTPXTransport:
    """`Transport` backed by an `httpx.AsyncClient`."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        base_url: httpx.URL | str = "",
        auth: httpx.Auth | None = None,
        timeout: httpx.Timeout | float | None = None,
        **kwargs: Any,
    ):
        if client is None:
            client = httpx.AsyncClient(
                base_url=base_url,
                auth=auth,
                timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
                **kwargs,
            )
        self.client = client

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None,
    ) -> TransportResponse:
        try:
            response = await self.client.request(
                method, url, headers=dict(headers), content=body
            )
        except httpx.RequestError as e:
            # DecodingError and TooManyRedirects are not httpx.TransportError
            logger.debug(f"{method} {url} failed without a response: {e!r}")
            raise TransportError(str(e) or type(e).__name__) from e

        return TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )

    async def aclose(self) -> None:
        await self.client.aclose()
