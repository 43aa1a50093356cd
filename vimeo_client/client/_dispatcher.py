import json
import logging
from typing import TYPE_CHECKING, Any, AsyncIterator, Mapping

import httpx
from pydantic import BaseModel, ConfigDict, Field
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from vimeo_client import VIMEO_ACCEPT_HEADER
from vimeo_client.client.cache import CacheStore
from vimeo_client.client.decoder import Decoder, PydanticDecoder
from vimeo_client.client.exceptions import (
    DecodeError,
    TransportError,
    VimeoRequestError,
)
from vimeo_client.client.transport import Transport
from vimeo_client.errors import LocalErrorCode, classify, local_error
from vimeo_client.types.request import CacheFetchPolicy, HTTPMethod, Request
from vimeo_client.types.response import Response, next_page_path_from

if TYPE_CHECKING:
    from vimeo_client.auth.session import AuthSessionHandle

logger = logging.getLogger(__name__)

QUERY_METHODS = frozenset({HTTPMethod.GET, HTTPMethod.DELETE})


class RetrySettings(BaseModel):
    """Capped exponential backoff between retry attempts, in seconds."""

    model_config = ConfigDict(frozen=True)

    multiplier: float = Field(default=1.0, ge=0)
    min: float = Field(default=1.0, ge=0)
    max: float = Field(default=30.0, ge=0)

    def wait(self) -> wait_exponential:
        return wait_exponential(multiplier=self.multiplier, min=self.min, max=self.max)


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, VimeoRequestError) and exc.kind.is_retryable


def _query_params(parameters: Mapping[str, Any]) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for key, value in parameters.items():
        if isinstance(value, Mapping):
            params[key] = json.dumps(value, sort_keys=True)
        elif isinstance(value, (set, frozenset)):
            params[key] = sorted(value)
        elif isinstance(value, (list, tuple)):
            params[key] = [
                json.dumps(v) if isinstance(v, (Mapping, list)) else v for v in value
            ]
        else:
            params[key] = value
    return params


def _parse_body(body: bytes) -> tuple[dict[str, Any] | None, bool]:
    """Returns the decoded JSON object and whether the body was a valid one."""
    if not body.strip():
        return {}, True
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None, False
    if not isinstance(data, dict):
        return None, False
    return data, True


class Dispatcher:
    """Executes `Request` descriptors against a cache store and a transport.

    `execute` is an async generator: under cache-then-network a cached
    response (not final) can arrive before the network one (final).
    """

    def __init__(
        self,
        transport: Transport,
        cache: CacheStore | None = None,
        decoder: Decoder | None = None,
        *,
        session_handle: "AuthSessionHandle | None" = None,
        retry_settings: RetrySettings | None = None,
        headers: Mapping[str, str] | None = None,
        client_headers: Mapping[str, str] | None = None,
    ):
        self.transport = transport
        self.cache = cache
        self.decoder = decoder or PydanticDecoder()
        self.session_handle = session_handle
        self.retry_settings = retry_settings or RetrySettings()
        self.headers = {"Accept": VIMEO_ACCEPT_HEADER, **(headers or {})}
        # Sent instead of the session credentials on client-authenticated calls
        self.client_headers = dict(client_headers or {})

    async def execute(self, request: Request) -> AsyncIterator[Response[Any]]:
        self._check_scopes(request)

        fingerprint = request.fingerprint
        policy = request.cache_fetch_policy

        if policy.reads_cache:
            cached = await self._cached_response(request, fingerprint)
            if policy is CacheFetchPolicy.CACHE_ONLY:
                if cached is None:
                    logger.debug(f"Cache miss for cache-only {request.path}")
                    raise VimeoRequestError(
                        local_error(LocalErrorCode.CACHED_RESPONSE_NOT_FOUND)
                    )
                yield cached
                return
            if cached is not None:
                yield cached

        payload = await self._send_with_retry(request)
        response = self._decode(request, payload, is_cached=False, is_final=True)

        if request.should_cache_response and self.cache is not None:
            try:
                await self.cache.put(fingerprint, payload)
            except OSError as e:
                logger.warning(f"Failed to cache response for {request.path}: {e}")

        yield response

    async def fetch(self, request: Request) -> Response[Any]:
        """Run `request` and return only its final response."""
        final: Response[Any] | None = None
        async for response in self.execute(request):
            final = response
        if final is None:
            raise VimeoRequestError(local_error(LocalErrorCode.NO_RESPONSE))
        return final

    def _check_scopes(self, request: Request) -> None:
        if not request.scopes or self.session_handle is None:
            return
        required = {scope.value for scope in request.scopes}
        session = self.session_handle.current
        if session is None:
            raise VimeoRequestError(
                local_error(
                    LocalErrorCode.REQUEST_MALFORMED,
                    f"{request.path} requires an authenticated session",
                )
            )
        if session.scopes and not session.has_scopes(required):
            missing = ", ".join(sorted(required - session.scopes))
            raise VimeoRequestError(
                local_error(
                    LocalErrorCode.REQUEST_MALFORMED,
                    f"{request.path} requires scopes the session lacks: {missing}",
                )
            )

    async def _cached_response(
        self, request: Request, fingerprint: str
    ) -> Response[Any] | None:
        if self.cache is None:
            return None

        payload = await self.cache.get(fingerprint)
        if payload is None:
            logger.debug(f"Cache miss for {request.method.value} {request.path}")
            return None

        logger.debug(f"Cache hit for {request.method.value} {request.path}")
        is_final = request.cache_fetch_policy is CacheFetchPolicy.CACHE_ONLY
        try:
            return self._decode(request, payload, is_cached=True, is_final=is_final)
        except VimeoRequestError as e:
            if is_final:
                raise
            logger.warning(f"Ignoring undecodable cache entry for {request.path}: {e}")
            return None

    def _decode(
        self,
        request: Request,
        payload: dict[str, Any],
        *,
        is_cached: bool,
        is_final: bool,
    ) -> Response[Any]:
        try:
            model = self.decoder.decode(payload, request.model)
        except DecodeError as e:
            raise VimeoRequestError(
                local_error(e.code, e.message, underlying=payload)
            ) from e
        return Response(
            model=model,
            raw_payload=payload,
            is_cached_response=is_cached,
            is_final_response=is_final,
            next_page_path=next_page_path_from(payload),
        )

    async def _send_with_retry(self, request: Request) -> dict[str, Any]:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(request.retry_policy.total_attempts),
            wait=self.retry_settings.wait(),
            retry=retry_if_exception(_is_retryable),
            before_sleep=self._log_retry,
            reraise=True,
        )
        try:
            return await retrying(self._send, request)
        except VimeoRequestError as e:
            if e.kind.is_retryable and request.retry_policy.attempts:
                logger.error(
                    f"{request.method.value} {request.path} failed after "
                    f"{request.retry_policy.total_attempts} attempts: {e}"
                )
            raise

    async def _send(self, request: Request) -> dict[str, Any]:
        method = request.method.value
        headers = dict(self.headers)
        if request.authenticates_client:
            headers.update(self.client_headers)
        body: bytes | None = None

        try:
            if request.method in QUERY_METHODS:
                params = _query_params(request.parameters)
                url = str(httpx.URL(request.path, params=params))
            else:
                url = request.path
                if request.parameters:
                    body = json.dumps(request.parameters).encode("utf-8")
                    headers["Content-Type"] = "application/json"
        except (TypeError, ValueError) as e:
            raise VimeoRequestError(
                local_error(
                    LocalErrorCode.REQUEST_MALFORMED,
                    f"Parameters for {request.path} cannot be encoded: {e}",
                    underlying=e,
                )
            ) from e

        logger.debug(f"Sending {method} {request.path}")
        try:
            response = await self.transport.send(method, url, headers, body)
        except TransportError as e:
            raise VimeoRequestError(classify(transport_error=e)) from e

        payload, is_valid = _parse_body(response.body)

        if not response.is_success:
            raise VimeoRequestError(
                classify(http_status=response.status_code, payload=payload)
            )

        if not is_valid or payload is None:
            raise VimeoRequestError(
                local_error(
                    LocalErrorCode.INVALID_RESPONSE_DICTIONARY,
                    http_status=response.status_code,
                    underlying=response.body,
                )
            )

        return payload

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        sleep = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            f"Attempt {retry_state.attempt_number} failed: {exc}. "
            f"Retrying in {sleep:.1f}s..."
        )
