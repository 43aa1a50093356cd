from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from vimeo_client.types.scope import Scope
from vimeo_client.utils.fingerprint import fingerprint as request_fingerprint


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class CacheFetchPolicy(str, Enum):
    """Where a request looks for its response, and in which order."""

    NETWORK_ONLY = "network_only"
    CACHE_ONLY = "cache_only"
    CACHE_THEN_NETWORK = "cache_then_network"

    @property
    def reads_cache(self) -> bool:
        return self is not CacheFetchPolicy.NETWORK_ONLY

    @property
    def uses_network(self) -> bool:
        return self is not CacheFetchPolicy.CACHE_ONLY


class RetryPolicy(BaseModel):
    """Number of attempts a failed network call gets beyond the first one."""

    model_config = ConfigDict(frozen=True)

    attempts: int = Field(default=0, ge=0)

    @classmethod
    def none(cls) -> "RetryPolicy":
        return cls(attempts=0)

    @classmethod
    def fixed(cls, attempts: int) -> "RetryPolicy":
        return cls(attempts=attempts)

    @property
    def total_attempts(self) -> int:
        return self.attempts + 1


TRY_THREE_TIMES: Final[RetryPolicy] = RetryPolicy.fixed(3)


class Request(BaseModel):
    """Immutable description of one logical API call.

    Cache defaults follow the method: GET requests read the cache before the
    network and store their responses, every other method goes straight to
    the network and is never cached.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    method: HTTPMethod = HTTPMethod.GET
    path: str = Field(..., min_length=1)
    parameters: dict[str, Any] = Field(default_factory=dict)
    scopes: frozenset[Scope] = Field(
        default_factory=frozenset, description="Scopes the session must hold"
    )
    cache_fetch_policy: CacheFetchPolicy
    retry_policy: RetryPolicy = Field(default_factory=RetryPolicy.none)
    should_cache_response: bool
    authenticates_client: bool = Field(
        default=False,
        description="Sent with the application credentials instead of the session token",  # noqa: E501
    )
    model: Any = Field(
        default=None, description="Target type the response payload decodes into"
    )

    @model_validator(mode="before")
    @classmethod
    def _method_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        is_get = HTTPMethod(data.get("method", HTTPMethod.GET)) is HTTPMethod.GET
        if data.get("cache_fetch_policy") is None:
            data["cache_fetch_policy"] = (
                CacheFetchPolicy.CACHE_THEN_NETWORK
                if is_get
                else CacheFetchPolicy.NETWORK_ONLY
            )
        if data.get("should_cache_response") is None:
            data["should_cache_response"] = is_get
        return data

    @field_validator("path")
    @classmethod
    def _path_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("path must not be blank")
        return value

    @property
    def fingerprint(self) -> str:
        return request_fingerprint(self.method.value, self.path, self.parameters)
