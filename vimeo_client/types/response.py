from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from vimeo_client.types.request import Request

ModelT = TypeVar("ModelT")


class Response(BaseModel, Generic[ModelT]):
    """A successful result delivered for a `Request`.

    Under a cache-then-network policy a request can yield two of these: a
    cached one first, then the authoritative network one. Only the last one
    is marked final.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    model: ModelT
    raw_payload: dict[str, Any] = Field(default_factory=dict)
    is_cached_response: bool = False
    is_final_response: bool = True
    next_page_path: str | None = Field(
        default=None, description="(Not yet implemented) path of the next page"
    )

    @property
    def next_page_request(self) -> "Request | None":
        """(Not yet implemented) request for the next page of a collection."""
        return None


def next_page_path_from(payload: dict[str, Any]) -> str | None:
    paging = payload.get("paging")
    if isinstance(paging, dict) and isinstance(paging.get("next"), str):
        return paging["next"]
    return None
