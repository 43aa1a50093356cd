from typing import Any, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

from vimeo_client.client.exceptions import DecodeError
from vimeo_client.errors import LocalErrorCode

T = TypeVar("T")


class Decoder(Protocol):
    def decode(self, payload: dict[str, Any], target: Any) -> Any:
        """Turn a raw payload into `target`; raise `DecodeError` on failure."""
        ...


class PydanticDecoder:
    """Decodes payloads with pydantic; any type a `TypeAdapter` accepts works."""

    def __init__(self) -> None:
        self._adapters: dict[Any, TypeAdapter[Any]] = {}

    def _adapter(self, target: Any) -> TypeAdapter[Any]:
        try:
            return self._adapters[target]
        except (KeyError, TypeError):
            pass
        adapter = TypeAdapter(target)
        try:
            self._adapters[target] = adapter
        except TypeError:
            # Unhashable target, skip memoization
            pass
        return adapter

    def decode(self, payload: dict[str, Any], target: type[T] | Any) -> T:
        if target is None:
            raise DecodeError(LocalErrorCode.NO_MAPPING_CLASS)
        if not isinstance(payload, dict):
            raise DecodeError(
                LocalErrorCode.INVALID_RESPONSE_DICTIONARY,
                f"Expected a JSON object, got {type(payload).__name__}",
            )
        try:
            adapter = self._adapter(target)
        except Exception as e:
            raise DecodeError(
                LocalErrorCode.NO_MAPPING_CLASS, f"Cannot decode into {target!r}: {e}"
            ) from e
        try:
            return adapter.validate_python(payload)
        except ValidationError as e:
            raise DecodeError(
                LocalErrorCode.MAPPING_FAILED,
                f"Mapping into {getattr(target, '__name__', target)!r} failed: "
                f"{e.error_count()} error(s)",
            ) from e
