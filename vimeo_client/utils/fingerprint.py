import hashlib
import json
from typing import Any, Mapping


def normalize_path(path: str) -> str:
    return path.strip().strip("/")


def _dumps(value: Any) -> str:
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def canonicalize(value: Any) -> Any:
    """Replace sets with sorted lists so the result has one JSON form."""
    if isinstance(value, Mapping):
        return {str(k): canonicalize(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted((canonicalize(v) for v in value), key=_dumps)
    if isinstance(value, (list, tuple)):
        return [canonicalize(v) for v in value]
    return value


def fingerprint(method: str, path: str, parameters: Mapping[str, Any]) -> str:
    """Stable cache key for a request.

    Mapping keys are sorted at every depth, list order is kept and sets are
    ordered by value, so the key does not depend on the hash seed.
    """
    canonical = _dumps(
        [method.upper(), normalize_path(path), canonicalize(parameters)]
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
