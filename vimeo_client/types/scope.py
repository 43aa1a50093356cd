from enum import Enum
from typing import Iterable


class Scope(str, Enum):
    """Permissions an application can request from the API."""

    PUBLIC = "public"
    PRIVATE = "private"
    PURCHASED = "purchased"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    INTERACT = "interact"
    UPLOAD = "upload"

    @staticmethod
    def combine(scopes: Iterable["Scope | str"]) -> str:
        return " ".join(Scope(scope).value for scope in scopes)

    @staticmethod
    def parse(value: str | None) -> frozenset[str]:
        if not value:
            return frozenset()
        return frozenset(value.split())
