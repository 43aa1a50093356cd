from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AuthSession(BaseModel):
    """An authenticated session produced by a successful grant exchange.

    Never mutated in place; re-authentication builds a new instance.
    """

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(..., min_length=1)
    token_type: str = "bearer"
    scopes: frozenset[str] = Field(default_factory=frozenset)
    user: dict[str, Any] | None = None

    @property
    def is_authenticated_user(self) -> bool:
        return self.user is not None

    def has_scopes(self, required: "frozenset[str] | set[str]") -> bool:
        return set(required) <= self.scopes

    def __repr__(self) -> str:
        return (
            f"AuthSession(token_type={self.token_type!r}, "
            f"scopes={sorted(self.scopes)!r}, user={'yes' if self.user else 'no'})"
        )


class TokenResponse(BaseModel):
    """Raw shape of a grant exchange response; every field may be absent."""

    model_config = ConfigDict(extra="allow")

    access_token: str | None = None
    token_type: str | None = None
    scope: str | None = None
    user: dict[str, Any] | None = None


class NullResponse(BaseModel):
    """Model for endpoints that answer with an empty body."""

    model_config = ConfigDict(extra="allow")
