from datetime import datetime, timedelta, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PinCodeState(str, Enum):
    PENDING = "pending"
    AUTHORIZED = "authorized"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not PinCodeState.PENDING


class PinCodeInfo(BaseModel):
    """Payload returned when a device authorization is initiated."""

    model_config = ConfigDict(extra="allow")

    user_code: str = Field(..., min_length=1)
    device_code: str = Field(..., min_length=1)
    activate_link: str = Field(..., min_length=1)
    expires_in: float = Field(..., gt=0, description="Seconds until the code expires")
    interval: float = Field(..., ge=0, description="Minimum seconds between polls")


class PinCodeSession(BaseModel):
    """A pending device authorization the user completes out of band."""

    model_config = ConfigDict(frozen=True)

    user_code: str
    device_code: str
    activate_url: str
    expires_at: datetime
    poll_interval_seconds: float

    @classmethod
    def from_info(
        cls, info: PinCodeInfo, now: datetime | None = None
    ) -> "PinCodeSession":
        now = now or datetime.now(timezone.utc)
        return cls(
            user_code=info.user_code,
            device_code=info.device_code,
            activate_url=info.activate_link,
            expires_at=now + timedelta(seconds=info.expires_in),
            poll_interval_seconds=info.interval,
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(timezone.utc)) >= self.expires_at

    def seconds_remaining(self, now: datetime | None = None) -> float:
        now = now or datetime.now(timezone.utc)
        return max(0.0, (self.expires_at - now).total_seconds())

    @field_validator("expires_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
