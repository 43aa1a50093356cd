from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CacheEntry(BaseModel):
    """On-disk envelope for a cached response payload.

    Tolerates extra keys so older or newer cache files still load.
    """

    model_config: ConfigDict = ConfigDict(extra="allow")

    version: str = Field(default="1.0", description="Cache format version")
    fingerprint: str = Field(..., description="Request fingerprint")
    created_at: datetime = Field(..., description="Cache write timestamp")
    payload: dict[str, Any] = Field(
        default_factory=dict, description="Raw response payload"
    )
