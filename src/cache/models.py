# src/cache/models.py — v2
"""Cache domain models: CacheKey, CacheEntry."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from filepreview.core.models import ClassifiedContent

# (locator, display_name)
CacheKey = tuple[str, str]


class CacheEntry(BaseModel):
    """Classified content for one (locator, display_name) pair.

    Written once per successful resolution and replaced wholesale when stale.
    """

    model_config = ConfigDict(frozen=True)

    content: ClassifiedContent = Field(discriminator="kind")
    mime_type: str
    timestamp: float

    def age(self, now: float) -> float:
        return now - self.timestamp
