"""Pydantic data models — the shared business objects.

Both the MCP tools and the plain HTTP routes serialize these models, so the
camelCase wire names live here and nowhere else.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# A raw upstream pin. Field shapes vary between pages, so records stay plain
# mappings rather than a schema.
RawRecord = dict[str, Any]


class SortMode(str, Enum):
    """Ranking orders understood by the ranker."""

    LIKES = "likes"
    SAVES = "saves"
    COMBINED = "combined"

    @classmethod
    def coerce(cls, value: str | SortMode | None) -> SortMode:
        """Map any free-form sort string onto a mode; unknown means combined."""
        if isinstance(value, SortMode):
            return value
        try:
            return cls(value or "")
        except ValueError:
            return cls.COMBINED


class BoardReference(BaseModel):
    """An (owner, slug) pair identifying one public board."""

    model_config = ConfigDict(frozen=True)

    owner: str
    slug: str

    @field_validator("owner", "slug")
    @classmethod
    def _single_segment(cls, value: str) -> str:
        if not value:
            raise ValueError("board segments must be non-empty")
        if "/" in value:
            raise ValueError("board segments must not contain '/'")
        return value


class PinSummary(BaseModel):
    """Canonical, display-ready view of one pin."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str = ""
    description: str = ""
    image_url: str = Field(alias="imageUrl", min_length=1)
    pin_url: str = Field(alias="pinUrl")
    likes: int = Field(default=0, ge=0)
    saves: int = Field(default=0, ge=0)

    @property
    def combined_score(self) -> int:
        """Default ranking metric: likes weigh twice as much as saves."""
        return 2 * self.likes + self.saves


class BoardInfo(BaseModel):
    """Board metadata echoed back alongside the ranked pins."""

    model_config = ConfigDict(frozen=True)

    name: str
    owner: str
    url: str


class ResultSet(BaseModel):
    """Response payload of one aggregation request. Never persisted."""

    model_config = ConfigDict(frozen=True)

    board: BoardInfo
    pins: list[PinSummary]

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict using the wire (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)


class RelayedAsset(BaseModel):
    """A single image fetched through the relay, with its caching directive."""

    model_config = ConfigDict(frozen=True)

    content: bytes
    content_type: str
    cache_control: str
