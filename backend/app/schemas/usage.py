"""Storage usage schemas."""

from datetime import datetime

from pydantic import Field, field_serializer, field_validator

from app.constants import STORAGE_QUOTA_BYTES
from app.schemas.files import CamelModel


class CategoryUsage(CamelModel):
    """Bytes used by one file category and its most recent update."""
    size: int = 0
    latest_date: datetime | None = None

    @field_validator("latest_date", mode="before")
    @classmethod
    def parse_latest_date(cls, value):
        return value or None

    @field_serializer("latest_date")
    def serialize_latest_date(self, value: datetime | None) -> str:
        return value.isoformat() if value else ""


class UsageSummary(CamelModel):
    """Per-user storage accounting snapshot, recomputed on every request."""
    image: CategoryUsage = Field(default_factory=CategoryUsage)
    document: CategoryUsage = Field(default_factory=CategoryUsage)
    video: CategoryUsage = Field(default_factory=CategoryUsage)
    audio: CategoryUsage = Field(default_factory=CategoryUsage)
    other: CategoryUsage = Field(default_factory=CategoryUsage)
    used: int = 0
    all: int = STORAGE_QUOTA_BYTES


class ChartSegment(CamelModel):
    name: str
    value: int
    color: str


class UsageChart(CamelModel):
    """Two-segment used/available view of a user's quota."""
    used: int
    available: int
    total: int
    segments: list[ChartSegment]
    used_label: str
    total_label: str
    used_percent: float
