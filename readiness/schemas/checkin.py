"""
Check-in schemas.

CheckInRecord is the stored record and the persisted blob format:
    [{"id": "...", "date": "2026-02-20T07:30:00+01:00",
      "sleepQuality": 4, "stressLevel": 2, "muscleSoreness": 1,
      "motivation": 5, "timeAvailable": 45}, ...]

Blob keys stay camelCase so tooling written against the mobile app's
payload keeps working; decoding also accepts the snake_case names.

POST /checkins            → CheckInCreate → CheckInResponse
GET  /checkins/recent     → CheckInListResponse
GET  /checkins/today      → CheckInResponse
GET  /checkins/today/status → TodayStatusResponse
"""
from __future__ import annotations

import datetime as _dt
from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

from readiness.core.clock import SystemClock, calendar_timezone, local_day, localize


def _now() -> datetime:
    return SystemClock().now()


# ---------------------------------------------------------------------------
# Stored record
# ---------------------------------------------------------------------------

class CheckInRecord(BaseModel):
    """One day's self-assessment. Immutable; an update is a replacement.

    Metric ranges (1-5, minutes 0-120) are semantic only and are not
    enforced here: out-of-range values flow through scoring and clamping.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    id: UUID = Field(default_factory=uuid4)
    date: datetime = Field(default_factory=_now)
    sleep_quality: int
    stress_level: int
    muscle_soreness: int
    motivation: int
    time_available: int

    @field_validator("date")
    @classmethod
    def attach_calendar_timezone(cls, v: datetime) -> datetime:
        return localize(v, calendar_timezone())

    def calendar_day(self, tz: Optional[_dt.tzinfo] = None) -> _dt.date:
        """Local date of this check-in. `tz=None` uses the calendar timezone."""
        return local_day(self.date, tz if tz is not None else calendar_timezone())

    @property
    def formatted_date(self) -> str:
        """Medium-style date for display, e.g. "Jan 15, 2024"."""
        d = self.date
        return f"{d:%b} {d.day}, {d.year}"


_collection_adapter = TypeAdapter(list[CheckInRecord])


def encode_check_ins(records: list[CheckInRecord]) -> bytes:
    return _collection_adapter.dump_json(records, by_alias=True)


def decode_check_ins(data: bytes) -> list[CheckInRecord]:
    """Raises pydantic.ValidationError on malformed JSON or wrong shape."""
    return _collection_adapter.validate_json(data)


# ---------------------------------------------------------------------------
# API schemas
# ---------------------------------------------------------------------------

Rating = Annotated[int, Field(ge=1, le=5)]


class CheckInCreate(BaseModel):
    """Five slider values from the check-in form."""

    sleep_quality: Rating = Field(description="1 (poor) to 5 (great).", examples=[4])
    stress_level: Rating = Field(description="1 (calm) to 5 (very stressed).", examples=[2])
    muscle_soreness: Rating = Field(description="1 (fresh) to 5 (very sore).", examples=[2])
    motivation: Rating = Field(description="1 (none) to 5 (fired up).", examples=[4])
    time_available: int = Field(ge=0, le=120, description="Minutes available to train.", examples=[45])
    date: Optional[datetime] = Field(
        default=None,
        description="Timestamp of the check-in. Defaults to now.",
        examples=["2026-02-20T07:30:00+01:00"],
    )


class ReadinessOut(BaseModel):
    score: int = Field(description="0-100.")
    zone: str = Field(description='"train_hard" | "train_moderate" | "recovery"')
    recommendation: str
    color: str
    explanation: str


class CheckInResponse(BaseModel):
    id: UUID
    date: str = Field(description="ISO timestamp of the check-in.")
    formatted_date: str
    sleep_quality: int
    stress_level: int
    muscle_soreness: int
    motivation: int
    time_available: int
    readiness: ReadinessOut


class CheckInListResponse(BaseModel):
    total: int
    items: list[CheckInResponse]


class TodayStatusResponse(BaseModel):
    day: str
    has_check_in: bool
