"""SOS session model."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def ensure_utc(value: datetime) -> datetime:
    """Normalize a timestamp to an aware UTC instant. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Location(CamelModel):
    """A single position fix."""

    latitude: float | None = None
    longitude: float | None = None
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class Contact(CamelModel):
    """Emergency contact notified at session start."""

    name: str | None = None
    phone: str


class SosSession(CamelModel):
    """One tracked emergency event, from start to end."""

    sos_id: str
    display_name: str
    status: Literal["active", "ended"] = "active"
    started_at: datetime
    last_location: Location | None = None
    location_history: list[Location] = Field(default_factory=list)
    ended_at: datetime | None = None
    end_reason: str | None = None
    share_token: str
    expires_at: datetime
    contacts: list[Contact] = Field(default_factory=list)

    @field_validator("started_at", "ended_at", "expires_at")
    @classmethod
    def normalize_timestamps(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None

    def record_location(self, location: Location) -> None:
        """Replace the last known position and append it to the history."""
        self.last_location = location
        self.location_history.append(location)

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
