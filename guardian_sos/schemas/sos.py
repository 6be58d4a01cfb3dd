"""SOS session schemas."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from guardian_sos.models.sos_session import CamelModel, Location


class ContactIn(CamelModel):
    """Contact as sent by the client; entries without a phone are dropped."""

    name: str | None = None
    phone: str | None = None


class SosStartRequest(CamelModel):
    # Required fields are checked by the service so missing ones map to 400
    display_name: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    started_at: datetime | None = None
    contacts: list[ContactIn] | None = Field(default=None, description="Emergency contacts to notify by SMS")


class SosStartResponse(CamelModel):
    sos_id: str
    share_token: str


class SosUpdateRequest(CamelModel):
    sos_id: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    updated_at: datetime | None = Field(default=None, description="Defaults to server time")


class SosEndRequest(CamelModel):
    sos_id: str | None = None
    ended_at: datetime | None = Field(default=None, description="Defaults to server time")
    reason: str | None = None


class SuccessResponse(CamelModel):
    success: bool = True


class LiveSnapshotResponse(CamelModel):
    """Public view of a session: no share token, no contacts."""

    sos_id: str
    display_name: str
    status: Literal["active", "ended"]
    started_at: datetime
    last_location: Location | None
    location_history: list[Location]
    ended_at: datetime | None
    end_reason: str | None
    expires_at: datetime
