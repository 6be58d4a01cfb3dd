"""SOS session lifecycle service."""

from __future__ import annotations

import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from guardian_sos.core.config import settings
from guardian_sos.core.sos_policies import (
    DEFAULT_END_REASON,
    LIVE_PAGE_PATH,
    MAPS_URL_TEMPLATE,
    SHARE_TOKEN_BYTES,
)
from guardian_sos.models.sos_session import Contact, Location, SosSession, ensure_utc
from guardian_sos.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class SosServiceError(Exception):
    """Base error for SOS lookups."""


class SosNotFoundError(SosServiceError):
    """Unknown sos_id or share token."""


class LiveLinkExpiredError(SosServiceError):
    """Share token is past its expiry."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_share_token() -> str:
    """Random hex token (32 chars for 16 bytes)."""
    return secrets.token_hex(SHARE_TOKEN_BYTES)


def normalize_contacts(raw: list[dict[str, Any]] | None) -> list[Contact]:
    """Trim names/phones, drop entries without a phone and repeats of an earlier phone."""
    contacts = []
    seen: set[str] = set()
    for entry in raw or []:
        phone = (entry.get("phone") or "").strip()
        if not phone or phone in seen:
            continue
        seen.add(phone)
        name = (entry.get("name") or "").strip() or None
        contacts.append(Contact(name=name, phone=phone))
    return contacts


def live_url(token: str, base_url: str | None = None) -> str:
    base = (base_url or settings.public_base_url).rstrip("/")
    return base + LIVE_PAGE_PATH.format(token=token)


def build_alert_message(session: SosSession, base_url: str | None = None) -> str:
    """Compose the SMS sent to contacts when an SOS starts."""
    lines = [f"SOS ALERT from {session.display_name}."]
    loc = session.last_location
    if loc is not None and loc.latitude is not None and loc.longitude is not None:
        map_link = MAPS_URL_TEMPLATE.format(latitude=loc.latitude, longitude=loc.longitude)
        lines.append(f"Last known location: {map_link}")
    else:
        lines.append("Location unknown.")
    lines.append(f"Live tracking: {live_url(session.share_token, base_url)}")
    return "\n".join(lines)


def start_sos(
    store: SessionStore,
    display_name: str | None,
    started_at: datetime | None,
    latitude: float | None = None,
    longitude: float | None = None,
    contacts: list[dict[str, Any]] | None = None,
) -> SosSession:
    """Create and store a new active session.

    An initial location is recorded only when both coordinates are given.
    Raises ValueError before touching the store if display name or start time is missing.
    """
    if not display_name or not display_name.strip() or started_at is None:
        raise ValueError("displayName and startedAt required")

    started = ensure_utc(started_at)
    ttl = timedelta(hours=settings.live_link_ttl_hours)

    session = SosSession(
        sos_id=str(uuid.uuid4()),
        display_name=display_name,
        started_at=started,
        share_token=generate_share_token(),
        expires_at=_utcnow() + ttl,
        contacts=normalize_contacts(contacts),
    )
    if latitude is not None and longitude is not None:
        session.record_location(Location(latitude=latitude, longitude=longitude, timestamp=started))

    store.add(session)
    logger.info("SOS started: %s (%s) contacts=%s", session.sos_id, display_name, len(session.contacts))
    return session


def _require(store: SessionStore, sos_id: str | None) -> SosSession:
    if not sos_id:
        raise ValueError("sosId required")
    session = store.get(sos_id)
    if session is None:
        raise SosNotFoundError("SOS not found")
    return session


def update_location(
    store: SessionStore,
    sos_id: str | None,
    latitude: float | None,
    longitude: float | None,
    updated_at: datetime | None = None,
) -> SosSession:
    """Append a position fix. Ended sessions still accept updates."""
    session = _require(store, sos_id)
    timestamp = ensure_utc(updated_at) if updated_at is not None else _utcnow()
    session.record_location(Location(latitude=latitude, longitude=longitude, timestamp=timestamp))
    logger.info("SOS update: %s -> %s, %s", sos_id, latitude, longitude)
    return session


def end_sos(
    store: SessionStore,
    sos_id: str | None,
    ended_at: datetime | None = None,
    reason: str | None = None,
) -> SosSession:
    """Mark a session ended. Ending twice just re-applies the values."""
    session = _require(store, sos_id)
    session.status = "ended"
    session.end_reason = reason or DEFAULT_END_REASON
    session.ended_at = ensure_utc(ended_at) if ended_at is not None else _utcnow()
    logger.info("SOS ended: %s (reason: %s)", sos_id, session.end_reason)
    return session


def get_live_session(store: SessionStore, token: str) -> SosSession:
    """Resolve a share token for the live view. Expiry applies even to active sessions."""
    session = store.get_by_token(token)
    if session is None:
        raise SosNotFoundError("Live link not found")
    if session.is_expired(_utcnow()):
        raise LiveLinkExpiredError("Live link expired")
    return session
