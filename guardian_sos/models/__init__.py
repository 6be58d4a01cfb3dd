"""SOS session models."""

from __future__ import annotations

from guardian_sos.models.sos_session import Contact, Location, SosSession

__all__ = [
    "Contact",
    "Location",
    "SosSession",
]
