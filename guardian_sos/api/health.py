"""Service status endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from guardian_sos.core.deps import get_notifier, get_store
from guardian_sos.services.session_store import SessionStore
from guardian_sos.services.sms_service import SmsService

router = APIRouter(tags=["health"])


@router.get("/health")
def health(
    store: Annotated[SessionStore, Depends(get_store)],
    notifier: Annotated[SmsService, Depends(get_notifier)],
) -> dict:
    """Liveness plus tracked session count and whether SMS alerts can go out."""
    return {
        "status": "ok",
        "sessions": len(store),
        "smsEnabled": notifier.enabled,
    }
