"""SOS session lifecycle API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status

from guardian_sos.core.config import settings
from guardian_sos.core.deps import get_notifier, get_store
from guardian_sos.models.sos_session import SosSession
from guardian_sos.schemas.sos import (
    SosEndRequest,
    SosStartRequest,
    SosStartResponse,
    SosUpdateRequest,
    SuccessResponse,
)
from guardian_sos.services.session_store import SessionStore
from guardian_sos.services.sms_service import SmsService
from guardian_sos.services.sos_service import (
    SosNotFoundError,
    build_alert_message,
    end_sos,
    start_sos,
    update_location,
)

router = APIRouter(prefix=f"{settings.api_prefix}/sos", tags=["sos"])

StoreDep = Annotated[SessionStore, Depends(get_store)]


@router.post("/start", response_model=SosStartResponse)
def start(
    data: SosStartRequest,
    background_tasks: BackgroundTasks,
    store: StoreDep,
    notifier: Annotated[SmsService, Depends(get_notifier)],
):
    """Start an SOS session and text the live link to its contacts."""
    contacts = [c.model_dump() for c in data.contacts or []]
    try:
        session = start_sos(
            store,
            display_name=data.display_name,
            started_at=data.started_at,
            latitude=data.latitude,
            longitude=data.longitude,
            contacts=contacts,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    _schedule_alert_broadcast(background_tasks, notifier, session)
    return SosStartResponse(sos_id=session.sos_id, share_token=session.share_token)


@router.post("/update", response_model=SuccessResponse)
def update(data: SosUpdateRequest, store: StoreDep):
    """Record a new position. Accepted even after the session has ended."""
    try:
        update_location(store, data.sos_id, data.latitude, data.longitude, data.updated_at)
    except SosNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return SuccessResponse()


@router.post("/end", response_model=SuccessResponse)
def end(data: SosEndRequest, store: StoreDep):
    """End an SOS session."""
    try:
        end_sos(store, data.sos_id, data.ended_at, data.reason)
    except SosNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return SuccessResponse()


# ---------- SMS broadcast helper ----------


def _schedule_alert_broadcast(
    background_tasks: BackgroundTasks,
    notifier: SmsService,
    session: SosSession,
) -> None:
    """Queue the alert SMS to every contact; runs after the response is sent."""
    phones = [c.phone for c in session.contacts]
    if not phones:
        return
    message = build_alert_message(session, settings.public_base_url)
    background_tasks.add_task(notifier.broadcast, phones, message)
