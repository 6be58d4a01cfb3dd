"""Share-token live view: JSON snapshot and observer page."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse

from guardian_sos.core.config import settings
from guardian_sos.core.deps import get_store
from guardian_sos.schemas.sos import LiveSnapshotResponse
from guardian_sos.services.session_store import SessionStore
from guardian_sos.services.sos_service import LiveLinkExpiredError, SosNotFoundError, get_live_session

LIVE_PAGE = Path(__file__).resolve().parent.parent / "static" / "live.html"

router = APIRouter(tags=["live"])


@router.get(f"{settings.api_prefix}/live/token/{{token}}", response_model=LiveSnapshotResponse)
def live_snapshot(token: str, store: Annotated[SessionStore, Depends(get_store)]):
    """Public session snapshot for a share token. 404 if unknown, 410 if expired."""
    try:
        session = get_live_session(store, token)
    except SosNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except LiveLinkExpiredError as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    return LiveSnapshotResponse.model_validate(
        session.model_dump(exclude={"share_token", "contacts"})
    )


@router.get("/live/{token}", response_class=HTMLResponse, include_in_schema=False)
def live_page(token: str) -> str:
    # Not validated here; the page script fetches the snapshot endpoint
    return LIVE_PAGE.read_text(encoding="utf-8").replace("__API_PREFIX__", settings.api_prefix)
