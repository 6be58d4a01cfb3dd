"""FastAPI dependencies."""

from guardian_sos.services.session_store import SessionStore, session_store
from guardian_sos.services.sms_service import SmsService, get_sms_service


def get_store() -> SessionStore:
    """Dependency for the shared session store. Tests override it."""
    return session_store


def get_notifier() -> SmsService:
    """Dependency for the SMS notifier used for start-of-SOS alerts."""
    return get_sms_service()
