"""In-memory SOS session store.

Sessions live in a plain dict keyed by sos_id, with a secondary index from
share token to sos_id. Both maps can be injected, e.g. to swap in a
persistent mapping. Nothing is evicted; data is lost on restart.
"""

from __future__ import annotations

from collections.abc import MutableMapping

from guardian_sos.models.sos_session import SosSession


class SessionStore:
    """Sessions keyed by sos_id plus a share-token index."""

    def __init__(
        self,
        sessions: MutableMapping[str, SosSession] | None = None,
        tokens: MutableMapping[str, str] | None = None,
    ) -> None:
        self._sessions = sessions if sessions is not None else {}
        # share_token -> sos_id
        self._tokens = tokens if tokens is not None else {}

    def add(self, session: SosSession) -> None:
        """Insert a new session and index its share token."""
        if session.sos_id in self._sessions:
            raise KeyError(f"Duplicate sos_id: {session.sos_id}")
        if session.share_token in self._tokens:
            raise KeyError("Duplicate share token")
        self._sessions[session.sos_id] = session
        self._tokens[session.share_token] = session.sos_id

    def get(self, sos_id: str) -> SosSession | None:
        return self._sessions.get(sos_id)

    def get_by_token(self, token: str) -> SosSession | None:
        """Resolve a share token to its session, or None."""
        sos_id = self._tokens.get(token)
        if sos_id is None:
            return None
        return self._sessions.get(sos_id)

    def __contains__(self, sos_id: object) -> bool:
        return sos_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


# Singleton instance used across the app
session_store = SessionStore()
