"""In-memory registry of authenticated sessions.

Owns one AccessControl per session id for the lifetime of the session.
Stored on app.state; every request receives the handle for its own session.
Logged-out session ids stay revoked until their token expires, so the same
bearer token cannot reopen the session. Expired sessions are evicted lazily.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime

from casehub.application.dtos.access import SessionInfo
from casehub.application.services.access_control import AccessControl
from casehub.application.services.session_loader import SessionLoader
from casehub.domain.exceptions import AuthenticationException
from casehub.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


def _expired(expires_at: datetime | None, now: datetime) -> bool:
    return expires_at is not None and expires_at <= now


class SessionRegistry:
    """Maps session ids to their AccessControl and remembers revoked ids."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._lock = threading.Lock()
        self._clock = clock
        self._sessions: dict[str, AccessControl] = {}
        # session id -> token expiry (None: revoked until restart)
        self._revoked: dict[str, datetime | None] = {}

    def get(self, session_id: str) -> AccessControl | None:
        """Return the live handle for session_id; an expired one is evicted."""
        now = self._clock()
        with self._lock:
            access = self._sessions.get(session_id)
            if access is None:
                return None
            session = access.snapshot().session
            if session is None or not _expired(session.expires_at, now):
                return access
            del self._sessions[session_id]
        access.logout()
        logger.debug("Evicted expired session %s", session_id)
        return None

    def is_revoked(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._revoked

    async def get_or_load(self, session: SessionInfo, loader: SessionLoader) -> AccessControl:
        """Return the session's AccessControl, loading it from the store on first use.

        A session id reused by a different user is reloaded from scratch.

        Raises:
            AuthenticationException: If the session was logged out.
        """
        self.evict_expired()
        self._ensure_active(session)
        access = self.get(session.session_id)
        if access is not None and access.snapshot().user_id == session.user_id:
            return access
        access = AccessControl()
        await loader.load(access, session)
        with self._lock:
            if session.session_id in self._revoked:
                raise AuthenticationException("Session has been logged out")
            self._sessions[session.session_id] = access
        return access

    async def refresh(self, session: SessionInfo, loader: SessionLoader) -> AccessControl:
        """Re-fetch roles and worlds for an existing (or new) session."""
        self._ensure_active(session)
        access = self.get(session.session_id)
        if access is None or access.snapshot().user_id != session.user_id:
            return await self.get_or_load(session, loader)
        await loader.load(access, session)
        return access

    def logout(self, session_id: str, expires_at: datetime | None = None) -> bool:
        """Clear the session's access state, forget it and revoke its id.

        The id stays revoked until expires_at (the token's expiry).

        Returns:
            True if the session was known.
        """
        with self._lock:
            access = self._sessions.pop(session_id, None)
            self._revoked[session_id] = expires_at
        if access is None:
            return False
        access.logout()
        return True

    def evict_expired(self) -> int:
        """Drop expired sessions and revocations whose token can no longer verify.

        Returns:
            Number of sessions evicted.
        """
        now = self._clock()
        with self._lock:
            expired = [
                (sid, access)
                for sid, access in self._sessions.items()
                if access.snapshot().session is not None
                and _expired(access.snapshot().session.expires_at, now)
            ]
            for sid, _ in expired:
                del self._sessions[sid]
            for sid in [s for s, exp in self._revoked.items() if _expired(exp, now)]:
                del self._revoked[sid]
        for _, access in expired:
            access.logout()
        if expired:
            logger.debug("Evicted %d expired sessions", len(expired))
        return len(expired)

    def _ensure_active(self, session: SessionInfo) -> None:
        if self.is_revoked(session.session_id):
            raise AuthenticationException("Session has been logged out")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
