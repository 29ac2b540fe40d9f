"""
Server-side session store
The signed session cookie only carries the session id; SessionUser objects
live here until SESSION_TTL_SECONDS after the browser's last request.
"""
import logging
import time
import uuid
from typing import Callable, Optional, Tuple

from starlette.requests import Request

from petstoreapp.core.cache import TTLCache
from petstoreapp.domain.user import SessionUser

logger = logging.getLogger(__name__)

SESSION_ID_KEY = "session_id"


class SessionStore:
    """Maps session ids to SessionUser objects with a sliding TTL"""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self._users = TTLCache(ttl_seconds, clock=clock)

    def load(self, request: Request) -> Tuple[str, SessionUser]:
        """
        Session id and user for this request's browser session.

        A session id is written into the cookie session on first contact.
        Returns a fresh SessionUser (no session id assigned yet) when the
        store has nothing for that id.
        """
        session_id = request.session.get(SESSION_ID_KEY)
        if not session_id:
            session_id = uuid.uuid4().hex
            request.session[SESSION_ID_KEY] = session_id

        user = self._users.get(session_id)
        if user is None:
            logger.debug(f"New session user for {session_id}")
            user = SessionUser()

        self._users.put(session_id, user)
        return session_id, user

    def get(self, session_id: str) -> Optional[SessionUser]:
        return self._users.get(session_id)

    def __len__(self) -> int:
        return len(self._users)
