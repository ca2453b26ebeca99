"""Process-local registry of online users."""
from __future__ import annotations

import threading

from relay_service.domain.entities.online_user import OnlineUser


class ConnectionRegistry:
    """Maps each online user id to exactly one transport session id.

    One entry per user and one entry per session: announcing again replaces
    the previous entry rather than adding a second one. Entries keep
    registration order, which is the order of :meth:`snapshot`.

    All state sits behind a lock and leaves only as copies.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_session: dict[str, OnlineUser] = {}
        self._by_user: dict[str, str] = {}

    def register(self, user_id: str, session_id: str) -> str | None:
        """Bind ``user_id`` to ``session_id``.

        Returns the session the user was previously bound to, if it was a
        different one.
        """
        with self._lock:
            displaced = self._by_user.get(user_id)
            if displaced is not None:
                del self._by_session[displaced]
            previous = self._by_session.pop(session_id, None)
            if previous is not None:
                del self._by_user[previous.user_id]
            self._by_session[session_id] = OnlineUser(user_id=user_id, session_id=session_id)
            self._by_user[user_id] = session_id
        return displaced if displaced != session_id else None

    def unregister_by_session(self, session_id: str) -> bool:
        with self._lock:
            entry = self._by_session.pop(session_id, None)
            if entry is None:
                return False
            del self._by_user[entry.user_id]
            return True

    def unregister_by_user(self, user_id: str) -> bool:
        with self._lock:
            session_id = self._by_user.pop(user_id, None)
            if session_id is None:
                return False
            del self._by_session[session_id]
            return True

    def find(self, user_id: str) -> str | None:
        with self._lock:
            return self._by_user.get(user_id)

    def snapshot(self) -> list[OnlineUser]:
        with self._lock:
            return list(self._by_session.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_session)
