from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class OnlineUser:
    """A user id bound to the transport session that announced it."""

    user_id: str
    session_id: str
