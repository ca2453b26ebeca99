from __future__ import annotations

from enum import StrEnum


class SessionState(StrEnum):
    ANONYMOUS = "anonymous"
    IDENTIFIED = "identified"
    DISCONNECTED = "disconnected"


class RouteOutcome(StrEnum):
    DELIVERED = "delivered"
    OFFLINE = "offline"
    FAILED = "failed"
