from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Account:
    id: UUID
    username: str
    email: str
    avatar: str
    created_at: datetime
