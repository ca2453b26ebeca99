"""Import all models so Base.metadata knows every table."""
from relay_service.infrastructure.db.models.account import AccountModel
from relay_service.infrastructure.db.models.message import MessageModel

__all__ = [
    "AccountModel",
    "MessageModel",
]
