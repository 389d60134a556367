"""Database persistence layer."""
from .database import get_session, init_db
from .models import Base, Notification

__all__ = [
    "Base",
    "Notification",
    "init_db",
    "get_session",
]
