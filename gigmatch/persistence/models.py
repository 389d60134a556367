"""SQLAlchemy models for Gig Match."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, Index, String, Text
from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def generate_uuid() -> str:
    """Generate a UUID string."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Notification(Base):
    """A notification delivered to one user's inbox."""

    __tablename__ = "notifications"

    id = Column(String, primary_key=True, default=generate_uuid)
    recipient_id = Column(String, nullable=False, index=True)

    # proposal_received, proposal_accepted, proposal_rejected, job_posted, ...
    type = Column(String, nullable=False)
    title = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    icon = Column(String, default="fas fa-bell")
    color = Column(String, default="blue")
    link = Column(String, nullable=True)  # Where a click navigates
    data = Column(JSON, default=dict)  # job_id, match_score, ...

    # Read state
    read = Column(Boolean, default=False, index=True)
    read_at = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("ix_notifications_recipient_read_created", "recipient_id", "read", "created_at"),
    )

    def mark_as_read(self) -> None:
        """Flag as read and stamp the time."""
        self.read = True
        self.read_at = utcnow()

    def __repr__(self) -> str:
        return f"<Notification {self.type} -> {self.recipient_id}>"
