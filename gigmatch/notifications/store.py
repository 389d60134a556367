"""Notification inbox storage."""
from typing import Optional, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from gigmatch.notifications.templates import NotificationPayload
from gigmatch.persistence.models import Notification, utcnow


class NotificationStore:
    """Service for storing notifications and managing their read state.

    Every query is scoped to a recipient so one user can never read or
    change another user's notifications.
    """

    def __init__(self, session: Session):
        """
        Initialize notification store.

        Args:
            session: Database session
        """
        self.session = session

    def save_many(self, payloads: Sequence[NotificationPayload]) -> list[Notification]:
        """Persist a batch of payloads in one commit."""
        rows = [
            Notification(
                recipient_id=p.recipient_id,
                type=p.type.value,
                title=p.title,
                message=p.message,
                icon=p.icon,
                color=p.color,
                link=p.link,
                data=dict(p.data),
            )
            for p in payloads
        ]
        if not rows:
            return []

        self.session.add_all(rows)
        self.session.commit()
        return rows

    def list_for_recipient(
        self,
        recipient_id: str,
        limit: int = 20,
        skip: int = 0,
        unread_only: bool = False,
    ) -> list[Notification]:
        """
        Get a recipient's notifications, newest first.

        Args:
            recipient_id: Owner of the inbox
            limit: Maximum results
            skip: Number of results to skip
            unread_only: Only return unread notifications

        Returns:
            List of notifications
        """
        stmt = select(Notification).where(Notification.recipient_id == recipient_id)
        if unread_only:
            stmt = stmt.where(Notification.read.is_(False))
        stmt = stmt.order_by(Notification.created_at.desc()).offset(skip).limit(limit)

        return list(self.session.execute(stmt).scalars().all())

    def count_for_recipient(self, recipient_id: str, unread_only: bool = False) -> int:
        stmt = select(func.count(Notification.id)).where(Notification.recipient_id == recipient_id)
        if unread_only:
            stmt = stmt.where(Notification.read.is_(False))
        return self.session.execute(stmt).scalar() or 0

    def unread_count(self, recipient_id: str) -> int:
        return self.count_for_recipient(recipient_id, unread_only=True)

    def mark_as_read(self, notification_id: str, recipient_id: str) -> Optional[Notification]:
        """Mark one notification read. Returns None if it is not the recipient's."""
        notification = self._get_owned(notification_id, recipient_id)
        if notification is None:
            return None

        notification.mark_as_read()
        self.session.commit()
        return notification

    def mark_all_as_read(self, recipient_id: str) -> int:
        """Mark every unread notification read. Returns the number changed."""
        stmt = (
            update(Notification)
            .where(Notification.recipient_id == recipient_id, Notification.read.is_(False))
            .values(read=True, read_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        self.session.commit()
        return result.rowcount

    def delete(self, notification_id: str, recipient_id: str) -> bool:
        notification = self._get_owned(notification_id, recipient_id)
        if notification is None:
            return False

        self.session.delete(notification)
        self.session.commit()
        return True

    def clear_read(self, recipient_id: str) -> int:
        """Delete all read notifications. Returns the number deleted."""
        stmt = delete(Notification).where(
            Notification.recipient_id == recipient_id,
            Notification.read.is_(True),
        ).execution_options(synchronize_session=False)
        result = self.session.execute(stmt)
        self.session.commit()
        return result.rowcount

    def _get_owned(self, notification_id: str, recipient_id: str) -> Optional[Notification]:
        stmt = select(Notification).where(
            Notification.id == notification_id,
            Notification.recipient_id == recipient_id,
        )
        return self.session.execute(stmt).scalar_one_or_none()
