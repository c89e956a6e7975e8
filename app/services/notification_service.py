"""
Notification service: in-app notifications for social events
"""
from typing import Dict, List, Optional, Any
from uuid import UUID
import logging
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models.notification import Notification, NotificationType

logger = logging.getLogger(__name__)


class NotificationService:
    """Create and read per-user notifications"""

    def create_notification(
        self,
        db: Session,
        user_id: UUID,
        title: str,
        message: str,
        notification_type: NotificationType = NotificationType.SOCIAL,
        link_url: Optional[str] = None
    ) -> Notification:
        """Persist a notification for `user_id`"""
        logger.info(f"Creating {notification_type.value} notification for user {user_id}")
        notification = Notification(
            user_id=user_id,
            title=title,
            message=message,
            type=notification_type.value,
            link_url=link_url,
        )
        db.add(notification)
        db.commit()
        db.refresh(notification)
        return notification

    def notify(
        self,
        db: Session,
        user_id: UUID,
        title: str,
        message: str,
        notification_type: NotificationType = NotificationType.SOCIAL,
        link_url: Optional[str] = None
    ) -> Optional[Notification]:
        """
        Fire-and-forget variant used as a side effect of social mutations.

        A failure here must never fail the mutation that triggered it, so it is
        logged and the session is rolled back to a usable state.
        """
        try:
            return self.create_notification(db, user_id, title, message, notification_type, link_url)
        except Exception as e:
            logger.error(f"Failed to create {notification_type.value} notification for user {user_id}: {e}")
            db.rollback()
            return None

    def get_notifications(
        self,
        db: Session,
        user_id: UUID,
        page: int = 1,
        limit: int = 10
    ) -> Dict[str, Any]:
        """Page through a user's notifications, newest first"""
        query = db.query(Notification).filter(Notification.user_id == user_id)
        total = query.count()
        data = (
            query.order_by(Notification.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return {
            "data": data,
            "total": total,
            "has_more": page * limit < total,
        }

    def get_unread_count(self, db: Session, user_id: UUID) -> int:
        return db.query(Notification).filter(
            Notification.user_id == user_id,
            Notification.is_read.is_(False)
        ).count()

    def mark_as_read(self, db: Session, notification_id: UUID, user_id: UUID) -> Notification:
        """Mark one of the user's notifications as read"""
        notification = db.query(Notification).filter(
            Notification.id == notification_id,
            Notification.user_id == user_id
        ).first()
        if not notification:
            raise NotFoundError("Notification not found")

        notification.is_read = True
        db.commit()
        db.refresh(notification)
        return notification

    def mark_all_as_read(
        self,
        db: Session,
        user_id: UUID,
        notification_ids: Optional[List[UUID]] = None
    ) -> int:
        """Mark unread notifications as read, optionally limited to `notification_ids`"""
        query = db.query(Notification).filter(
            Notification.user_id == user_id,
            Notification.is_read.is_(False)
        )
        if notification_ids:
            query = query.filter(Notification.id.in_(notification_ids))

        modified = query.update({Notification.is_read: True}, synchronize_session=False)
        db.commit()
        return modified


notification_service = NotificationService()
