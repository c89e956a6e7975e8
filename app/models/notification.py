"""
In-app notifications
"""
import enum
from uuid import uuid4
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Text, Uuid
from app.database import Base
from app.utils.time_utils import utc_now


class NotificationType(str, enum.Enum):
    """Types of in-app notifications"""

    SOCIAL_FRIEND_REQUEST = "social_friend_request"
    SOCIAL_FRIEND_ACCEPT = "social_friend_accept"
    SOCIAL_FOLLOW = "social_follow"
    SOCIAL_FOLLOW_REQUEST = "social_follow_request"
    SOCIAL_FOLLOW_APPROVE = "social_follow_approve"
    SOCIAL = "social"


class Notification(Base):
    """Notification addressed to a single user"""
    __tablename__ = "notifications"

    id = Column(Uuid, primary_key=True, default=uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(50), nullable=False, default=NotificationType.SOCIAL.value)
    is_read = Column(Boolean, default=False, nullable=False, index=True)
    link_url = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utc_now, index=True)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)
