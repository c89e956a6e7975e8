"""
Per-user settings: privacy flag and content interests
"""
from uuid import uuid4
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, JSON, Uuid
from app.database import Base
from app.utils.time_utils import utc_now


class Setting(Base):
    """User settings, one row per user"""
    __tablename__ = "settings"

    id = Column(Uuid, primary_key=True, default=uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True)

    # Account
    is_private = Column(Boolean, default=False, nullable=False)

    # Notifications
    email_notifications = Column(Boolean, default=True)
    push_notifications = Column(Boolean, default=False)

    # Content
    theme = Column(String(50), default="light")
    interests = Column(JSON, default=list)

    # Timestamps
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)
