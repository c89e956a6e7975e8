"""
Database models for the Social Graph Backend

All models should be imported here for Alembic to detect them.
"""
from app.models.user import User
from app.models.setting import Setting
from app.models.social import (
    SocialProfile,
    FriendRequest,
    FriendRequestStatus,
    FollowRequest,
    FollowRequestStatus,
)
from app.models.notification import Notification, NotificationType
from app.models.group import Group

__all__ = [
    # User
    "User",
    "Setting",
    # Social
    "SocialProfile",
    "FriendRequest",
    "FriendRequestStatus",
    "FollowRequest",
    "FollowRequestStatus",
    "Group",
    # Notification
    "Notification",
    "NotificationType",
]
