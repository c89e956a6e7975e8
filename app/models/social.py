"""
Social graph models - profiles, friend requests and follow requests
"""
import enum
from uuid import uuid4
from sqlalchemy import (
    Column, String, DateTime, ForeignKey, UniqueConstraint, Index, JSON, Uuid, text
)
from app.database import Base
from app.utils.time_utils import utc_now


class SocialProfile(Base):
    """
    Relationship sets for one user.

    Each list column holds user ids as strings and is kept duplicate-free by
    ProfileStore. `friends` is only ever written by the friend request
    workflow and by unfriend/block.
    """
    __tablename__ = "social_profiles"

    id = Column(Uuid, primary_key=True, default=uuid4)
    owner_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True)

    friends = Column(JSON, default=list, nullable=False)
    followers = Column(JSON, default=list, nullable=False)
    following = Column(JSON, default=list, nullable=False)
    blocked_users = Column(JSON, default=list, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    def __repr__(self):
        return f"<SocialProfile owner={self.owner_id}>"


class FriendRequestStatus(str, enum.Enum):
    PENDING = "pending"
    REJECTED = "rejected"
    DELETED = "deleted"


class FriendRequest(Base):
    """Friend request from requester to recipient"""
    __tablename__ = "friend_requests"

    id = Column(Uuid, primary_key=True, default=uuid4)
    requester_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recipient_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), default=FriendRequestStatus.PENDING.value, nullable=False)

    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    # One row per ordered pair; the reverse direction is checked by the service
    __table_args__ = (
        UniqueConstraint("requester_id", "recipient_id", name="uq_friend_request_pair"),
    )


class FollowRequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class FollowRequest(Base):
    """Follow request against a private account"""
    __tablename__ = "follow_requests"

    id = Column(Uuid, primary_key=True, default=uuid4)
    requester_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recipient_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), default=FollowRequestStatus.PENDING.value, nullable=False)

    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    # At most one pending request per ordered pair; decided rows are kept as history
    __table_args__ = (
        Index(
            "uq_follow_request_pending",
            "requester_id", "recipient_id", "status",
            unique=True,
            postgresql_where=text("status = 'pending'"),
            sqlite_where=text("status = 'pending'"),
        ),
    )
