"""
Consistency enforcement after a block
"""
from uuid import UUID
import logging
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.social import (
    FollowRequest,
    FollowRequestStatus,
    FriendRequest,
    FriendRequestStatus,
)
from app.services.profile_store import ProfileStore, profile_store

logger = logging.getLogger(__name__)

SEVERED_FIELDS = ("friends", "following", "followers")


class ConsistencyEnforcer:
    """Strips every friend/follow edge between a blocker and the blocked user"""

    def __init__(self, profiles: ProfileStore):
        self.profiles = profiles

    def sever(self, db: Session, blocker_id: UUID, blocked_id: UUID) -> None:
        """
        Remove blocked_id from the blocker's friends/following/followers and
        blocker_id from the blocked user's. Running it twice is a no-op.
        """
        self.profiles.pull(db, blocker_id, SEVERED_FIELDS, blocked_id)
        self.profiles.pull(db, blocked_id, SEVERED_FIELDS, blocker_id)
        logger.info(f"Severed relationships between {blocker_id} and {blocked_id}")

        if settings.BLOCK_CANCELS_PENDING_REQUESTS:
            self.drop_pending_requests(db, blocker_id, blocked_id)

    def drop_pending_requests(self, db: Session, user_a: UUID, user_b: UUID) -> int:
        """Delete pending friend and follow requests between the pair, both directions"""
        removed = 0
        for model, pending in (
            (FriendRequest, FriendRequestStatus.PENDING.value),
            (FollowRequest, FollowRequestStatus.PENDING.value),
        ):
            removed += db.query(model).filter(
                or_(
                    and_(model.requester_id == user_a, model.recipient_id == user_b),
                    and_(model.requester_id == user_b, model.recipient_id == user_a)
                ),
                model.status == pending
            ).delete(synchronize_session=False)
        db.commit()

        if removed:
            logger.info(f"Dropped {removed} pending request(s) between {user_a} and {user_b}")
        return removed


consistency_enforcer = ConsistencyEnforcer(profile_store)
