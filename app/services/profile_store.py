"""
Profile store - get-or-create access to social profiles and single-profile set updates

Every write here is one committed update of one profile row. Callers that
touch two profiles (follow, befriend, block) issue two writes; there is no
transaction spanning both, so each caller must stay idempotent to let a
retry repair a half-applied change.
"""
from typing import Iterable, List, Optional, Union
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.social import SocialProfile
from app.services.user_service import UserId, as_uuid, user_service
from app.utils.time_utils import utc_now

logger = logging.getLogger(__name__)

RELATIONSHIP_FIELDS = ("friends", "followers", "following", "blocked_users")


def id_set(values: Optional[Iterable]) -> List[str]:
    """Ids as strings without duplicates, first occurrence wins"""
    seen: List[str] = []
    for value in values or []:
        value = str(value)
        if value not in seen:
            seen.append(value)
    return seen


class ProfileStore:
    """Accessor for SocialProfile rows. Owns no business rules."""

    def get_existing(self, db: Session, user_id: UserId) -> Optional[SocialProfile]:
        return db.query(SocialProfile).filter(SocialProfile.owner_id == as_uuid(user_id)).first()

    def get_or_create(self, db: Session, user_id: UserId) -> SocialProfile:
        """
        Return the user's profile, creating an empty one on first access.

        Raises NotFoundError if the user does not exist. Safe to call
        concurrently: the unique index on owner_id decides the winner and the
        loser returns the row that won.
        """
        user = user_service.get_user(db, user_id)

        profile = self.get_existing(db, user.id)
        if profile:
            return profile

        logger.info(f"No social profile found for user {user.id}. Creating one.")
        profile = SocialProfile(
            owner_id=user.id,
            friends=[],
            followers=[],
            following=[],
            blocked_users=[],
        )
        db.add(profile)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(f"Social profile for user {user.id} was created concurrently, using existing one")
            existing = self.get_existing(db, user.id)
            if existing is None:
                raise
            return existing

        db.refresh(profile)
        return profile

    def get_many(self, db: Session, user_ids: Iterable[UserId]) -> List[SocialProfile]:
        """Existing profiles for the given owners (missing ones are not created)"""
        owners = [as_uuid(user_id) for user_id in user_ids]
        if not owners:
            return []
        return db.query(SocialProfile).filter(SocialProfile.owner_id.in_(owners)).all()

    def _lock(self, db: Session, profile: SocialProfile) -> SocialProfile:
        """Reload the profile for update so the read-modify-write below is per-row atomic"""
        return (
            db.query(SocialProfile)
            .filter(SocialProfile.id == profile.id)
            .populate_existing()
            .with_for_update()
            .one()
        )

    def add_to_set(self, db: Session, owner_id: UserId, field: str, value: UserId) -> bool:
        """Add `value` to one set of the owner's profile. Returns True if it was not there."""
        if field not in RELATIONSHIP_FIELDS:
            raise ValueError(f"Unknown relationship field: {field}")

        profile = self._lock(db, self.get_or_create(db, owner_id))
        current = id_set(getattr(profile, field))
        value = str(value)
        changed = value not in current
        if changed:
            setattr(profile, field, current + [value])
            profile.updated_at = utc_now()
        db.commit()
        return changed

    def pull(
        self,
        db: Session,
        owner_id: UserId,
        fields: Union[str, Iterable[str]],
        value: UserId
    ) -> bool:
        """
        Remove `value` from one or more sets of the owner's profile in a single write.

        Never creates a profile and does not require the owner to be active, so
        ids pointing at a deactivated user can still be cleaned up. Owners
        without a profile have nothing to remove.
        """
        if isinstance(fields, str):
            fields = (fields,)
        fields = tuple(fields)
        for field in fields:
            if field not in RELATIONSHIP_FIELDS:
                raise ValueError(f"Unknown relationship field: {field}")

        existing = self.get_existing(db, owner_id)
        if existing is None:
            return False

        profile = self._lock(db, existing)
        value = str(value)
        changed = False
        for field in fields:
            current = id_set(getattr(profile, field))
            if value in current:
                setattr(profile, field, [item for item in current if item != value])
                changed = True
        if changed:
            profile.updated_at = utc_now()
        db.commit()
        return changed

    def has(self, profile: SocialProfile, field: str, value: UserId) -> bool:
        return str(value) in id_set(getattr(profile, field))

    def blocked_between(self, db: Session, user_a: UserId, user_b: UserId) -> bool:
        """True if either user has blocked the other"""
        for owner, other in ((user_a, user_b), (user_b, user_a)):
            profile = self.get_existing(db, owner)
            if profile and self.has(profile, "blocked_users", other):
                return True
        return False


profile_store = ProfileStore()
