"""
User lookups consumed by the social services
"""
from typing import Iterable, List, Optional, Union
from uuid import UUID
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models.user import User

UserId = Union[UUID, str]


def as_uuid(value: UserId) -> UUID:
    """Normalize a user id coming from a JSON list column or a path parameter"""
    return value if isinstance(value, UUID) else UUID(str(value))


class UserService:
    """Read-only access to user accounts"""

    def find_user(self, db: Session, user_id: UserId) -> Optional[User]:
        try:
            user_uuid = as_uuid(user_id)
        except (ValueError, TypeError):
            return None
        return db.query(User).filter(User.id == user_uuid).first()

    def get_user(self, db: Session, user_id: UserId) -> User:
        """Get an active user or raise NotFoundError"""
        user = self.find_user(db, user_id)
        if user is None or not user.is_active:
            raise NotFoundError("User not found")
        return user

    def get_users(self, db: Session, user_ids: Iterable[UserId]) -> List[User]:
        """Resolve ids to active users, keeping the given order and skipping unknown ids"""
        ordered = [as_uuid(user_id) for user_id in user_ids]
        if not ordered:
            return []
        rows = db.query(User).filter(User.id.in_(ordered), User.is_active.is_(True)).all()
        by_id = {user.id: user for user in rows}
        return [by_id[user_id] for user_id in ordered if user_id in by_id]

    def display_name(self, db: Session, user_id: UserId) -> str:
        user = self.find_user(db, user_id)
        if user is None:
            return "Someone"
        return user.display_name or user.username or "Someone"


user_service = UserService()
