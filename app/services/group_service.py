"""
Group service for user-owned groups
"""
from typing import List
import logging
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from app.models.group import Group
from app.schemas.group import GroupCreate, GroupUpdate
from app.services.profile_store import id_set
from app.services.user_service import UserId, as_uuid, user_service
from app.utils.time_utils import utc_now

logger = logging.getLogger(__name__)


class GroupService:
    """Service for group operations"""

    def create(self, db: Session, owner_id: UserId, data: GroupCreate) -> Group:
        owner = user_service.get_user(db, owner_id)
        group = Group(
            name=data.name,
            description=data.description,
            owner_id=owner.id,
            members=[str(owner.id)]
        )
        db.add(group)
        db.commit()
        db.refresh(group)

        logger.info(f"User {owner.id} created group {group.id}")
        return group

    def get(self, db: Session, group_id: UserId) -> Group:
        group = db.query(Group).filter(Group.id == as_uuid(group_id)).first()
        if not group:
            raise NotFoundError("Group not found")
        return group

    def list_for_user(self, db: Session, user_id: UserId) -> List[Group]:
        """Groups the user owns or belongs to"""
        user_key = str(as_uuid(user_id))
        groups = db.query(Group).order_by(Group.created_at.desc()).all()
        return [group for group in groups if user_key in id_set(group.members)]

    def _owned(self, db: Session, owner_id: UserId, group_id: UserId) -> Group:
        group = self.get(db, group_id)
        if group.owner_id != as_uuid(owner_id):
            raise ForbiddenError("Only the group owner can do this")
        return group

    def update(self, db: Session, owner_id: UserId, group_id: UserId, data: GroupUpdate) -> Group:
        group = self._owned(db, owner_id, group_id)

        update_dict = data.model_dump(exclude_unset=True)
        for field, value in update_dict.items():
            if field == "name" and value is None:
                continue
            if field == "icon_url" and value is not None:
                value = str(value)
            setattr(group, field, value)

        group.updated_at = utc_now()
        db.commit()
        db.refresh(group)
        return group

    def add_member(self, db: Session, requester_id: UserId, group_id: UserId, member_id: UserId) -> Group:
        """Owner adds a member. Adding an existing member is a no-op."""
        group = self._owned(db, requester_id, group_id)
        member = user_service.get_user(db, member_id)

        members = id_set(group.members)
        if str(member.id) not in members:
            group.members = members + [str(member.id)]
            group.updated_at = utc_now()
            db.commit()
            db.refresh(group)
            logger.info(f"Added {member.id} to group {group.id}")
        return group

    def remove_member(self, db: Session, requester_id: UserId, group_id: UserId, member_id: UserId) -> Group:
        """The owner removes anyone but themselves; members may remove themselves"""
        requester_id, member_id = as_uuid(requester_id), as_uuid(member_id)
        group = self.get(db, group_id)

        if member_id == group.owner_id:
            raise BadRequestError("The owner cannot be removed from the group")
        if requester_id != group.owner_id and requester_id != member_id:
            raise ForbiddenError("Only the group owner can remove other members")

        members = id_set(group.members)
        if str(member_id) not in members:
            raise NotFoundError("User is not a member of this group")

        group.members = [m for m in members if m != str(member_id)]
        group.updated_at = utc_now()
        db.commit()
        db.refresh(group)

        logger.info(f"Removed {member_id} from group {group.id}")
        return group

    def delete(self, db: Session, owner_id: UserId, group_id: UserId) -> None:
        group = self._owned(db, owner_id, group_id)
        db.delete(group)
        db.commit()
        logger.info(f"User {owner_id} deleted group {group_id}")


group_service = GroupService()
