"""
Group endpoints
"""
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.core.dependencies import get_current_user
from app.schemas.group import (
    GroupCreate,
    GroupUpdate,
    GroupMemberAdd,
    GroupResponse,
    GroupListResponse,
)
from app.schemas.social import SocialActionResponse
from app.services.group_service import group_service

router = APIRouter(prefix="/social/groups")


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    data: GroupCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create a new group owned by the current user"""
    return group_service.create(db, current_user.id, data)


@router.get("", response_model=GroupListResponse)
async def list_my_groups(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Groups the current user owns or belongs to"""
    groups = group_service.list_for_user(db, current_user.id)
    return GroupListResponse(
        groups=[GroupResponse.model_validate(group) for group in groups],
        total_count=len(groups)
    )


@router.get("/{group_id}", response_model=GroupResponse)
async def get_group(
    group_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return group_service.get(db, group_id)


@router.patch("/{group_id}", response_model=GroupResponse)
async def update_group(
    group_id: UUID,
    data: GroupUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update a group you own"""
    return group_service.update(db, current_user.id, group_id, data)


@router.delete("/{group_id}", response_model=SocialActionResponse)
async def delete_group(
    group_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete a group you own"""
    group_service.delete(db, current_user.id, group_id)
    return SocialActionResponse(success=True, message="Group deleted")


@router.post("/{group_id}/members", response_model=GroupResponse)
async def add_group_member(
    group_id: UUID,
    data: GroupMemberAdd,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Add a member to a group you own"""
    return group_service.add_member(db, current_user.id, group_id, data.member_id)


@router.delete("/{group_id}/members/{member_id}", response_model=GroupResponse)
async def remove_group_member(
    group_id: UUID,
    member_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Remove a member (owner), or leave the group (member)"""
    return group_service.remove_member(db, current_user.id, group_id, member_id)
