"""
User endpoints
"""
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.user import UserResponse, UserSummary
from app.core.dependencies import get_current_user
from app.models.user import User
from app.services.user_service import user_service

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: User = Depends(get_current_user)
):
    """Get the authenticated user's account"""
    return current_user


@router.get("/{user_id}", response_model=UserSummary)
async def get_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get another user's public card"""
    return user_service.get_user(db, user_id)
