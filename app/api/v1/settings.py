"""
Settings endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.core.dependencies import get_current_user
from app.models.user import User
from app.schemas.setting import SettingsResponse, SettingsUpdate
from app.services.settings_service import settings_service
from app.services.recommendation_service import recommendation_service

router = APIRouter(prefix="/settings")


@router.get("/me", response_model=SettingsResponse)
async def get_my_settings(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return settings_service.find_or_create(db, current_user.id)


@router.put("/me", response_model=SettingsResponse)
async def update_my_settings(
    update_data: SettingsUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update privacy, notification and content settings"""
    setting = settings_service.update(db, current_user.id, update_data)
    if update_data.interests is not None:
        recommendation_service.invalidate(current_user.id)
    return setting
