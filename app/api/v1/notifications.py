"""
Notification endpoints
"""
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.core.dependencies import get_current_user
from app.models.user import User
from app.schemas.notification import (
    NotificationPage,
    NotificationResponse,
    UnreadCountResponse,
    MarkReadRequest,
    MarkReadResponse,
)
from app.services.notification_service import notification_service

router = APIRouter(prefix="/notifications")


@router.get("", response_model=NotificationPage)
async def get_notifications(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the current user's notifications, newest first"""
    result = notification_service.get_notifications(db, current_user.id, page, limit)
    return NotificationPage(
        data=[NotificationResponse.model_validate(n) for n in result["data"]],
        total=result["total"],
        has_more=result["has_more"]
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return UnreadCountResponse(count=notification_service.get_unread_count(db, current_user.id))


@router.patch("/read-all", response_model=MarkReadResponse)
async def mark_all_as_read(
    request: MarkReadRequest = MarkReadRequest(),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Mark all (or the given) unread notifications as read"""
    modified = notification_service.mark_all_as_read(db, current_user.id, request.notification_ids)
    return MarkReadResponse(modified_count=modified)


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_as_read(
    notification_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return notification_service.mark_as_read(db, notification_id, current_user.id)
