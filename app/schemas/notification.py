"""
Notification schemas
"""
from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    message: str
    type: str
    is_read: bool
    link_url: Optional[str] = None
    created_at: datetime


class NotificationPage(BaseModel):
    """One page of notifications, newest first"""
    data: List[NotificationResponse]
    total: int
    has_more: bool


class UnreadCountResponse(BaseModel):
    count: int


class MarkReadRequest(BaseModel):
    """Optional subset of ids for PATCH /notifications/read-all"""
    notification_ids: Optional[List[UUID]] = None


class MarkReadResponse(BaseModel):
    modified_count: int
