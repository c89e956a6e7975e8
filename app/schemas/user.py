"""User schemas for request/response validation"""
from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from uuid import UUID


class UserSummary(BaseModel):
    """Public user card used in social listings"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None


class UserResponse(UserSummary):
    """Schema for the authenticated user's own record"""
    email: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
