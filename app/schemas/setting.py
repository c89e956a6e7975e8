"""
Settings schemas
"""
from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, field_validator


class SettingsUpdate(BaseModel):
    """Partial update of the current user's settings"""
    is_private: Optional[bool] = None
    email_notifications: Optional[bool] = None
    push_notifications: Optional[bool] = None
    theme: Optional[str] = Field(None, max_length=50)
    interests: Optional[List[str]] = Field(None, max_length=50)

    @field_validator("interests")
    @classmethod
    def normalize_interests(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return None
        seen = []
        for interest in value:
            interest = interest.strip().lower()
            if interest and interest not in seen:
                seen.append(interest)
        return seen


class SettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: UUID
    is_private: bool
    email_notifications: bool
    push_notifications: bool
    theme: str
    interests: List[str] = []
    updated_at: Optional[datetime] = None
