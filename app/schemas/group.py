"""
Group schemas
"""
from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, HttpUrl


class GroupCreate(BaseModel):
    """Create a group"""
    name: str = Field(..., min_length=3, max_length=100)
    description: Optional[str] = Field(None, max_length=500)


class GroupUpdate(BaseModel):
    """Patch a group you own"""
    name: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    icon_url: Optional[HttpUrl] = None
    icon_key: Optional[str] = Field(None, max_length=255)


class GroupMemberAdd(BaseModel):
    member_id: UUID


class GroupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: Optional[str] = None
    owner_id: UUID
    members: List[UUID] = []
    icon_url: Optional[str] = None
    icon_key: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class GroupListResponse(BaseModel):
    groups: List[GroupResponse]
    total_count: int
