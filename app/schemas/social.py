"""
Social graph schemas
"""
from datetime import datetime
from typing import Optional, List, Literal
from uuid import UUID
from pydantic import BaseModel, ConfigDict

from app.schemas.user import UserSummary


class SendFriendRequest(BaseModel):
    """Body of POST /social/friends/request"""
    recipient_id: UUID


class SocialProfileResponse(BaseModel):
    """A user's relationship sets"""
    model_config = ConfigDict(from_attributes=True)

    owner_id: UUID
    friends: List[UUID] = []
    followers: List[UUID] = []
    following: List[UUID] = []
    blocked_users: List[UUID] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FriendRequestResponse(BaseModel):
    """Friend request row"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    requester_id: UUID
    recipient_id: UUID
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class FollowRequestResponse(FriendRequestResponse):
    """Follow request row"""


class RequestWithUser(BaseModel):
    """Pending request together with the other party's card"""
    request_id: UUID
    user: UserSummary
    status: str
    created_at: datetime


class PendingRequestsResponse(BaseModel):
    """Incoming and outgoing pending requests"""
    incoming: List[RequestWithUser]
    outgoing: List[RequestWithUser]
    incoming_count: int
    outgoing_count: int


class UserListResponse(BaseModel):
    """List of users (friends, followers, following, blocked)"""
    users: List[UserSummary]
    total_count: int


class FollowResponse(BaseModel):
    """Result of POST /social/follow/{user_id}"""
    status: Literal["following", "requested"]
    target_id: UUID
    request_id: Optional[UUID] = None


class SocialActionResponse(BaseModel):
    """Response after a social action (accept/reject/remove/...)"""
    success: bool
    message: str
    request_id: Optional[UUID] = None


class RecommendationEntry(BaseModel):
    """One recommended user"""
    user: UserSummary
    shared_interests: int
    followers_count: int


class RecommendationsResponse(BaseModel):
    recommendations: List[RecommendationEntry]
    total_count: int
