"""
Social API endpoints: follows, blocks, friends, follow requests, recommendations
"""
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.core.dependencies import get_current_user
from app.schemas.social import (
    SendFriendRequest,
    SocialProfileResponse,
    FriendRequestResponse,
    FollowRequestResponse,
    FollowResponse,
    PendingRequestsResponse,
    UserListResponse,
    SocialActionResponse,
    RecommendationsResponse,
)
from app.services.social_service import relationship_service
from app.services.request_service import friend_request_service, follow_request_service
from app.services.recommendation_service import recommendation_service

router = APIRouter(prefix="/social")


# --- Profile ---------------------------------------------------------------

@router.get("/profile/me", response_model=SocialProfileResponse)
async def get_my_social_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get the current user's full social profile"""
    return relationship_service.get_profile(db, current_user.id)


@router.get("/profile/{user_id}", response_model=SocialProfileResponse)
async def get_user_social_profile(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get a specific user's social profile"""
    return relationship_service.get_profile(db, user_id)


# --- Follow / block --------------------------------------------------------

@router.post("/follow/{user_id}", response_model=FollowResponse)
async def follow_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Follow another user (sends a follow request if their account is private)"""
    return relationship_service.follow(db, current_user.id, user_id)


@router.delete("/unfollow/{user_id}", response_model=SocialActionResponse)
async def unfollow_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Unfollow another user"""
    changed = relationship_service.unfollow(db, current_user.id, user_id)
    return SocialActionResponse(
        success=True,
        message="Unfollowed" if changed else "You were not following this user"
    )


@router.post("/block/{user_id}", response_model=SocialProfileResponse)
async def block_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Block a user, removing any friend/follow relationship with them"""
    return relationship_service.block(db, current_user.id, user_id)


@router.delete("/unblock/{user_id}", response_model=SocialProfileResponse)
async def unblock_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Unblock a user"""
    return relationship_service.unblock(db, current_user.id, user_id)


@router.get("/blocked", response_model=UserListResponse)
async def get_blocked_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Users the current user has blocked"""
    return relationship_service.list_blocked(db, current_user.id)


@router.get("/users/{user_id}/followers", response_model=UserListResponse)
async def get_followers(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Users who follow the specified user"""
    return relationship_service.list_followers(db, user_id)


@router.get("/users/{user_id}/following", response_model=UserListResponse)
async def get_following(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Users the specified user is following"""
    return relationship_service.list_following(db, user_id)


# --- Friends ---------------------------------------------------------------

@router.post("/friends/request", response_model=FriendRequestResponse, status_code=status.HTTP_201_CREATED)
async def send_friend_request(
    request: SendFriendRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Send a friend request to another user"""
    return friend_request_service.send(db, current_user.id, request.recipient_id)


@router.get("/friends/list", response_model=UserListResponse)
async def get_friends(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get current user's friends list"""
    return relationship_service.list_friends(db, current_user.id)


@router.get("/friends/requests/pending", response_model=PendingRequestsResponse)
async def get_pending_friend_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get pending friend requests (incoming and outgoing)"""
    return friend_request_service.list_pending(db, current_user.id)


@router.patch("/friends/requests/{request_id}/accept", response_model=SocialActionResponse)
async def accept_friend_request(
    request_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Accept a pending friend request"""
    friend_request_service.accept(db, request_id, current_user.id)
    return SocialActionResponse(
        success=True,
        message="Friend request accepted",
        request_id=request_id
    )


@router.patch("/friends/requests/{request_id}/reject", response_model=SocialActionResponse)
async def reject_friend_request(
    request_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Reject a pending friend request"""
    friend_request_service.reject(db, request_id, current_user.id)
    return SocialActionResponse(
        success=True,
        message="Friend request rejected",
        request_id=request_id
    )


@router.delete("/friends/requests/{request_id}", response_model=SocialActionResponse)
async def cancel_friend_request(
    request_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Cancel a sent friend request"""
    friend_request_service.cancel(db, request_id, current_user.id)
    return SocialActionResponse(
        success=True,
        message="Friend request cancelled",
        request_id=request_id
    )


@router.delete("/friends/{friend_id}", response_model=SocialActionResponse)
async def remove_friend(
    friend_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Remove a user from your friends list"""
    relationship_service.remove_friend(db, current_user.id, friend_id)
    return SocialActionResponse(success=True, message="Friend removed")


# --- Follow requests -------------------------------------------------------

@router.get("/follow-requests/pending", response_model=PendingRequestsResponse)
async def get_pending_follow_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get pending follow requests (incoming and outgoing)"""
    return follow_request_service.list_pending(db, current_user.id)


@router.patch("/follow-requests/{request_id}/approve", response_model=FollowRequestResponse)
async def approve_follow_request(
    request_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Approve a pending follow request"""
    return follow_request_service.approve(db, request_id, current_user.id)


@router.patch("/follow-requests/{request_id}/deny", response_model=FollowRequestResponse)
async def deny_follow_request(
    request_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Deny a pending follow request"""
    return follow_request_service.deny(db, request_id, current_user.id)


@router.delete("/follow-requests/{request_id}", response_model=SocialActionResponse)
async def cancel_follow_request(
    request_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Withdraw a follow request you sent"""
    follow_request_service.cancel(db, request_id, current_user.id)
    return SocialActionResponse(
        success=True,
        message="Follow request cancelled",
        request_id=request_id
    )


# --- Recommendations -------------------------------------------------------

@router.get("/recommendations", response_model=RecommendationsResponse)
async def get_recommendations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Users sharing interests with the current user"""
    return recommendation_service.get_recommendations(db, current_user.id)
