"""
Request workflow for friend requests and follow requests

Both are small state machines over a request row:

    pending -> accepted (friend: row deleted, friends sets updated)
            -> rejected (friend: status flipped, row kept)
            -> cancelled (row deleted)

    pending -> approved (follow: follow edge created, row kept)
            -> denied
            -> cancelled (row deleted)
"""
from typing import List, Type, Union
from uuid import UUID
import logging
from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from app.models.notification import NotificationType
from app.models.social import (
    FollowRequest,
    FollowRequestStatus,
    FriendRequest,
    FriendRequestStatus,
)
from app.schemas.social import PendingRequestsResponse, RequestWithUser
from app.schemas.user import UserSummary
from app.services.notification_service import NotificationService, notification_service
from app.services.profile_store import ProfileStore, profile_store
from app.services.recommendation_service import RecommendationService, recommendation_service
from app.services.user_service import UserId, as_uuid, user_service
from app.utils.time_utils import utc_now

logger = logging.getLogger(__name__)

RequestRow = Union[FriendRequest, FollowRequest]


class RequestWorkflow:
    """Shared lookups and listing for request rows"""

    model: Type[RequestRow]
    pending_status: str
    label: str

    def __init__(
        self,
        profiles: ProfileStore,
        notifier: NotificationService,
        recommendations: RecommendationService
    ):
        self.profiles = profiles
        self.notifier = notifier
        self.recommendations = recommendations

    def get_pending(self, db: Session, request_id: UserId) -> RequestRow:
        """Load a pending request or raise NotFoundError"""
        request = db.query(self.model).filter(
            self.model.id == as_uuid(request_id),
            self.model.status == self.pending_status
        ).first()
        if not request:
            raise NotFoundError(f"{self.label.capitalize()} not found")
        return request

    def _require_party(self, request: RequestRow, acting_user_id: UserId, party: str, verb: str) -> None:
        if getattr(request, f"{party}_id") != as_uuid(acting_user_id):
            raise ForbiddenError(f"Only the {party} can {verb} this {self.label}")

    def list_pending(self, db: Session, user_id: UserId) -> PendingRequestsResponse:
        """Pending requests addressed to and sent by the user"""
        user_id = as_uuid(user_id)

        incoming = db.query(self.model).filter(
            self.model.recipient_id == user_id,
            self.model.status == self.pending_status
        ).order_by(self.model.created_at.desc()).all()

        outgoing = db.query(self.model).filter(
            self.model.requester_id == user_id,
            self.model.status == self.pending_status
        ).order_by(self.model.created_at.desc()).all()

        incoming_requests = self._with_users(db, incoming, "requester_id")
        outgoing_requests = self._with_users(db, outgoing, "recipient_id")

        return PendingRequestsResponse(
            incoming=incoming_requests,
            outgoing=outgoing_requests,
            incoming_count=len(incoming_requests),
            outgoing_count=len(outgoing_requests)
        )

    def _with_users(self, db: Session, requests: List[RequestRow], other_field: str) -> List[RequestWithUser]:
        users = {
            user.id: user
            for user in user_service.get_users(db, [getattr(r, other_field) for r in requests])
        }
        result = []
        for request in requests:
            other = users.get(getattr(request, other_field))
            if other is None:
                continue
            result.append(RequestWithUser(
                request_id=request.id,
                user=UserSummary.model_validate(other),
                status=request.status,
                created_at=request.created_at
            ))
        return result


class FriendRequestService(RequestWorkflow):
    """Friendship is only ever established by accepting a friend request"""

    model = FriendRequest
    pending_status = FriendRequestStatus.PENDING.value
    label = "friend request"

    def send(self, db: Session, requester_id: UserId, recipient_id: UserId) -> FriendRequest:
        """
        Send a friend request.

        A previously rejected row for the same ordered pair is reopened rather
        than inserted, since the pair is unique.
        """
        requester_id, recipient_id = as_uuid(requester_id), as_uuid(recipient_id)
        if requester_id == recipient_id:
            raise BadRequestError("Cannot send friend request to yourself")

        requester_profile = self.profiles.get_or_create(db, requester_id)
        self.profiles.get_or_create(db, recipient_id)

        if self.profiles.blocked_between(db, requester_id, recipient_id):
            raise ForbiddenError("Unable to send friend request")

        if self.profiles.has(requester_profile, "friends", recipient_id):
            raise ConflictError("Already friends")

        existing = db.query(FriendRequest).filter(
            or_(
                and_(FriendRequest.requester_id == requester_id, FriendRequest.recipient_id == recipient_id),
                and_(FriendRequest.requester_id == recipient_id, FriendRequest.recipient_id == requester_id)
            )
        ).all()

        if any(row.status == self.pending_status for row in existing):
            raise ConflictError("A pending friend request already exists between these users")

        request = next((row for row in existing if row.requester_id == requester_id), None)
        if request is not None:
            request.status = self.pending_status
            request.created_at = utc_now()
            request.updated_at = utc_now()
        else:
            request = FriendRequest(
                requester_id=requester_id,
                recipient_id=recipient_id,
                status=self.pending_status
            )
            db.add(request)

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("A pending friend request already exists between these users")
        db.refresh(request)

        logger.info(f"User {requester_id} sent friend request {request.id} to {recipient_id}")

        self.notifier.notify(
            db,
            recipient_id,
            title="New friend request",
            message=f"{user_service.display_name(db, requester_id)} sent you a friend request",
            notification_type=NotificationType.SOCIAL_FRIEND_REQUEST,
            link_url="/social/friends/requests/pending"
        )
        return request

    def accept(self, db: Session, request_id: UserId, acting_user_id: UserId) -> UUID:
        """
        Accept a pending request as its recipient. Returns the new friend's id.

        The two profile writes and the row delete are separate commits: a
        crash in between leaves the request deleted without the friendship,
        or the friendship without the request removed. Re-sending and
        re-accepting repairs it.
        """
        request = self.get_pending(db, request_id)
        self._require_party(request, acting_user_id, "recipient", "accept")

        requester_id, recipient_id = request.requester_id, request.recipient_id
        if self.profiles.blocked_between(db, requester_id, recipient_id):
            raise ForbiddenError("Unable to accept friend request")

        self.profiles.add_to_set(db, requester_id, "friends", recipient_id)
        self.profiles.add_to_set(db, recipient_id, "friends", requester_id)
        self.recommendations.invalidate(requester_id, recipient_id)

        db.delete(request)
        db.commit()

        logger.info(f"User {recipient_id} accepted friend request from {requester_id}")

        self.notifier.notify(
            db,
            requester_id,
            title="Friend request accepted",
            message=f"{user_service.display_name(db, recipient_id)} accepted your friend request",
            notification_type=NotificationType.SOCIAL_FRIEND_ACCEPT,
            link_url="/social/friends/list"
        )
        return requester_id

    def reject(self, db: Session, request_id: UserId, acting_user_id: UserId) -> FriendRequest:
        """Reject as recipient; the row is kept with status rejected"""
        request = self.get_pending(db, request_id)
        self._require_party(request, acting_user_id, "recipient", "reject")

        request.status = FriendRequestStatus.REJECTED.value
        request.updated_at = utc_now()
        db.commit()
        db.refresh(request)

        logger.info(f"User {request.recipient_id} rejected friend request {request.id}")
        return request

    def cancel(self, db: Session, request_id: UserId, acting_user_id: UserId) -> None:
        """Withdraw as requester; the row is deleted"""
        request = self.get_pending(db, request_id)
        self._require_party(request, acting_user_id, "requester", "cancel")

        logger.info(f"User {request.requester_id} cancelled friend request {request.id}")
        db.delete(request)
        db.commit()


class FollowRequestService(RequestWorkflow):
    """Follow requests against private accounts"""

    model = FollowRequest
    pending_status = FollowRequestStatus.PENDING.value
    label = "follow request"

    def create(self, db: Session, requester_id: UserId, recipient_id: UserId) -> FollowRequest:
        """Open a follow request. Callers have already checked self-follow, existence and blocks."""
        requester_id, recipient_id = as_uuid(requester_id), as_uuid(recipient_id)

        existing = db.query(FollowRequest).filter(
            FollowRequest.requester_id == requester_id,
            FollowRequest.recipient_id == recipient_id,
            FollowRequest.status == self.pending_status
        ).first()
        if existing:
            raise ConflictError("A follow request is already pending for this user")

        request = FollowRequest(
            requester_id=requester_id,
            recipient_id=recipient_id,
            status=self.pending_status
        )
        db.add(request)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("A follow request is already pending for this user")
        db.refresh(request)

        logger.info(f"User {requester_id} requested to follow {recipient_id} ({request.id})")

        self.notifier.notify(
            db,
            recipient_id,
            title="New follow request",
            message=f"{user_service.display_name(db, requester_id)} wants to follow you",
            notification_type=NotificationType.SOCIAL_FOLLOW_REQUEST,
            link_url="/social/follow-requests/pending"
        )
        return request

    def approve(self, db: Session, request_id: UserId, acting_user_id: UserId) -> FollowRequest:
        """Approve as recipient: creates the follow edge on both profiles"""
        request = self.get_pending(db, request_id)
        self._require_party(request, acting_user_id, "recipient", "approve")

        requester_id, recipient_id = request.requester_id, request.recipient_id
        if self.profiles.blocked_between(db, requester_id, recipient_id):
            raise ForbiddenError("Unable to approve follow request")

        self.profiles.add_to_set(db, requester_id, "following", recipient_id)
        self.profiles.add_to_set(db, recipient_id, "followers", requester_id)
        self.recommendations.invalidate(requester_id, recipient_id)

        request.status = FollowRequestStatus.APPROVED.value
        request.updated_at = utc_now()
        db.commit()
        db.refresh(request)

        logger.info(f"User {recipient_id} approved follow request from {requester_id}")

        self.notifier.notify(
            db,
            requester_id,
            title="Follow request approved",
            message=f"{user_service.display_name(db, recipient_id)} approved your follow request",
            notification_type=NotificationType.SOCIAL_FOLLOW_APPROVE,
            link_url=f"/social/profile/{recipient_id}"
        )
        return request

    def deny(self, db: Session, request_id: UserId, acting_user_id: UserId) -> FollowRequest:
        request = self.get_pending(db, request_id)
        self._require_party(request, acting_user_id, "recipient", "deny")

        request.status = FollowRequestStatus.DENIED.value
        request.updated_at = utc_now()
        db.commit()
        db.refresh(request)

        logger.info(f"User {request.recipient_id} denied follow request {request.id}")
        return request

    def cancel(self, db: Session, request_id: UserId, acting_user_id: UserId) -> None:
        request = self.get_pending(db, request_id)
        self._require_party(request, acting_user_id, "requester", "cancel")

        logger.info(f"User {request.requester_id} cancelled follow request {request.id}")
        db.delete(request)
        db.commit()


friend_request_service = FriendRequestService(profile_store, notification_service, recommendation_service)
follow_request_service = FollowRequestService(profile_store, notification_service, recommendation_service)
