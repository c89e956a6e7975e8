"""
Social service for follows, blocks and friend lists
"""
import logging
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from app.models.notification import NotificationType
from app.models.social import SocialProfile
from app.schemas.social import FollowResponse, UserListResponse
from app.schemas.user import UserSummary
from app.services.consistency_service import ConsistencyEnforcer, consistency_enforcer
from app.services.notification_service import NotificationService, notification_service
from app.services.profile_store import ProfileStore, id_set, profile_store
from app.services.recommendation_service import RecommendationService, recommendation_service
from app.services.request_service import FollowRequestService, follow_request_service
from app.services.settings_service import SettingsService, settings_service
from app.services.user_service import UserId, as_uuid, user_service

logger = logging.getLogger(__name__)


class RelationshipService:
    """
    Applies follow/unfollow/block/unblock/unfriend across the two profiles involved.

    Every mutation is idempotent. Paired writes are not transactional, so a
    failure between them leaves one side updated; calling the same operation
    again completes it.
    """

    def __init__(
        self,
        profiles: ProfileStore,
        follow_requests: FollowRequestService,
        user_settings: SettingsService,
        notifier: NotificationService,
        enforcer: ConsistencyEnforcer,
        recommendations: RecommendationService
    ):
        self.profiles = profiles
        self.follow_requests = follow_requests
        self.user_settings = user_settings
        self.notifier = notifier
        self.enforcer = enforcer
        self.recommendations = recommendations

    def get_profile(self, db: Session, user_id: UserId) -> SocialProfile:
        return self.profiles.get_or_create(db, user_id)

    def follow(self, db: Session, actor_id: UserId, target_id: UserId) -> FollowResponse:
        """
        Follow a user.

        Public targets are followed directly. Private targets get a follow
        request instead, unless the edge already exists on either side (then
        this call just completes it).
        """
        actor_id, target_id = as_uuid(actor_id), as_uuid(target_id)
        if actor_id == target_id:
            raise BadRequestError("You cannot follow yourself")

        actor_profile = self.profiles.get_or_create(db, actor_id)
        target_profile = self.profiles.get_or_create(db, target_id)

        if self.profiles.blocked_between(db, actor_id, target_id):
            raise ForbiddenError("Unable to follow this user")

        edge_exists = (
            self.profiles.has(actor_profile, "following", target_id)
            or self.profiles.has(target_profile, "followers", actor_id)
        )
        if not edge_exists and self.user_settings.is_private(db, target_id):
            request = self.follow_requests.create(db, actor_id, target_id)
            return FollowResponse(status="requested", target_id=target_id, request_id=request.id)

        added_following = self.profiles.add_to_set(db, actor_id, "following", target_id)
        added_follower = self.profiles.add_to_set(db, target_id, "followers", actor_id)

        if added_following or added_follower:
            logger.info(f"User {actor_id} followed {target_id}")
            self.recommendations.invalidate(actor_id, target_id)
        if added_follower:
            self.notifier.notify(
                db,
                target_id,
                title="New follower",
                message=f"{user_service.display_name(db, actor_id)} started following you",
                notification_type=NotificationType.SOCIAL_FOLLOW,
                link_url=f"/social/profile/{actor_id}"
            )

        return FollowResponse(status="following", target_id=target_id)

    def unfollow(self, db: Session, actor_id: UserId, target_id: UserId) -> bool:
        """
        Remove the follow edge from both sides. Returns True if anything changed.

        The target does not have to be an active user, so a follow of a
        deactivated account can still be dropped.
        """
        actor_id, target_id = as_uuid(actor_id), as_uuid(target_id)
        if actor_id == target_id:
            raise BadRequestError("You cannot unfollow yourself")

        removed_following = self.profiles.pull(db, actor_id, "following", target_id)
        removed_follower = self.profiles.pull(db, target_id, "followers", actor_id)

        changed = removed_following or removed_follower
        if changed:
            logger.info(f"User {actor_id} unfollowed {target_id}")
            self.recommendations.invalidate(actor_id, target_id)
        return changed

    def block(self, db: Session, actor_id: UserId, target_id: UserId) -> SocialProfile:
        """
        Block a user and strip every friend/follow edge between the two.

        Blocking again skips the blocked_users write but still severs, which
        completes a block that was interrupted before its edges were removed.
        """
        actor_id, target_id = as_uuid(actor_id), as_uuid(target_id)
        if actor_id == target_id:
            raise BadRequestError("You cannot block yourself")

        actor_profile = self.profiles.get_or_create(db, actor_id)
        self.profiles.get_or_create(db, target_id)

        if self.profiles.has(actor_profile, "blocked_users", target_id):
            logger.info(f"User {actor_id} already blocks {target_id}")
        else:
            self.profiles.add_to_set(db, actor_id, "blocked_users", target_id)
            logger.info(f"User {actor_id} blocked {target_id}")

        self.enforcer.sever(db, actor_id, target_id)
        self.recommendations.invalidate(actor_id, target_id)
        return self.profiles.get_or_create(db, actor_id)

    def unblock(self, db: Session, actor_id: UserId, target_id: UserId) -> SocialProfile:
        """Lift a block. Relationships removed by the block are not restored."""
        actor_id, target_id = as_uuid(actor_id), as_uuid(target_id)
        if actor_id == target_id:
            raise BadRequestError("You cannot unblock yourself")

        if self.profiles.pull(db, actor_id, "blocked_users", target_id):
            logger.info(f"User {actor_id} unblocked {target_id}")
            self.recommendations.invalidate(actor_id, target_id)
        return self.profiles.get_or_create(db, actor_id)

    def remove_friend(self, db: Session, user_id: UserId, friend_id: UserId) -> None:
        """Unfriend; both friends sets are updated even if the friend was deactivated"""
        user_id, friend_id = as_uuid(user_id), as_uuid(friend_id)
        if user_id == friend_id:
            raise BadRequestError("You cannot unfriend yourself")

        user_profile = self.profiles.get_or_create(db, user_id)
        friend_profile = self.profiles.get_existing(db, friend_id)

        if not (
            self.profiles.has(user_profile, "friends", friend_id)
            or (friend_profile is not None and self.profiles.has(friend_profile, "friends", user_id))
        ):
            raise NotFoundError("Friendship not found")

        self.profiles.pull(db, user_id, "friends", friend_id)
        self.profiles.pull(db, friend_id, "friends", user_id)
        self.recommendations.invalidate(user_id, friend_id)
        logger.info(f"User {user_id} removed friend {friend_id}")

    def are_friends(self, db: Session, user_id: UserId, other_user_id: UserId) -> bool:
        profile = self.profiles.get_existing(db, user_id)
        return bool(profile) and self.profiles.has(profile, "friends", other_user_id)

    def is_blocked_between(self, db: Session, user_id: UserId, other_user_id: UserId) -> bool:
        return self.profiles.blocked_between(db, user_id, other_user_id)

    def _list(self, db: Session, user_id: UserId, field: str) -> UserListResponse:
        profile = self.profiles.get_or_create(db, user_id)
        users = user_service.get_users(db, id_set(getattr(profile, field)))
        return UserListResponse(
            users=[UserSummary.model_validate(user) for user in users],
            total_count=len(users)
        )

    def list_friends(self, db: Session, user_id: UserId) -> UserListResponse:
        return self._list(db, user_id, "friends")

    def list_followers(self, db: Session, user_id: UserId) -> UserListResponse:
        return self._list(db, user_id, "followers")

    def list_following(self, db: Session, user_id: UserId) -> UserListResponse:
        return self._list(db, user_id, "following")

    def list_blocked(self, db: Session, user_id: UserId) -> UserListResponse:
        return self._list(db, user_id, "blocked_users")


relationship_service = RelationshipService(
    profile_store,
    follow_request_service,
    settings_service,
    notification_service,
    consistency_enforcer,
    recommendation_service,
)
