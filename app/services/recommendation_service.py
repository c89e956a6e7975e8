"""
Recommendation service - "people you may know" by shared interests
"""
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple
import logging
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.setting import Setting
from app.schemas.social import RecommendationEntry, RecommendationsResponse
from app.schemas.user import UserSummary
from app.services.profile_store import ProfileStore, id_set, profile_store
from app.services.settings_service import SettingsService, settings_service
from app.services.user_service import UserId, as_uuid, user_service
from app.utils.ttl_cache import TTLCache

logger = logging.getLogger(__name__)


class RecommendationCandidate(NamedTuple):
    user_id: str
    shared_interests: int
    followers_count: int


def rank_candidates(
    interests: Iterable[str],
    exclusions: Iterable[UserId],
    candidates: Iterable[Tuple[UserId, Optional[Iterable[str]]]],
    follower_counts: Optional[Dict[str, int]] = None
) -> List[RecommendationCandidate]:
    """
    Score candidates by number of shared interests.

    Candidates in `exclusions` or sharing nothing are dropped. Order is shared
    interests desc, then follower count desc, then user id so equal scores
    come back in a stable order.
    """
    wanted = set(interests)
    excluded = {str(user_id) for user_id in exclusions}
    follower_counts = follower_counts or {}

    matched = []
    for user_id, candidate_interests in candidates:
        user_id = str(user_id)
        if user_id in excluded:
            continue
        shared = len(wanted.intersection(candidate_interests or ()))
        if shared == 0:
            continue
        matched.append(RecommendationCandidate(
            user_id=user_id,
            shared_interests=shared,
            followers_count=follower_counts.get(user_id, 0)
        ))

    matched.sort(key=lambda c: (-c.shared_interests, -c.followers_count, c.user_id))
    return matched


class RecommendationService:
    """Read-only ranking over the graph, cached per user for a short TTL"""

    def __init__(
        self,
        profiles: ProfileStore,
        user_settings: SettingsService,
        ttl_seconds: float = settings.RECOMMENDATIONS_CACHE_TTL_SECONDS,
        limit: int = settings.RECOMMENDATIONS_LIMIT
    ):
        self.profiles = profiles
        self.user_settings = user_settings
        self.limit = limit
        self.cache: TTLCache[RecommendationsResponse] = TTLCache(ttl_seconds)

    def invalidate(self, *user_ids: UserId) -> None:
        """Drop cached results for users whose exclusion set or interests changed"""
        for user_id in user_ids:
            self.cache.invalidate(str(as_uuid(user_id)))

    def get_recommendations(self, db: Session, user_id: UserId) -> RecommendationsResponse:
        user_id = as_uuid(user_id)
        cached = self.cache.get(str(user_id))
        if cached is not None:
            return cached

        logger.info(f"Starting recommendation process for user: {user_id}")
        result = self._compute(db, user_id)
        self.cache.set(str(user_id), result)
        return result

    def _compute(self, db: Session, user_id) -> RecommendationsResponse:
        profile = self.profiles.get_or_create(db, user_id)
        interests = self.user_settings.get_interests(db, user_id)
        if not interests:
            logger.info(f"User {user_id} has no interests. No recommendations to generate.")
            return RecommendationsResponse(recommendations=[], total_count=0)

        exclusions = {str(user_id)}
        for field in ("friends", "followers", "following", "blocked_users"):
            exclusions.update(id_set(getattr(profile, field)))

        candidates = [
            (row.user_id, row.interests)
            for row in db.query(Setting.user_id, Setting.interests).filter(Setting.user_id != user_id).all()
        ]

        # First pass only decides who matches, so follower counts are fetched for those alone
        matched = rank_candidates(interests, exclusions, candidates)
        logger.info(f"Found {len(matched)} candidates with shared interests.")
        if not matched:
            return RecommendationsResponse(recommendations=[], total_count=0)

        follower_counts = {
            str(candidate_profile.owner_id): len(id_set(candidate_profile.followers))
            for candidate_profile in self.profiles.get_many(db, [c.user_id for c in matched])
        }
        matched_ids = {c.user_id for c in matched}
        ranked = rank_candidates(
            interests,
            exclusions,
            [(cid, cinterests) for cid, cinterests in candidates if str(cid) in matched_ids],
            follower_counts
        )

        users = {str(user.id): user for user in user_service.get_users(db, [c.user_id for c in ranked])}
        entries = [
            RecommendationEntry(
                user=UserSummary.model_validate(users[c.user_id]),
                shared_interests=c.shared_interests,
                followers_count=c.followers_count
            )
            for c in ranked
            if c.user_id in users
        ][:self.limit]

        logger.info(f"Returning {len(entries)} sorted recommendations for user {user_id}.")
        return RecommendationsResponse(recommendations=entries, total_count=len(entries))


recommendation_service = RecommendationService(profile_store, settings_service)
