"""
Interest-based recommendations and the TTL cache behind them
"""
from app.services.profile_store import profile_store
from app.services.recommendation_service import (
    RecommendationService,
    rank_candidates,
    recommendation_service,
)
from app.services.request_service import friend_request_service
from app.services.settings_service import settings_service
from app.services.social_service import relationship_service
from app.utils.ttl_cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


# --- rank_candidates --------------------------------------------------------

def test_rank_orders_by_shared_interests_then_followers_then_id():
    ranked = rank_candidates(
        ["chess", "go", "poker"],
        exclusions=[],
        candidates=[
            ("b", ["chess"]),
            ("a", ["chess"]),
            ("c", ["chess", "go"]),
            ("d", ["chess"]),
        ],
        follower_counts={"d": 5},
    )

    assert [c.user_id for c in ranked] == ["c", "d", "a", "b"]
    assert ranked[0].shared_interests == 2
    assert ranked[1].followers_count == 5


def test_rank_drops_excluded_and_unrelated_candidates():
    ranked = rank_candidates(
        ["chess"],
        exclusions=["me", "friend"],
        candidates=[("me", ["chess"]), ("friend", ["chess"]), ("stranger", ["knitting"]), ("new", None)],
    )
    assert ranked == []


def test_rank_with_no_interests_is_empty():
    assert rank_candidates([], [], [("a", ["chess"])]) == []


# --- RecommendationService --------------------------------------------------

def test_recommendations_exclude_existing_relationships(db, make_user):
    me = make_user("me", interests=["chess", "go"])
    friend = make_user("friend", interests=["chess"])
    followed = make_user("followed", interests=["chess"])
    blocked = make_user("blocked", interests=["chess", "go"])
    stranger = make_user("stranger", interests=["chess"])
    popular = make_user("popular", interests=["go"])
    make_user("unrelated", interests=["knitting"])

    profile_store.add_to_set(db, me.id, "friends", friend.id)
    profile_store.add_to_set(db, friend.id, "friends", me.id)
    relationship_service.follow(db, me.id, followed.id)
    relationship_service.block(db, me.id, blocked.id)
    relationship_service.follow(db, friend.id, popular.id)

    service = RecommendationService(profile_store, settings_service, ttl_seconds=60, limit=10)
    result = service.get_recommendations(db, me.id)

    # Equal overlap, so the user with more followers ranks first
    assert [entry.user.id for entry in result.recommendations] == [popular.id, stranger.id]
    assert result.total_count == 2
    assert result.recommendations[0].followers_count == 1


def test_recommendations_without_interests_are_empty(db, make_user):
    me = make_user()
    make_user(interests=["chess"])

    service = RecommendationService(profile_store, settings_service, ttl_seconds=60)
    result = service.get_recommendations(db, me.id)

    assert result.recommendations == []
    assert result.total_count == 0


def test_recommendations_respect_limit(db, make_user):
    me = make_user(interests=["chess"])
    for _ in range(4):
        make_user(interests=["chess"])

    service = RecommendationService(profile_store, settings_service, ttl_seconds=60, limit=2)

    assert len(service.get_recommendations(db, me.id).recommendations) == 2


def test_recommendations_are_cached_until_invalidated(db, make_user):
    me = make_user(interests=["chess"])
    service = RecommendationService(profile_store, settings_service, ttl_seconds=60)

    assert service.get_recommendations(db, me.id).total_count == 0

    make_user(interests=["chess"])
    assert service.get_recommendations(db, me.id).total_count == 0

    service.invalidate(me.id)
    assert service.get_recommendations(db, me.id).total_count == 1


def test_relationship_changes_refresh_cached_recommendations(db, make_user):
    alice = make_user(interests=["chess"])
    bob, carol, dave = (make_user(interests=["chess"]) for _ in range(3))

    def recommended():
        result = recommendation_service.get_recommendations(db, alice.id)
        return {entry.user.id for entry in result.recommendations}

    assert recommended() == {bob.id, carol.id, dave.id}

    relationship_service.block(db, alice.id, bob.id)
    assert recommended() == {carol.id, dave.id}

    relationship_service.follow(db, alice.id, carol.id)
    assert recommended() == {dave.id}

    request = friend_request_service.send(db, dave.id, alice.id)
    friend_request_service.accept(db, request.id, alice.id)
    assert recommended() == set()

    relationship_service.unfollow(db, alice.id, carol.id)
    assert recommended() == {carol.id}


# --- TTLCache ---------------------------------------------------------------

def test_ttl_cache_expires_entries():
    clock = FakeClock()
    cache = TTLCache(30, clock=clock)
    cache.set("k", "v")

    clock.now += 29.9
    assert cache.get("k") == "v"
    assert "k" in cache

    clock.now += 0.1
    assert cache.get("k") is None
    assert "k" not in cache


def test_ttl_cache_set_refreshes_expiry():
    clock = FakeClock()
    cache = TTLCache(10, clock=clock)
    cache.set("k", 1)
    clock.now += 8
    cache.set("k", 2)
    clock.now += 8

    assert cache.get("k") == 2


def test_ttl_cache_invalidate_and_clear():
    cache = TTLCache(10)
    cache.set("a", 1)
    cache.set("b", 2)

    cache.invalidate("a")
    cache.invalidate("missing")
    assert cache.get("a") is None
    assert len(cache) == 1

    cache.clear()
    assert len(cache) == 0
