"""
Follow / unfollow / block / unblock / unfriend behaviour of RelationshipService
"""
from uuid import uuid4

import pytest

from app.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from app.models import Notification, NotificationType
from app.services.notification_service import notification_service
from app.services.profile_store import profile_store
from app.services.social_service import relationship_service


def sets(db, user):
    profile = profile_store.get_or_create(db, user.id)
    return {
        field: set(getattr(profile, field))
        for field in ("friends", "followers", "following", "blocked_users")
    }


def befriend(db, a, b):
    profile_store.add_to_set(db, a.id, "friends", b.id)
    profile_store.add_to_set(db, b.id, "friends", a.id)


def test_follow_adds_edge_on_both_profiles(db, make_user):
    alice, bob = make_user("alice"), make_user("bob")

    result = relationship_service.follow(db, alice.id, bob.id)

    assert result.status == "following"
    assert str(bob.id) in sets(db, alice)["following"]
    assert str(alice.id) in sets(db, bob)["followers"]


def test_follow_twice_is_idempotent(db, make_user):
    alice, bob = make_user(), make_user()

    relationship_service.follow(db, alice.id, bob.id)
    once = (sets(db, alice), sets(db, bob))
    relationship_service.follow(db, alice.id, bob.id)

    assert (sets(db, alice), sets(db, bob)) == once
    assert profile_store.get_or_create(db, alice.id).following == [str(bob.id)]


def test_follow_self_is_bad_request(db, make_user):
    alice = make_user()
    with pytest.raises(BadRequestError):
        relationship_service.follow(db, alice.id, alice.id)


def test_follow_unknown_user_is_not_found(db, make_user):
    alice = make_user()
    with pytest.raises(NotFoundError):
        relationship_service.follow(db, alice.id, uuid4())


def test_follow_repairs_half_applied_edge(db, make_user):
    alice, bob = make_user(), make_user()
    # Simulate a crash between the two writes of an earlier follow
    profile_store.add_to_set(db, alice.id, "following", bob.id)

    relationship_service.follow(db, alice.id, bob.id)

    assert str(alice.id) in sets(db, bob)["followers"]


def test_follow_then_unfollow_restores_previous_state(db, make_user):
    alice, bob, carol = make_user(), make_user(), make_user()
    relationship_service.follow(db, carol.id, bob.id)
    before = (sets(db, alice), sets(db, bob))

    relationship_service.follow(db, alice.id, bob.id)
    assert relationship_service.unfollow(db, alice.id, bob.id) is True

    assert (sets(db, alice), sets(db, bob)) == before


def test_unfollow_when_not_following_is_noop(db, make_user):
    alice, bob = make_user(), make_user()
    assert relationship_service.unfollow(db, alice.id, bob.id) is False


def test_follow_notifies_target_once(db, make_user):
    alice, bob = make_user(), make_user()

    relationship_service.follow(db, alice.id, bob.id)
    relationship_service.follow(db, alice.id, bob.id)

    notifications = db.query(Notification).filter(Notification.user_id == bob.id).all()
    assert len(notifications) == 1
    assert notifications[0].type == NotificationType.SOCIAL_FOLLOW.value


def test_notification_failure_does_not_fail_follow(db, make_user, monkeypatch):
    alice, bob = make_user(), make_user()

    def boom(*args, **kwargs):
        raise RuntimeError("notification store down")

    monkeypatch.setattr(notification_service, "create_notification", boom)

    result = relationship_service.follow(db, alice.id, bob.id)

    assert result.status == "following"
    assert str(alice.id) in sets(db, bob)["followers"]


def test_block_strips_every_edge_on_both_sides(db, make_user):
    alice, bob = make_user(), make_user()
    befriend(db, alice, bob)
    relationship_service.follow(db, alice.id, bob.id)
    relationship_service.follow(db, bob.id, alice.id)

    relationship_service.block(db, alice.id, bob.id)

    a, b = sets(db, alice), sets(db, bob)
    for field in ("friends", "following", "followers"):
        assert str(bob.id) not in a[field]
        assert str(alice.id) not in b[field]
    assert str(bob.id) in a["blocked_users"]


def test_block_self_is_bad_request(db, make_user):
    alice = make_user()
    with pytest.raises(BadRequestError):
        relationship_service.block(db, alice.id, alice.id)


def test_block_when_already_blocked_returns_current_profile(db, make_user):
    alice, bob = make_user(), make_user()
    relationship_service.block(db, alice.id, bob.id)

    profile = relationship_service.block(db, alice.id, bob.id)

    assert profile.blocked_users == [str(bob.id)]


def test_unblock_does_not_restore_relationships(db, make_user):
    alice, bob = make_user(), make_user()
    relationship_service.follow(db, alice.id, bob.id)
    relationship_service.block(db, alice.id, bob.id)

    relationship_service.unblock(db, alice.id, bob.id)

    a = sets(db, alice)
    assert a["blocked_users"] == set()
    assert a["following"] == set()


def test_follow_across_block_is_forbidden(db, make_user):
    alice, bob = make_user(), make_user()
    relationship_service.block(db, bob.id, alice.id)
    assert relationship_service.is_blocked_between(db, alice.id, bob.id)

    with pytest.raises(ForbiddenError):
        relationship_service.follow(db, alice.id, bob.id)
    with pytest.raises(ForbiddenError):
        relationship_service.follow(db, bob.id, alice.id)


def test_remove_friend_updates_both_sides(db, make_user):
    alice, bob = make_user(), make_user()
    befriend(db, alice, bob)

    relationship_service.remove_friend(db, alice.id, bob.id)

    assert sets(db, alice)["friends"] == set()
    assert sets(db, bob)["friends"] == set()


def test_remove_friend_when_not_friends_is_not_found(db, make_user):
    alice, bob = make_user(), make_user()
    with pytest.raises(NotFoundError):
        relationship_service.remove_friend(db, alice.id, bob.id)


def test_list_followers_skips_inactive_users(db, make_user):
    alice, bob, ghost = make_user(), make_user(), make_user()
    relationship_service.follow(db, bob.id, alice.id)
    relationship_service.follow(db, ghost.id, alice.id)
    ghost.is_active = False
    db.commit()

    listing = relationship_service.list_followers(db, alice.id)

    assert [u.id for u in listing.users] == [bob.id]
    assert listing.total_count == 1


def test_block_retry_completes_interrupted_block(db, make_user):
    alice, bob = make_user(), make_user()
    relationship_service.follow(db, bob.id, alice.id)
    relationship_service.follow(db, alice.id, bob.id)
    # blocked_users written, edges never severed
    profile_store.add_to_set(db, alice.id, "blocked_users", bob.id)

    relationship_service.block(db, alice.id, bob.id)

    a, b = sets(db, alice), sets(db, bob)
    assert a["followers"] == a["following"] == set()
    assert b["followers"] == b["following"] == set()
    assert a["blocked_users"] == {str(bob.id)}


def test_unfollow_deactivated_user_drops_both_sides(db, make_user):
    alice, bob = make_user(), make_user()
    relationship_service.follow(db, alice.id, bob.id)
    bob.is_active = False
    db.commit()

    assert relationship_service.unfollow(db, alice.id, bob.id) is True

    assert sets(db, alice)["following"] == set()
    assert profile_store.get_existing(db, bob.id).followers == []


def test_unfollow_unknown_user_is_noop(db, make_user):
    alice = make_user()
    assert relationship_service.unfollow(db, alice.id, uuid4()) is False


def test_remove_deactivated_friend(db, make_user):
    alice, bob = make_user(), make_user()
    befriend(db, alice, bob)
    bob.is_active = False
    db.commit()

    relationship_service.remove_friend(db, alice.id, bob.id)

    assert sets(db, alice)["friends"] == set()
    assert profile_store.get_existing(db, bob.id).friends == []
