"""
HTTP surface: auth, status mapping and the main flows end to end
"""
from uuid import uuid4

import pytest

API = "/api/v1"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer not-a-jwt"}])
def test_social_endpoints_require_valid_token(client, headers):
    response = client.get(f"{API}/social/profile/me", headers=headers)
    assert response.status_code == 401


def test_token_for_inactive_user_is_rejected(client, make_user, auth_headers):
    ghost = make_user(is_active=False)
    response = client.get(f"{API}/users/me", headers=auth_headers(ghost))
    assert response.status_code == 401


def test_get_me(client, make_user, auth_headers):
    alice = make_user("alice")
    response = client.get(f"{API}/users/me", headers=auth_headers(alice))

    assert response.status_code == 200
    assert response.json()["username"] == "alice"


def test_follow_and_unfollow_flow(client, make_user, auth_headers):
    alice, bob = make_user(), make_user()

    response = client.post(f"{API}/social/follow/{bob.id}", headers=auth_headers(alice))
    assert response.status_code == 200
    assert response.json() == {"status": "following", "target_id": str(bob.id), "request_id": None}

    followers = client.get(f"{API}/social/users/{bob.id}/followers", headers=auth_headers(alice)).json()
    assert [u["id"] for u in followers["users"]] == [str(alice.id)]

    profile = client.get(f"{API}/social/profile/me", headers=auth_headers(alice)).json()
    assert profile["following"] == [str(bob.id)]

    response = client.delete(f"{API}/social/unfollow/{bob.id}", headers=auth_headers(alice))
    assert response.status_code == 200
    assert response.json()["success"] is True

    following = client.get(f"{API}/social/users/{alice.id}/following", headers=auth_headers(alice)).json()
    assert following == {"users": [], "total_count": 0}


def test_error_status_mapping(client, make_user, auth_headers):
    alice, bob = make_user(), make_user()
    headers = auth_headers(alice)

    self_follow = client.post(f"{API}/social/follow/{alice.id}", headers=headers)
    assert self_follow.status_code == 400
    assert self_follow.json()["success"] is False

    assert client.post(f"{API}/social/follow/{uuid4()}", headers=headers).status_code == 404

    client.post(f"{API}/social/block/{alice.id}", headers=auth_headers(bob))
    assert client.post(f"{API}/social/follow/{bob.id}", headers=headers).status_code == 403

    carol = make_user()
    first = client.post(f"{API}/social/friends/request", json={"recipient_id": str(carol.id)}, headers=headers)
    assert first.status_code == 201
    again = client.post(f"{API}/social/friends/request", json={"recipient_id": str(carol.id)}, headers=headers)
    assert again.status_code == 409


def test_malformed_id_is_validation_error(client, make_user, auth_headers):
    alice = make_user()
    response = client.post(f"{API}/social/follow/not-a-uuid", headers=auth_headers(alice))
    assert response.status_code == 422


def test_friend_request_flow(client, make_user, auth_headers):
    alice, bob = make_user("alice"), make_user("bob")

    sent = client.post(
        f"{API}/social/friends/request",
        json={"recipient_id": str(bob.id)},
        headers=auth_headers(alice)
    )
    assert sent.status_code == 201
    request_id = sent.json()["id"]
    assert sent.json()["status"] == "pending"

    pending = client.get(f"{API}/social/friends/requests/pending", headers=auth_headers(bob)).json()
    assert pending["incoming_count"] == 1
    assert pending["incoming"][0]["user"]["username"] == "alice"

    # Requester cannot accept their own request
    forbidden = client.patch(f"{API}/social/friends/requests/{request_id}/accept", headers=auth_headers(alice))
    assert forbidden.status_code == 403

    accepted = client.patch(f"{API}/social/friends/requests/{request_id}/accept", headers=auth_headers(bob))
    assert accepted.status_code == 200
    assert accepted.json()["request_id"] == request_id

    friends = client.get(f"{API}/social/friends/list", headers=auth_headers(alice)).json()
    assert [u["username"] for u in friends["users"]] == ["bob"]

    removed = client.delete(f"{API}/social/friends/{bob.id}", headers=auth_headers(alice))
    assert removed.status_code == 200
    assert client.get(f"{API}/social/friends/list", headers=auth_headers(bob)).json()["total_count"] == 0

    missing = client.delete(f"{API}/social/friends/{bob.id}", headers=auth_headers(alice))
    assert missing.status_code == 404


def test_block_and_unblock_flow(client, make_user, auth_headers):
    alice, bob = make_user(), make_user("bob")
    client.post(f"{API}/social/follow/{alice.id}", headers=auth_headers(bob))

    blocked = client.post(f"{API}/social/block/{bob.id}", headers=auth_headers(alice))
    assert blocked.status_code == 200
    assert blocked.json()["blocked_users"] == [str(bob.id)]
    assert blocked.json()["followers"] == []

    listing = client.get(f"{API}/social/blocked", headers=auth_headers(alice)).json()
    assert [u["username"] for u in listing["users"]] == ["bob"]

    unblocked = client.delete(f"{API}/social/unblock/{bob.id}", headers=auth_headers(alice))
    assert unblocked.json()["blocked_users"] == []
    assert unblocked.json()["followers"] == []


def test_private_account_follow_request_flow(client, make_user, auth_headers):
    alice, bob = make_user(), make_user()

    updated = client.put(f"{API}/settings/me", json={"is_private": True}, headers=auth_headers(bob))
    assert updated.status_code == 200
    assert updated.json()["is_private"] is True

    follow = client.post(f"{API}/social/follow/{bob.id}", headers=auth_headers(alice)).json()
    assert follow["status"] == "requested"
    request_id = follow["request_id"]

    pending = client.get(f"{API}/social/follow-requests/pending", headers=auth_headers(bob)).json()
    assert pending["incoming"][0]["request_id"] == request_id

    approved = client.patch(f"{API}/social/follow-requests/{request_id}/approve", headers=auth_headers(bob))
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"

    profile = client.get(f"{API}/social/profile/{bob.id}", headers=auth_headers(alice)).json()
    assert profile["followers"] == [str(alice.id)]


def test_notifications_endpoints(client, make_user, auth_headers):
    alice, bob, carol = make_user(), make_user(), make_user()
    client.post(f"{API}/social/follow/{bob.id}", headers=auth_headers(alice))
    client.post(f"{API}/social/follow/{bob.id}", headers=auth_headers(carol))
    headers = auth_headers(bob)

    page = client.get(f"{API}/notifications", params={"limit": 1}, headers=headers).json()
    assert page["total"] == 2
    assert page["has_more"] is True
    assert page["data"][0]["type"] == "social_follow"

    assert client.get(f"{API}/notifications/unread-count", headers=headers).json() == {"count": 2}

    notification_id = page["data"][0]["id"]
    read = client.patch(f"{API}/notifications/{notification_id}/read", headers=headers)
    assert read.status_code == 200
    assert read.json()["is_read"] is True

    # Someone else's notification
    other = client.patch(f"{API}/notifications/{notification_id}/read", headers=auth_headers(alice))
    assert other.status_code == 404

    all_read = client.patch(f"{API}/notifications/read-all", json={}, headers=headers)
    assert all_read.json() == {"modified_count": 1}
    assert client.get(f"{API}/notifications/unread-count", headers=headers).json() == {"count": 0}


def test_settings_interests_are_normalized_and_feed_recommendations(client, make_user, auth_headers):
    alice = make_user()
    make_user("chess_fan", interests=["chess"])
    headers = auth_headers(alice)

    assert client.get(f"{API}/social/recommendations", headers=headers).json()["total_count"] == 0

    updated = client.put(f"{API}/settings/me", json={"interests": [" Chess ", "chess", "Go"]}, headers=headers)
    assert updated.json()["interests"] == ["chess", "go"]

    recommendations = client.get(f"{API}/social/recommendations", headers=headers).json()
    assert [r["user"]["username"] for r in recommendations["recommendations"]] == ["chess_fan"]
    assert recommendations["recommendations"][0]["shared_interests"] == 1


def test_group_endpoints(client, make_user, auth_headers):
    owner, member, outsider = make_user(), make_user(), make_user()

    created = client.post(f"{API}/social/groups", json={"name": "Chess club"}, headers=auth_headers(owner))
    assert created.status_code == 201
    group_id = created.json()["id"]
    assert created.json()["members"] == [str(owner.id)]

    added = client.post(
        f"{API}/social/groups/{group_id}/members",
        json={"member_id": str(member.id)},
        headers=auth_headers(owner)
    )
    assert added.json()["members"] == [str(owner.id), str(member.id)]

    listing = client.get(f"{API}/social/groups", headers=auth_headers(member)).json()
    assert [g["id"] for g in listing["groups"]] == [group_id]

    renamed = client.patch(
        f"{API}/social/groups/{group_id}",
        json={"name": "Chess & Go club"},
        headers=auth_headers(outsider)
    )
    assert renamed.status_code == 403

    kick_owner = client.delete(f"{API}/social/groups/{group_id}/members/{owner.id}", headers=auth_headers(owner))
    assert kick_owner.status_code == 400

    left = client.delete(f"{API}/social/groups/{group_id}/members/{member.id}", headers=auth_headers(member))
    assert left.json()["members"] == [str(owner.id)]

    deleted = client.delete(f"{API}/social/groups/{group_id}", headers=auth_headers(owner))
    assert deleted.status_code == 200
    assert client.get(f"{API}/social/groups/{group_id}", headers=auth_headers(owner)).status_code == 404
