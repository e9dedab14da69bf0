from __future__ import annotations

from unittest.mock import patch

from fastapi.testclient import TestClient

from friendnet.app import app
from friendnet.directory.store import DirectoryError, clear_directory, get_user
from friendnet.recommendations.retrieval import gather_candidates, get_recommendations


def _register(username, interests=None):
    c = TestClient(app)
    resp = c.post("/auth/register", json={
        "username": username,
        "password": "pw123",
        "interests": interests or [],
    })
    return c, resp.json()["userId"]


def _befriend(a, a_id, b, b_id):
    a.post(f"/friends/request/{b_id}")
    b.post(f"/friends/accept/{a_id}")


def test_recommendations_empty_for_isolated_user():
    clear_directory()
    alice, _ = _register("alice")
    _register("bob", ["chess"])
    resp = alice.get("/friends/recommendations")
    assert resp.status_code == 200
    assert resp.json() == []


def test_recommendations_shared_interest():
    clear_directory()
    alice, _ = _register("alice", ["chess"])
    _, bob_id = _register("bob", ["chess"])
    _register("carol")
    body = alice.get("/friends/recommendations").json()
    assert len(body) == 1
    assert body[0]["user"]["id"] == bob_id
    assert body[0]["mutualFriends"] == 0
    assert body[0]["mutualInterests"] == 1
    assert body[0]["score"] == 1


def test_recommendations_mutual_friends_outrank_interests():
    clear_directory()
    alice, alice_id = _register("alice", ["chess"])
    hub, hub_id = _register("hub")
    dave, dave_id = _register("dave")
    _, erin_id = _register("erin", ["chess"])
    _befriend(alice, alice_id, hub, hub_id)
    _befriend(dave, dave_id, hub, hub_id)

    body = alice.get("/friends/recommendations").json()
    assert [r["user"]["id"] for r in body] == [dave_id, erin_id]
    assert body[0]["mutualFriends"] == 1 and body[0]["score"] == 2
    assert body[1]["mutualInterests"] == 1 and body[1]["score"] == 1


def test_recommendations_exclude_friends_and_requests():
    clear_directory()
    alice, alice_id = _register("alice", ["chess"])
    friend, friend_id = _register("friend", ["chess"])
    _, sent_id = _register("sent", ["chess"])
    pending, _ = _register("pending", ["chess"])
    _, stranger_id = _register("stranger", ["chess"])
    _befriend(alice, alice_id, friend, friend_id)
    alice.post(f"/friends/request/{sent_id}")
    pending.post(f"/friends/request/{alice_id}")

    body = alice.get("/friends/recommendations").json()
    assert [r["user"]["id"] for r in body] == [stranger_id]


def test_recommendations_capped_at_five_and_sorted():
    clear_directory()
    alice, _ = _register("alice", ["a", "b", "c"])
    _register("u1", ["a"])
    _register("u2", ["a", "b"])
    _register("u3", ["a", "b", "c"])
    _register("u4", ["b"])
    _register("u5", ["c", "b"])
    _register("u6", ["c"])
    _register("u7", ["z"])
    body = alice.get("/friends/recommendations").json()
    assert len(body) == 5
    scores = [r["score"] for r in body]
    assert scores == sorted(scores, reverse=True)
    assert body[0]["user"]["username"] == "u3"
    for r in body:
        assert r["score"] == r["mutualFriends"] * 2 + r["mutualInterests"]


def test_gather_candidates_unions_both_pools():
    clear_directory()
    alice, alice_id = _register("alice", ["chess"])
    hub, hub_id = _register("hub")
    both, both_id = _register("both", ["chess"])
    _befriend(alice, alice_id, hub, hub_id)
    _befriend(both, both_id, hub, hub_id)

    candidates = gather_candidates(get_user(alice_id))
    # ``both`` shares an interest and a friend, so it sits in both pools
    assert [u.id for u in candidates] == [both_id, both_id]

    recs = get_recommendations(alice_id)
    assert len(recs) == 1
    assert recs[0].mutual_friends == 1
    assert recs[0].mutual_interests == 1
    assert recs[0].score == 3


def test_get_recommendations_unknown_user():
    clear_directory()
    assert get_recommendations("missing") == []


def test_recommendations_directory_failure_is_500():
    clear_directory()
    alice, _ = _register("alice", ["chess"])
    with patch(
        "friendnet.recommendations.retrieval.find_with_interests",
        side_effect=DirectoryError("boom"),
    ):
        resp = alice.get("/friends/recommendations")
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error"}
