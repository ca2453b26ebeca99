from __future__ import annotations

import random

from relay_service.domain.entities.online_user import OnlineUser
from relay_service.infrastructure.ws.registry import ConnectionRegistry


def test_register_and_find(registry):
    registry.register("u1", "sA")

    assert registry.find("u1") == "sA"
    assert registry.find("nobody") is None
    assert registry.snapshot() == [OnlineUser("u1", "sA")]


def test_snapshot_keeps_registration_order(registry):
    registry.register("u1", "sA")
    registry.register("u2", "sB")
    registry.register("u3", "sC")

    assert [u.user_id for u in registry.snapshot()] == ["u1", "u2", "u3"]


def test_reannounce_on_new_session_replaces_entry(registry):
    registry.register("u1", "sA")
    registry.register("u2", "sB")

    displaced = registry.register("u1", "sC")

    assert displaced == "sA"
    assert registry.find("u1") == "sC"
    assert registry.snapshot() == [OnlineUser("u2", "sB"), OnlineUser("u1", "sC")]


def test_reannounce_on_same_session_is_not_a_displacement(registry):
    registry.register("u1", "sA")

    assert registry.register("u1", "sA") is None
    assert len(registry) == 1


def test_session_switching_user_drops_previous_user(registry):
    registry.register("u1", "sA")
    registry.register("u2", "sA")

    assert registry.find("u1") is None
    assert registry.snapshot() == [OnlineUser("u2", "sA")]


def test_stale_session_disconnect_keeps_newer_session(registry):
    registry.register("u1", "sA")
    registry.register("u1", "sB")

    assert registry.unregister_by_session("sA") is False
    assert registry.find("u1") == "sB"


def test_unregister_by_session(registry):
    registry.register("u1", "sA")
    registry.register("u2", "sB")

    assert registry.unregister_by_session("sA") is True
    assert registry.find("u1") is None
    assert registry.snapshot() == [OnlineUser("u2", "sB")]


def test_unregister_by_user_uses_user_id(registry):
    registry.register("u1", "sA")

    assert registry.unregister_by_user("sA") is False
    assert registry.unregister_by_user("u1") is True
    assert registry.snapshot() == []


def test_unknown_ids_are_noops(registry):
    assert registry.unregister_by_session("missing") is False
    assert registry.unregister_by_user("missing") is False
    assert registry.snapshot() == []


def test_snapshot_is_a_copy(registry):
    registry.register("u1", "sA")
    snap = registry.snapshot()
    registry.unregister_by_user("u1")

    assert snap == [OnlineUser("u1", "sA")]


def test_random_sequences_match_model():
    rng = random.Random(1234)
    users = [f"u{i}" for i in range(5)]
    sessions = [f"s{i}" for i in range(5)]

    for _ in range(50):
        registry = ConnectionRegistry()
        model: dict[str, str] = {}  # session -> user
        for _ in range(40):
            op = rng.choice(["register", "by_session", "by_user"])
            if op == "register":
                user, session = rng.choice(users), rng.choice(sessions)
                registry.register(user, session)
                model = {s: u for s, u in model.items() if s != session and u != user}
                model[session] = user
            elif op == "by_session":
                session = rng.choice(sessions)
                registry.unregister_by_session(session)
                model.pop(session, None)
            else:
                user = rng.choice(users)
                registry.unregister_by_user(user)
                model = {s: u for s, u in model.items() if u != user}

            snap = registry.snapshot()
            assert {(u.session_id, u.user_id) for u in snap} == set(model.items())
            assert len({u.session_id for u in snap}) == len(snap)
            assert len({u.user_id for u in snap}) == len(snap)
