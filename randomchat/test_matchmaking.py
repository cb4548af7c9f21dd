"""Tests for the matchmaker — the single waiting seat and pairing."""

import threading
from concurrent.futures import ThreadPoolExecutor

from randomchat.chats import ChatStore
from randomchat.matchmaking import Matchmaker


def _matchmaker():
    chats = ChatStore()
    return Matchmaker(chats), chats


def test_first_request_waits():
    mm, chats = _matchmaker()
    assert mm.request_pairing("a") is None
    assert mm.waiting == "a"
    assert chats.get("a") is None


def test_duplicate_request_is_a_noop():
    mm, chats = _matchmaker()
    mm.request_pairing("a")
    assert mm.request_pairing("a") is None
    assert mm.is_waiting("a")
    assert chats.get("a") is None


def test_second_identity_pairs_both_into_one_chat():
    mm, chats = _matchmaker()
    mm.request_pairing("a")
    chat = mm.request_pairing("b")

    assert chat is not None
    assert chat.participants == ("a", "b")
    assert chats.get("a") is chat
    assert chats.get("b") is chat
    assert mm.waiting is None


def test_third_identity_starts_a_new_wait():
    mm, chats = _matchmaker()
    mm.request_pairing("a")
    first = mm.request_pairing("b")

    assert mm.request_pairing("c") is None
    assert mm.waiting == "c"
    assert chats.get("c") is None
    assert chats.get("a") is first
    assert chats.get("b") is first


def test_chatting_identity_can_be_repaired():
    mm, chats = _matchmaker()
    mm.request_pairing("a")
    old = mm.request_pairing("b")

    mm.request_pairing("a")
    new = mm.request_pairing("c")

    assert chats.get("a") is new
    assert chats.get("c") is new
    assert chats.get("b") is old
    assert new is not old


def test_release_only_clears_own_seat():
    mm, _ = _matchmaker()
    mm.request_pairing("a")
    assert mm.release("b") is False
    assert mm.waiting == "a"
    assert mm.release("a") is True
    assert mm.waiting is None


def test_concurrent_requests_pair_everyone_exactly_once():
    n = 100
    mm, chats = _matchmaker()
    identities = [f"user-{i}" for i in range(n)]
    barrier = threading.Barrier(n)

    def request(identity):
        barrier.wait()
        return mm.request_pairing(identity)

    with ThreadPoolExecutor(max_workers=n) as pool:
        created = [c for c in pool.map(request, identities) if c is not None]

    assert len(created) == n // 2
    assert mm.waiting is None
    assert len(chats) == n // 2

    seen = set()
    for chat in created:
        first, second = chat.participants
        assert first != second
        assert chats.get(first) is chat
        assert chats.get(second) is chat
        seen.update(chat.participants)
    assert seen == set(identities)
