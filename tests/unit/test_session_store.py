"""Unit tests for TTL-evicting session storage."""

from __future__ import annotations

import pytest

from hlsweave.config import GeneratorConfig
from hlsweave.models.datatypes import Manifest, Match, ScriptItem, Session
from hlsweave.pipeline import PlaylistGenerator
from hlsweave.sessions.store import SessionStore, new_session_id, session_summary


class FakeClock:
    """Manually advanced epoch-seconds clock."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


def _session(session_id: str, created: float) -> Session:
    return Session(
        session_id=session_id,
        created=created,
        playlist="#EXTM3U\n",
        script=(
            ScriptItem(text="hello world", filename="hw.ts", duration=2.0, type="phrase"),
            ScriptItem(text="foo", filename="foo.ts", duration=0.5, type="static"),
        ),
        tokens=("hello", "world", "foo"),
        matches=(Match(phrase="hello world", start=0, end=2),),
    )


def test_new_session_id_is_random_hex() -> None:
    """Session ids should be 32 hex characters and differ between calls."""

    first = new_session_id()

    assert len(first) == 32
    int(first, 16)
    assert first != new_session_id()


def test_put_and_get_live_session() -> None:
    """A stored session should be retrievable before its TTL elapses."""

    clock = FakeClock()
    store = SessionStore(ttl_seconds=60, clock=clock)
    session = _session("abc", clock.now)

    store.put(session)

    assert "abc" in store
    assert len(store) == 1
    assert store.get("abc") is session
    assert store.get("missing") is None


def test_get_evicts_expired_session() -> None:
    """Reading an expired session should return `None` and remove it."""

    clock = FakeClock()
    store = SessionStore(ttl_seconds=60, clock=clock)
    store.put(_session("abc", clock.now))

    clock.now += 61

    assert store.get("abc") is None
    assert "abc" not in store


def test_touch_records_last_access() -> None:
    """Touching a live session should stamp the current clock value."""

    clock = FakeClock()
    store = SessionStore(ttl_seconds=60, clock=clock)
    store.put(_session("abc", clock.now))
    clock.now += 5

    session = store.touch("abc")

    assert session is not None
    assert session.last_accessed == clock.now


def test_purge_expired_removes_only_old_sessions() -> None:
    """Purging should drop sessions past the TTL and keep the rest."""

    clock = FakeClock()
    store = SessionStore(ttl_seconds=60, clock=clock)
    store.put(_session("old", clock.now))
    clock.now += 50
    store.put(_session("new", clock.now))
    clock.now += 20

    assert store.purge_expired() == ["old"]
    assert len(store) == 1
    assert store.get("new") is not None


def test_store_rejects_non_positive_ttl() -> None:
    """A zero TTL should be rejected at construction."""

    with pytest.raises(ValueError):
        SessionStore(ttl_seconds=0)


def test_from_config_uses_configured_ttl() -> None:
    """The store built from config should expire sessions after `session_ttl_seconds`."""

    clock = FakeClock()
    store = SessionStore.from_config(GeneratorConfig(session_ttl_seconds=10), clock=clock)
    store.put(_session("abc", clock.now))

    clock.now += 10
    assert store.get("abc") is not None

    clock.now += 1
    assert store.get("abc") is None


def test_record_stores_generation_result_as_session(
    sample_manifest: Manifest, fixed_clock
) -> None:
    """Recording a generation result should store it under its session id."""

    clock = FakeClock()
    store = SessionStore(ttl_seconds=60, clock=clock)
    result = PlaylistGenerator(sample_manifest, clock=fixed_clock).generate("abc")

    session = store.record(result)

    assert store.get("abc") is session
    assert session.created == clock.now
    assert session.playlist == result.playlist
    assert session.script == result.script
    assert session.tokens == result.tokens
    assert session.matches == result.matches
    assert session.last_accessed is None
    assert session_summary(session)["clips"] == result.stats.total_clips


def test_session_summary_reports_script_totals() -> None:
    """The summary should expose counts, total duration, and the raw script."""

    summary = session_summary(_session("abc", 0.0))

    assert summary["sessionId"] == "abc"
    assert summary["created"] == "1970-01-01T00:00:00.000Z"
    assert summary["totalTokens"] == 3
    assert summary["matchedPhrases"] == 1
    assert summary["clips"] == 2
    assert summary["duration"] == 2.5
    assert summary["script"][0] == {
        "text": "hello world",
        "filename": "hw.ts",
        "duration": 2.0,
        "type": "phrase",
    }
