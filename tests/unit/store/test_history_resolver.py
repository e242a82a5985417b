"""Unit tests for nearest history record resolution."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from core.errors import EmptyStreamError, HistoryRecordMissingError
from core.types import StreamId
from store.history_resolver import NearestRecordResolver
from store.label_index import LabelIndexCache

_STREAM = StreamId(scope="array_1", history_type="target")
_TOLERANCE = timedelta(minutes=1)


class _FakeLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, object]]] = []

    def warning(self, event: str, **fields: object) -> None:
        self.events.append((event, fields))

    def debug(self, event: str, **fields: object) -> None:
        _ = (event, fields)


def _at(seconds: float) -> datetime:
    return datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=seconds)


def _resolver(fake_store) -> NearestRecordResolver:
    store = fake_store(
        {
            "history:array_1:target": {
                "20240101T000010.000Z": "first",
                "20240101T000020.000Z": "second",
                "20240101T000040.000Z": "third",
            }
        }
    )
    return NearestRecordResolver(store)


def test_resolve_before_first_label_selects_first(fake_store) -> None:
    """Queries before the stream start should select the earliest record."""
    match = _resolver(fake_store).resolve(_STREAM, _at(0), _TOLERANCE)

    assert (match.label, match.payload) == ("20240101T000010.000Z", "first")


def test_resolve_after_last_label_selects_last(fake_store) -> None:
    """Queries after the stream end should select the latest record."""
    match = _resolver(fake_store).resolve(_STREAM, _at(3600), timedelta(days=1))

    assert match.payload == "third"


def test_resolve_exact_label_has_zero_distance(fake_store) -> None:
    """Queries landing on a label should select it exactly."""
    match = _resolver(fake_store).resolve(_STREAM, _at(20), _TOLERANCE)

    assert (match.payload, match.distance) == ("second", timedelta(0))


def test_resolve_tie_selects_earlier_label(fake_store) -> None:
    """Equidistant candidates should resolve to the earlier record."""
    match = _resolver(fake_store).resolve(_STREAM, _at(30), _TOLERANCE)

    assert match.payload == "second"


def test_resolve_selects_nearer_later_label(fake_store) -> None:
    """A strictly nearer later record should win over the earlier one."""
    match = _resolver(fake_store).resolve(_STREAM, _at(31), _TOLERANCE)

    assert (match.payload, match.distance) == ("third", timedelta(seconds=9))


def test_resolve_accepts_naive_utc_query(fake_store) -> None:
    """Naive query times should be treated as UTC."""
    match = _resolver(fake_store).resolve(_STREAM, datetime(2024, 1, 1, 0, 0, 12), _TOLERANCE)

    assert match.payload == "first"


def test_resolve_empty_stream_raises(fake_store) -> None:
    """Streams without labels should raise EmptyStreamError."""
    resolver = NearestRecordResolver(fake_store({}))

    with pytest.raises(EmptyStreamError):
        resolver.resolve(_STREAM, _at(0), _TOLERANCE)


def test_resolve_logs_stale_match_and_returns_data(fake_store, monkeypatch) -> None:
    """Matches beyond tolerance should warn without failing."""
    fake_logger = _FakeLogger()
    monkeypatch.setattr("store.history_resolver._LOGGER", fake_logger)

    match = _resolver(fake_store).resolve(_STREAM, _at(400), _TOLERANCE)

    assert match.payload == "third" and match.is_stale
    assert [event for event, _ in fake_logger.events] == ["history_item_stale"]
    assert fake_logger.events[0][1]["distance_seconds"] == 360.0


def test_resolve_within_tolerance_does_not_warn(fake_store, monkeypatch) -> None:
    """Matches within tolerance should not emit a stale warning."""
    fake_logger = _FakeLogger()
    monkeypatch.setattr("store.history_resolver._LOGGER", fake_logger)

    match = _resolver(fake_store).resolve(_STREAM, _at(41), _TOLERANCE)

    assert not match.is_stale and fake_logger.events == []


def test_resolve_raises_when_indexed_payload_vanished(fake_store) -> None:
    """A label deleted after indexing should raise a missing-record error."""
    store = fake_store({"history:array_1:target": {"20240101T000010.000Z": "first"}})
    resolver = NearestRecordResolver(store)
    resolver.cache.get_labels(_STREAM)
    store.hashes["history:array_1:target"].clear()

    with pytest.raises(HistoryRecordMissingError):
        resolver.resolve(_STREAM, _at(10), _TOLERANCE)


def test_bracket_returns_none_at_boundaries(fake_store) -> None:
    """Bracketing should report missing neighbours as None."""
    resolver = _resolver(fake_store)

    before = resolver.bracket(_STREAM, _at(0))
    after = resolver.bracket(_STREAM, _at(50))

    assert before == (None, "20240101T000010.000Z")
    assert after == ("20240101T000040.000Z", None)


def test_bracket_treats_exact_label_as_low_side(fake_store) -> None:
    """A label equal to the query should be the at-or-before candidate."""
    assert _resolver(fake_store).bracket(_STREAM, _at(20)) == (
        "20240101T000020.000Z",
        "20240101T000040.000Z",
    )


def test_resolvers_can_share_a_cache(fake_store) -> None:
    """A caller-owned cache should serve several resolvers."""
    store = fake_store({"history:array_1:target": {"20240101T000010.000Z": "first"}})
    cache = LabelIndexCache(store)

    NearestRecordResolver(store, cache).resolve(_STREAM, _at(0), _TOLERANCE)
    NearestRecordResolver(store, cache).resolve(_STREAM, _at(0), _TOLERANCE)

    assert store.hkeys_calls == ["history:array_1:target"]


def test_resolve_measures_gaps_at_full_query_precision(fake_store) -> None:
    """Sub-millisecond query offsets should decide between adjacent labels."""
    store = fake_store(
        {
            "history:array_1:target": {
                "20240101T000000.000Z": "low",
                "20240101T000000.001Z": "high",
            }
        }
    )
    query = datetime(2024, 1, 1, 0, 0, 0, 900, tzinfo=timezone.utc)

    match = NearestRecordResolver(store).resolve(_STREAM, query, _TOLERANCE)

    assert (match.payload, match.distance) == ("high", timedelta(microseconds=100))
