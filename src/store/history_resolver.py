"""Nearest history record resolution.

This module brackets a query instant within a stream's label index,
selects the nearer candidate, and reads its payload from the store.
Matches farther than the caller's tolerance are logged as stale but
still returned.
"""

from __future__ import annotations

from bisect import bisect_right
from datetime import datetime, timedelta

from core.errors import EmptyStreamError, HistoryRecordMissingError
from core.logging_config import get_logger
from core.timestamp_label import as_utc, format_label, normalize_instant
from core.types import HistoryMatch, LabelIndex, StreamId
from store.label_index import LabelIndexCache
from store.redis_store import HistoryStore

_LOGGER = get_logger(__name__)


class NearestRecordResolver:
    """Resolve query instants to the nearest stored history record."""

    def __init__(self, store: HistoryStore, cache: LabelIndexCache | None = None) -> None:
        """Create a resolver.

        Args:
            store: Store payloads are read from.
            cache: Label cache to share; a private one is created when omitted.
        """
        self._store = store
        self._cache = cache or LabelIndexCache(store)

    @property
    def cache(self) -> LabelIndexCache:
        """Return the label cache backing this resolver."""
        return self._cache

    def bracket(
        self,
        stream_id: StreamId,
        query_time: datetime,
    ) -> tuple[str | None, str | None]:
        """Return the labels at-or-before and strictly after ``query_time``.

        Args:
            stream_id: Stream to search.
            query_time: Instant to bracket.

        Returns:
            Pair of ``(low, high)`` labels; either is None at a boundary.
        """
        index = self._cache.get_labels(stream_id)
        low, high = _bracket_positions(index, normalize_instant(query_time))
        return (
            index.labels[low] if low is not None else None,
            index.labels[high] if high is not None else None,
        )

    def resolve(
        self,
        stream_id: StreamId,
        query_time: datetime,
        max_distance: timedelta,
    ) -> HistoryMatch:
        """Return the stream record nearest to ``query_time``.

        Args:
            stream_id: Stream to search.
            query_time: Instant to resolve.
            max_distance: Tolerance beyond which the match is reported stale.

        Returns:
            Selected record with its distance from the query.

        Raises:
            EmptyStreamError: If the stream holds no labels.
            HistoryRecordMissingError: If the selected label has no payload.
            StoreUnavailableError: If the store cannot be reached.
        """
        index = self._cache.get_labels(stream_id)
        query = as_utc(query_time)
        position = _select_nearest(stream_id, index, query)
        label = index.labels[position]
        instant = index.instants[position]
        distance = abs(query - instant)
        if distance > max_distance:
            _LOGGER.warning(
                "history_item_stale",
                stream=stream_id.store_key,
                query_time=format_label(query),
                label=label,
                distance_seconds=distance.total_seconds(),
                max_distance_seconds=max_distance.total_seconds(),
            )
        payload = self._store.hget(stream_id.store_key, label)
        if payload is None:
            raise HistoryRecordMissingError(
                f"History item {stream_id.store_key}[{label}] is indexed but has no value. "
                "Invalidate the label cache and retry the lookup."
            )
        _LOGGER.debug("history_item_resolved", stream=stream_id.store_key, label=label)
        return HistoryMatch(
            stream_id=stream_id,
            label=label,
            instant=instant,
            payload=payload,
            distance=distance,
            max_distance=max_distance,
        )


def _bracket_positions(index: LabelIndex, query: datetime) -> tuple[int | None, int | None]:
    """Locate the bracketing entries of ``query`` in ``index``.

    Args:
        index: Sorted label index.
        query: Normalized query instant.

    Returns:
        Position of the last entry ``<= query`` and of the first entry
        ``> query``; None where no such entry exists.
    """
    split = bisect_right(index.instants, query)
    low = split - 1 if split > 0 else None
    high = split if split < len(index) else None
    return low, high


def _select_nearest(stream_id: StreamId, index: LabelIndex, query: datetime) -> int:
    """Pick the index position nearest to ``query``.

    Candidates are bracketed at label precision; gaps are measured from
    the full-precision query. Ties go to the earlier entry.

    Raises:
        EmptyStreamError: If the index is empty.
    """
    low, high = _bracket_positions(index, normalize_instant(query))
    if low is None and high is None:
        raise EmptyStreamError(
            f"No history items found for {stream_id.store_key}. "
            "Check the subarray and history type names."
        )
    if low is None:
        return high
    if high is None:
        return low
    if query - index.instants[low] <= index.instants[high] - query:
        return low
    return high
