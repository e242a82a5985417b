"""Timestamp label index cache.

This module keeps, per history stream, the sorted sequence of timestamp
labels fetched from the store. Each stream is fetched once and then served
from memory until it is explicitly invalidated.
"""

from __future__ import annotations

import threading

from core.logging_config import get_logger
from core.timestamp_label import parse_label
from core.types import LabelIndex, StreamId
from store.redis_store import HistoryStore

_LOGGER = get_logger(__name__)


class LabelIndexCache:
    """Per-stream cache of sorted timestamp labels.

    Population is synchronized per stream, so concurrent first lookups of
    one stream issue a single store fetch. Populated indexes are immutable.
    """

    def __init__(self, store: HistoryStore) -> None:
        """Create an empty cache over a history store.

        Args:
            store: Store used to list labels on first access.
        """
        self._store = store
        self._indexes: dict[StreamId, LabelIndex] = {}
        self._locks: dict[StreamId, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def get_labels(self, stream_id: StreamId) -> LabelIndex:
        """Return the sorted label index of a stream.

        Args:
            stream_id: Stream to look up.

        Returns:
            Labels and instants in ascending time order.

        Raises:
            StoreUnavailableError: If the store cannot be reached.
            DecodeError: If a stored field key is not a valid label.
        """
        index = self._indexes.get(stream_id)
        if index is not None:
            return index
        with self._stream_lock(stream_id):
            index = self._indexes.get(stream_id)
            if index is None:
                index = self._load(stream_id)
                self._indexes[stream_id] = index
            return index

    def invalidate(self, stream_id: StreamId | None = None) -> None:
        """Drop cached labels so the next lookup refetches them.

        A load in progress for a dropped stream finishes first, so its result
        never outlives the invalidation.

        Args:
            stream_id: Stream to drop; all streams when omitted.
        """
        if stream_id is None:
            with self._registry_lock:
                streams = list(self._locks)
        else:
            streams = [stream_id]
        dropped = 0
        for stream in streams:
            with self._stream_lock(stream):
                if self._indexes.pop(stream, None) is not None:
                    dropped += 1
        _LOGGER.info(
            "label_index_invalidated",
            stream=stream_id.store_key if stream_id is not None else "*",
            dropped=dropped,
        )

    def cached_streams(self) -> tuple[StreamId, ...]:
        """Return the streams that currently hold a cached index."""
        return tuple(self._indexes)

    def _stream_lock(self, stream_id: StreamId) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(stream_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[stream_id] = lock
            return lock

    def _load(self, stream_id: StreamId) -> LabelIndex:
        labels = self._store.hkeys(stream_id.store_key)
        entries = sorted((parse_label(label), label) for label in labels)
        index = LabelIndex(
            labels=tuple(label for _, label in entries),
            instants=tuple(instant for instant, _ in entries),
        )
        _LOGGER.info("label_index_loaded", stream=stream_id.store_key, label_count=len(index))
        return index
