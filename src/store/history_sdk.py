"""Python SDK for history lookups.

This module exposes high-level APIs for target and antenna lookups
backed by the nearest-record resolver and its label cache.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from core.config import BluseConfig
from core.constants import (
    ANTENNAS_HISTORY_TYPE,
    DEFAULT_ANTENNAS_MAX_DISTANCE,
    DEFAULT_HISTORY_MAX_DISTANCE,
    DEFAULT_TARGET_MAX_DISTANCE,
    TARGET_HISTORY_TYPE,
)
from core.types import HistoryMatch, StreamId, TargetDescriptor
from payload.antenna_list import decode_antennas
from payload.target_info import decode_target
from store.history_resolver import NearestRecordResolver
from store.label_index import LabelIndexCache
from store.redis_store import HistoryStore, RedisHistoryStore


class HistoryClient:
    """Primary SDK entry point for history lookups."""

    def __init__(
        self,
        config: BluseConfig | None = None,
        store: HistoryStore | None = None,
        cache: LabelIndexCache | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            store: Optional history store; a Redis store is built from config
                when omitted.
            cache: Optional label cache to share between clients.
        """
        self._config = config or BluseConfig.from_env()
        self._store = store or RedisHistoryStore.from_config(self._config)
        self._resolver = NearestRecordResolver(self._store, cache)

    @property
    def config(self) -> BluseConfig:
        """Return the runtime configuration."""
        return self._config

    @property
    def cache(self) -> LabelIndexCache:
        """Return the label cache used by this client."""
        return self._resolver.cache

    def stream(self, history_type: str, subarray: str | None = None) -> StreamId:
        """Build a stream id, defaulting to the configured subarray."""
        return StreamId(scope=subarray or self._config.subarray, history_type=history_type)

    def labels(self, history_type: str, subarray: str | None = None) -> tuple[str, ...]:
        """Return all labels of a history stream in time order.

        Args:
            history_type: History type name.
            subarray: Optional subarray; configured default when omitted.

        Returns:
            Sorted label tuple.
        """
        return self.cache.get_labels(self.stream(history_type, subarray)).labels

    def bracket(
        self,
        instant: datetime,
        history_type: str,
        subarray: str | None = None,
    ) -> tuple[str | None, str | None]:
        """Return the labels bracketing ``instant``.

        Args:
            instant: Query instant.
            history_type: History type name.
            subarray: Optional subarray; configured default when omitted.

        Returns:
            Label at-or-before and label after ``instant``; None at a boundary.
        """
        return self._resolver.bracket(self.stream(history_type, subarray), instant)

    def history_item(
        self,
        instant: datetime,
        history_type: str,
        max_distance: timedelta = DEFAULT_HISTORY_MAX_DISTANCE,
        subarray: str | None = None,
    ) -> HistoryMatch:
        """Return the history record of any type nearest to ``instant``.

        Args:
            instant: Query instant.
            history_type: History type name.
            max_distance: Distance beyond which a stale warning is logged.
            subarray: Optional subarray; configured default when omitted.

        Returns:
            Selected record with its distance from ``instant``.
        """
        stream_id = self.stream(history_type, subarray)
        return self._resolver.resolve(stream_id, instant, max_distance)

    def lookup_target(
        self,
        instant: datetime,
        max_distance: timedelta = DEFAULT_TARGET_MAX_DISTANCE,
        subarray: str | None = None,
    ) -> str:
        """Return the raw target record nearest to ``instant``."""
        return self.history_item(instant, TARGET_HISTORY_TYPE, max_distance, subarray).payload

    def lookup_target_descriptor(
        self,
        instant: datetime,
        max_distance: timedelta = DEFAULT_TARGET_MAX_DISTANCE,
        subarray: str | None = None,
    ) -> TargetDescriptor:
        """Return the decoded target nearest to ``instant``.

        Non-RA/Dec targets decode as ``("unknown", 0.0, 0.0)``.
        """
        return decode_target(self.lookup_target(instant, max_distance, subarray))

    def lookup_antennas(
        self,
        instant: datetime,
        max_distance: timedelta = DEFAULT_ANTENNAS_MAX_DISTANCE,
        subarray: str | None = None,
    ) -> Any:
        """Return the parsed antenna record nearest to ``instant``."""
        match = self.history_item(instant, ANTENNAS_HISTORY_TYPE, max_distance, subarray)
        return decode_antennas(match.payload)

    def invalidate(self, history_type: str | None = None, subarray: str | None = None) -> None:
        """Drop cached labels for one stream, or for all streams.

        Args:
            history_type: History type to drop; every stream when omitted.
            subarray: Optional subarray; configured default when omitted.
        """
        if history_type is None:
            self.cache.invalidate()
            return
        self.cache.invalidate(self.stream(history_type, subarray))
