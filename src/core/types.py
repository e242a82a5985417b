"""Shared typed models.

This module defines immutable data models used by the store, resolver,
payload decoders, and SDK layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from core.constants import HISTORY_KEY_PREFIX


@dataclass(frozen=True)
class StreamId:
    """Identifier of one scoped history stream.

    Attributes:
        scope: Scope name, usually a subarray such as ``array_1``.
        history_type: History type name such as ``target`` or ``antennas``.
    """

    scope: str
    history_type: str

    @property
    def store_key(self) -> str:
        """Return the hash key holding this stream in the store."""
        return f"{HISTORY_KEY_PREFIX}:{self.scope}:{self.history_type}"

    def __str__(self) -> str:
        return self.store_key


@dataclass(frozen=True)
class LabelIndex:
    """Sorted timestamp labels known for one stream.

    Attributes:
        labels: Store field keys in ascending time order.
        instants: UTC instants parallel to ``labels``.
    """

    labels: tuple[str, ...]
    instants: tuple[datetime, ...]

    def __len__(self) -> int:
        return len(self.labels)


@dataclass(frozen=True)
class HistoryMatch:
    """History record nearest to a query instant.

    Attributes:
        stream_id: Stream the record was read from.
        label: Store field key of the selected record.
        instant: UTC instant encoded by ``label``.
        payload: Raw stored payload string.
        distance: Absolute time between query and ``instant``.
        max_distance: Tolerance the lookup was resolved against.
    """

    stream_id: StreamId
    label: str
    instant: datetime
    payload: str
    distance: timedelta
    max_distance: timedelta

    @property
    def is_stale(self) -> bool:
        """Return whether the record lies beyond the lookup tolerance."""
        return self.distance > self.max_distance


@dataclass(frozen=True)
class TargetDescriptor:
    """Decoded telescope target.

    Attributes:
        src_name: First source alias, or ``unknown`` for non-RA/Dec targets.
        ra: Right ascension in degrees.
        decl: Declination in degrees.
        purpose: Purpose tag as stored with the target.
    """

    src_name: str
    ra: float
    decl: float
    purpose: str = ""

    def as_tuple(self) -> tuple[str, float, float]:
        """Return ``(src_name, ra, decl)``."""
        return (self.src_name, self.ra, self.decl)
