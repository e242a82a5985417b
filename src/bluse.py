"""Public SDK surface for history lookups.

This module provides a stable import path for history users.
It re-exports the primary client and typed models.
"""

from __future__ import annotations

from core.config import BluseConfig
from core.errors import (
    BluseError,
    DecodeError,
    EmptyStreamError,
    StoreUnavailableError,
)
from core.timestamp_label import format_label, parse_label
from core.types import HistoryMatch, StreamId, TargetDescriptor
from payload.antenna_list import decode_antennas
from payload.sexagesimal import dms_to_degrees, hms_to_hours
from payload.target_info import decode_target
from store.history_resolver import NearestRecordResolver
from store.history_sdk import HistoryClient
from store.label_index import LabelIndexCache
from store.redis_store import RedisHistoryStore

__all__ = [
    "BluseConfig",
    "BluseError",
    "DecodeError",
    "EmptyStreamError",
    "HistoryClient",
    "HistoryMatch",
    "LabelIndexCache",
    "NearestRecordResolver",
    "RedisHistoryStore",
    "StoreUnavailableError",
    "StreamId",
    "TargetDescriptor",
    "decode_antennas",
    "decode_target",
    "dms_to_degrees",
    "format_label",
    "hms_to_hours",
    "parse_label",
]
