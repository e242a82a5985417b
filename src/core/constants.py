"""Core constants used across history modules.

This module centralizes store key layout, label format, and lookup defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from datetime import timedelta

HISTORY_KEY_PREFIX = "history"
LABEL_DATETIME_FORMAT = "%Y%m%dT%H%M%S"
LABEL_LENGTH = len("yyyymmddTHHMMSS.sssZ")
DEFAULT_SUBARRAY = "array_1"
DEFAULT_REDIS_HOST = "localhost"
DEFAULT_REDIS_PORT = 6379
DEFAULT_REDIS_DB = 0
TARGET_HISTORY_TYPE = "target"
ANTENNAS_HISTORY_TYPE = "antennas"
DEFAULT_HISTORY_MAX_DISTANCE = timedelta(days=1)
DEFAULT_TARGET_MAX_DISTANCE = timedelta(minutes=1)
DEFAULT_ANTENNAS_MAX_DISTANCE = timedelta(hours=12)
UNKNOWN_SOURCE_NAME = "unknown"
RADEC_PURPOSE_MARKER = "radec"
TARGET_FIELD_COUNT = 5
HOURS_TO_DEGREES = 15.0
