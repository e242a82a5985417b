"""Timestamp label codec.

History records are stored under labels formatted ``yyyymmddTHHMMSS.sssZ``.
This module converts between labels and UTC datetimes at millisecond
precision so that formatting a parsed label reproduces it byte-for-byte.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core.constants import LABEL_DATETIME_FORMAT, LABEL_LENGTH
from core.errors import DecodeError


def as_utc(instant: datetime) -> datetime:
    """Return ``instant`` as an aware UTC datetime at full precision.

    Naive datetimes are taken to already be UTC.
    """
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def normalize_instant(instant: datetime) -> datetime:
    """Return ``instant`` in UTC truncated to whole milliseconds.

    Args:
        instant: Datetime to normalize.

    Returns:
        Timezone-aware UTC datetime at label precision.
    """
    instant = as_utc(instant)
    return instant.replace(microsecond=instant.microsecond // 1000 * 1000)


def format_label(instant: datetime) -> str:
    """Encode a datetime as a history label.

    Args:
        instant: Datetime to encode.

    Returns:
        Label string such as ``20240131T235959.123Z``.
    """
    normalized = normalize_instant(instant)
    milliseconds = normalized.microsecond // 1000
    return f"{normalized.strftime(LABEL_DATETIME_FORMAT)}.{milliseconds:03d}Z"


def parse_label(label: str) -> datetime:
    """Decode a history label into a UTC datetime.

    Args:
        label: Label string in ``yyyymmddTHHMMSS.sssZ`` format.

    Returns:
        Timezone-aware UTC datetime.

    Raises:
        DecodeError: If the label is not in the expected format.
    """
    if len(label) != LABEL_LENGTH or not label.endswith("Z") or label[15] != ".":
        _raise_label_error(label)
    milliseconds = label[16:19]
    if not milliseconds.isdigit():
        _raise_label_error(label)
    try:
        parsed = datetime.strptime(label[:15], LABEL_DATETIME_FORMAT)
    except ValueError as error:
        raise DecodeError(
            f"Invalid history label '{label}': {error}. "
            "Labels must look like yyyymmddTHHMMSS.sssZ."
        ) from error
    return parsed.replace(microsecond=int(milliseconds) * 1000, tzinfo=timezone.utc)


def _raise_label_error(label: str) -> None:
    """Raise a label format error.

    Args:
        label: Offending label.

    Raises:
        DecodeError: Always.
    """
    raise DecodeError(
        f"Invalid history label '{label}': expected yyyymmddTHHMMSS.sssZ. "
        "Check the field keys of the history hash."
    )
