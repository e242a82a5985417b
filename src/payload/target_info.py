"""Target history payload decoding.

Target records are comma-separated ``names, purpose, x, y, fluxmodel``
strings where ``names`` may hold several ``|``-separated aliases.
"""

from __future__ import annotations

import re

from core.constants import (
    HOURS_TO_DEGREES,
    RADEC_PURPOSE_MARKER,
    TARGET_FIELD_COUNT,
    UNKNOWN_SOURCE_NAME,
)
from core.types import TargetDescriptor
from payload.sexagesimal import dms_to_degrees, hms_to_hours

_FIELD_SEPARATOR = re.compile(r", *")
_ALIAS_SEPARATOR = re.compile(r" *\| *")


def split_target_fields(payload: str) -> list[str]:
    """Split a target record into its five fields.

    Short records are padded with empty fields.

    Args:
        payload: Raw target record.

    Returns:
        Names, purpose, x, y, and flux model fields.
    """
    padded = payload + "," * (TARGET_FIELD_COUNT - 1)
    return _FIELD_SEPARATOR.split(padded)[:TARGET_FIELD_COUNT]


def decode_target(payload: str) -> TargetDescriptor:
    """Decode a target record into a descriptor.

    Only RA/Dec targets carry coordinates; any other purpose yields the
    ``unknown`` descriptor at ``(0.0, 0.0)``.

    Args:
        payload: Raw target record.

    Returns:
        Decoded target with coordinates in degrees.

    Raises:
        DecodeError: If an RA/Dec target has unparsable coordinates.
    """
    names, purpose, x, y, _ = split_target_fields(payload)
    if RADEC_PURPOSE_MARKER not in purpose:
        return TargetDescriptor(UNKNOWN_SOURCE_NAME, 0.0, 0.0, purpose)
    src_name = _ALIAS_SEPARATOR.split(names)[0]
    return TargetDescriptor(
        src_name=src_name,
        ra=HOURS_TO_DEGREES * hms_to_hours(x),
        decl=dms_to_degrees(y),
        purpose=purpose,
    )
