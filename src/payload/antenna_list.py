"""Antenna history payload decoding."""

from __future__ import annotations

import json
from typing import Any

from core.errors import DecodeError


def decode_antennas(payload: str) -> Any:
    """Parse an antenna history payload.

    Args:
        payload: JSON-encoded antenna list or mapping.

    Returns:
        Parsed JSON value, returned as-is.

    Raises:
        DecodeError: If the payload is not valid JSON.
    """
    try:
        return json.loads(payload)
    except json.JSONDecodeError as error:
        raise DecodeError(
            f"Failed to parse antenna history payload: {error.msg}. "
            "Antenna records must be JSON encoded."
        ) from error
