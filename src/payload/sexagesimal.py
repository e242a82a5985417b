"""Sexagesimal angle parsing.

Converts ``dd:mm:ss.s`` and ``hh:mm:ss.s`` strings to decimal values.
"""

from __future__ import annotations

from core.errors import DecodeError


def dms_to_degrees(value: str | float) -> float:
    """Convert a ``dd:mm:ss.s`` string to decimal degrees.

    Missing minute and second components count as zero. A ``-`` anywhere in
    the string negates the whole value, so ``-0:30:00`` is ``-0.5``.
    Real numbers are returned unchanged as float.

    Args:
        value: Sexagesimal string or plain number.

    Returns:
        Decimal value in the same unit as the leading component.

    Raises:
        DecodeError: If a component is not numeric.
    """
    if not isinstance(value, str):
        return float(value)
    components = f"{value}:0:0".split(":")[:3]
    try:
        degrees, minutes, seconds = (float(component) for component in components)
    except ValueError as error:
        raise DecodeError(
            f"Invalid sexagesimal value '{value}': {error}. "
            "Expected numeric components such as 12:34:56.7."
        ) from error
    sign = 1.0
    if "-" in value:
        sign = -1.0
        degrees = -degrees
    return sign * (degrees + minutes / 60 + seconds / 3600)


def hms_to_hours(value: str | float) -> float:
    """Convert a ``hh:mm:ss.s`` string to decimal hours."""
    return dms_to_degrees(value)
