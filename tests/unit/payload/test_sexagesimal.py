"""Unit tests for sexagesimal angle parsing."""

from __future__ import annotations

import pytest

from core.errors import DecodeError
from payload.sexagesimal import dms_to_degrees, hms_to_hours


def test_dms_to_degrees_adds_minutes_and_seconds() -> None:
    """Minutes and seconds should be added as fractions of a degree."""
    assert dms_to_degrees("12:30:00") == 12.5


def test_dms_to_degrees_negates_whole_value() -> None:
    """A leading minus sign should apply to all components."""
    assert dms_to_degrees("-10:30:00") == -10.5


def test_dms_to_degrees_handles_negative_zero_degrees() -> None:
    """A minus sign should be honored even when degrees are zero."""
    assert dms_to_degrees("-00:30:00") == -0.5


def test_dms_to_degrees_pads_missing_components() -> None:
    """Bare numbers should parse as whole degrees."""
    assert dms_to_degrees("5") == 5.0


def test_dms_to_degrees_passes_through_numbers() -> None:
    """Real inputs should be returned as float."""
    assert dms_to_degrees(7) == 7.0


def test_hms_to_hours_matches_degree_conversion() -> None:
    """Hour parsing should follow the same component rules."""
    assert hms_to_hours("18:36:56.3") == pytest.approx(18.615639, abs=1e-6)


def test_dms_to_degrees_rejects_non_numeric_components() -> None:
    """Garbage components should raise DecodeError."""
    with pytest.raises(DecodeError):
        dms_to_degrees("12:ab:00")
