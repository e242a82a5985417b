"""Bluse history exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class BluseError(Exception):
    """Base exception for all history lookup failures."""


class BluseConfigError(BluseError):
    """Raised for invalid runtime configuration."""


class BluseStoreError(BluseError):
    """Raised for history store access failures."""


class StoreUnavailableError(BluseStoreError):
    """Raised when the history store cannot be reached."""


class EmptyStreamError(BluseStoreError):
    """Raised when a history stream holds no timestamp labels."""


class HistoryRecordMissingError(BluseStoreError):
    """Raised when an indexed label no longer has a stored payload."""


class DecodeError(BluseError):
    """Raised when a label or payload does not match its expected format."""
