"""Runtime configuration model for history lookups.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_REDIS_DB,
    DEFAULT_REDIS_HOST,
    DEFAULT_REDIS_PORT,
    DEFAULT_SUBARRAY,
)
from core.errors import BluseConfigError


@dataclass(frozen=True)
class BluseConfig:
    """Validated runtime configuration.

    Attributes:
        redis_host: Host name of the Redis history store.
        redis_port: TCP port of the Redis history store.
        redis_db: Redis logical database index.
        redis_socket_timeout: Optional socket timeout in seconds.
        subarray: Default scope used when a lookup names none.
    """

    redis_host: str
    redis_port: int
    redis_db: int
    redis_socket_timeout: float | None
    subarray: str

    @classmethod
    def from_env(cls) -> "BluseConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            BluseConfigError: If environment values are invalid.
        """
        port_value = os.getenv("BLUSE_REDIS_PORT", str(DEFAULT_REDIS_PORT))
        db_value = os.getenv("BLUSE_REDIS_DB", str(DEFAULT_REDIS_DB))
        timeout_value = os.getenv("BLUSE_REDIS_SOCKET_TIMEOUT")
        return cls(
            redis_host=os.getenv("BLUSE_REDIS_HOST", DEFAULT_REDIS_HOST),
            redis_port=_parse_int("BLUSE_REDIS_PORT", port_value),
            redis_db=_parse_int("BLUSE_REDIS_DB", db_value),
            redis_socket_timeout=_parse_timeout(timeout_value) if timeout_value else None,
            subarray=os.getenv("BLUSE_SUBARRAY", DEFAULT_SUBARRAY),
        )


def _parse_int(variable: str, raw_value: str) -> int:
    """Parse an integer environment value.

    Args:
        variable: Environment variable name, used in error messages.
        raw_value: Raw string from environment.

    Returns:
        Parsed integer.

    Raises:
        BluseConfigError: If value cannot be parsed into int.
    """
    try:
        return int(raw_value)
    except ValueError as error:
        raise BluseConfigError(
            f"Invalid {variable} value: "
            f"expected integer, got '{raw_value}'. "
            f"Set {variable} to a numeric value."
        ) from error


def _parse_timeout(raw_value: str) -> float:
    """Parse the socket timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Positive timeout in seconds.

    Raises:
        BluseConfigError: If value is not a positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise BluseConfigError(
            "Invalid BLUSE_REDIS_SOCKET_TIMEOUT value: "
            f"expected seconds, got '{raw_value}'. "
            "Set BLUSE_REDIS_SOCKET_TIMEOUT to a positive number."
        ) from error
    if timeout <= 0:
        raise BluseConfigError(
            "Invalid BLUSE_REDIS_SOCKET_TIMEOUT value: "
            f"expected a positive number, got '{raw_value}'. "
            "Unset it to disable the socket timeout."
        )
    return timeout
