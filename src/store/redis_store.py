"""Redis history store adapter.

This module exposes the two read operations the history index needs,
listing the field keys of a history hash and reading one field, and maps
redis-py transport failures onto store errors.
"""

from __future__ import annotations

from typing import Any, Protocol

import redis

from core.config import BluseConfig
from core.errors import StoreUnavailableError


class HistoryStore(Protocol):
    """Read-only history store interface."""

    def hkeys(self, key: str) -> list[str]:
        """Return all field keys of hash ``key``."""
        ...

    def hget(self, key: str, field: str) -> str | None:
        """Return the value of ``field`` in hash ``key`` if present."""
        ...


class RedisHistoryStore:
    """History store backed by a redis-py client."""

    def __init__(self, client: Any) -> None:
        """Wrap an existing Redis client.

        Args:
            client: Redis client created with ``decode_responses=True``.
        """
        self._client = client

    @classmethod
    def from_config(cls, config: BluseConfig) -> "RedisHistoryStore":
        """Create a store connected per runtime config.

        Args:
            config: Runtime configuration.

        Returns:
            Store wrapping a new Redis client.
        """
        client = redis.Redis(
            host=config.redis_host,
            port=config.redis_port,
            db=config.redis_db,
            socket_timeout=config.redis_socket_timeout,
            decode_responses=True,
        )
        return cls(client)

    def hkeys(self, key: str) -> list[str]:
        """Return all field keys of hash ``key``.

        Raises:
            StoreUnavailableError: If Redis cannot be reached.
        """
        try:
            return [_as_text(field) for field in self._client.hkeys(key)]
        except redis.RedisError as error:
            raise StoreUnavailableError(
                f"Failed to list history labels for {key}: {error}. "
                "Check that the Redis history store is reachable."
            ) from error

    def hget(self, key: str, field: str) -> str | None:
        """Return the value of ``field`` in hash ``key`` if present.

        Raises:
            StoreUnavailableError: If Redis cannot be reached.
        """
        try:
            value = self._client.hget(key, field)
        except redis.RedisError as error:
            raise StoreUnavailableError(
                f"Failed to read history item {key}[{field}]: {error}. "
                "Check that the Redis history store is reachable."
            ) from error
        return None if value is None else _as_text(value)


def _as_text(value: str | bytes) -> str:
    """Decode Redis replies from clients without ``decode_responses``."""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value
