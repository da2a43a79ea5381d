"""Session store backends.

Maps opaque session identifiers to tenant IDs with a TTL. Expiry is
enforced by the store itself; callers never compare clocks.

Provides:
- RedisSessionStore for deployments
- InMemorySessionStore for local development and tests
"""

from datetime import datetime, timedelta, timezone
from typing import Protocol

import redis
import redis.asyncio as aioredis
import structlog

from listings.domain.exceptions import StoreError

logger = structlog.get_logger()


class SessionStore(Protocol):
    """Key-value store with per-key TTL."""

    async def set(self, key: str, value: str, ttl: timedelta) -> None:
        """Store a value that expires after ``ttl``."""
        ...

    async def get(self, key: str) -> str | None:
        """Get a value, or None if absent or expired."""
        ...

    async def delete(self, key: str) -> int:
        """Delete a key and return the number of keys removed."""
        ...


class RedisSessionStore:
    """Redis-backed session store.

    Keys are namespaced as ``<prefix>_<key>``.
    """

    def __init__(self, client: aioredis.Redis, prefix: str = "listings") -> None:
        """Initialize store.

        Args:
            client: Async Redis client (decode_responses=True).
            prefix: Key namespace.
        """
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str, prefix: str = "listings") -> "RedisSessionStore":
        """Create a store from a Redis URL."""
        return cls(aioredis.from_url(url, decode_responses=True), prefix=prefix)

    def _key(self, key: str) -> str:
        return f"{self.prefix}_{key}"

    async def set(self, key: str, value: str, ttl: timedelta) -> None:
        try:
            await self.client.set(self._key(key), value, ex=max(int(ttl.total_seconds()), 1))
        except redis.RedisError as e:
            logger.error("Session store write failed", error=str(e))
            raise StoreError("Session store unavailable") from e

    async def get(self, key: str) -> str | None:
        try:
            return await self.client.get(self._key(key))
        except redis.RedisError as e:
            logger.error("Session store read failed", error=str(e))
            raise StoreError("Session store unavailable") from e

    async def delete(self, key: str) -> int:
        try:
            return int(await self.client.delete(self._key(key)))
        except redis.RedisError as e:
            logger.error("Session store delete failed", error=str(e))
            raise StoreError("Session store unavailable") from e

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self.client.aclose()


class InMemorySessionStore:
    """In-memory session store honoring TTLs.

    Only suitable for a single process.
    """

    def __init__(self) -> None:
        self._entries: dict[str, tuple[str, datetime]] = {}

    async def set(self, key: str, value: str, ttl: timedelta) -> None:
        now = datetime.now(timezone.utc)
        self._purge_expired(now)
        self._entries[key] = (value, now + ttl)

    def _purge_expired(self, now: datetime) -> None:
        expired = [k for k, (_, expires_at) in self._entries.items() if now >= expires_at]
        for k in expired:
            del self._entries[k]

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if datetime.now(timezone.utc) >= expires_at:
            del self._entries[key]
            return None

        return value

    async def delete(self, key: str) -> int:
        if await self.get(key) is None:
            return 0
        del self._entries[key]
        return 1

    async def close(self) -> None:
        self._entries.clear()
