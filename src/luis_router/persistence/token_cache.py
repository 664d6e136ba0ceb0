"""
Session-scoped bearer token storage.

The clients depend only on the TokenCache protocol: ``get`` returns the
token for a session (empty string when absent) and ``set`` overwrites
it. Nothing here predicts expiry; the optional Redis TTL only bounds how
long an abandoned session's token occupies storage.

Concurrent route calls for the same session share one slot without a
lock. The last successful identity exchange wins.
"""

from typing import Optional, Protocol

import structlog
from redis.asyncio import Redis as AsyncRedis

from luis_router.config import Settings
from luis_router.persistence.redis_client import RedisClient

logger = structlog.get_logger(__name__)


class TokenCache(Protocol):
    async def get(self, session_id: str) -> str:
        ...

    async def set(self, session_id: str, token: str) -> None:
        ...


class InMemoryTokenCache:
    """Dict-backed cache; lives as long as the process."""

    def __init__(self) -> None:
        self._tokens: dict[str, str] = {}

    async def get(self, session_id: str) -> str:
        return self._tokens.get(session_id, "")

    async def set(self, session_id: str, token: str) -> None:
        self._tokens[session_id] = token

    def __len__(self) -> int:
        return len(self._tokens)


class RedisTokenCache:
    """
    Redis-backed cache shared across worker processes.

    Key layout: ``luis_router:token:{session_id}`` -> token string.
    """

    KEY_PREFIX = "luis_router:token:"

    def __init__(self, redis_client: AsyncRedis, ttl_seconds: int = 0):
        """
        Args:
            redis_client: AsyncRedis client (decode_responses=True)
            ttl_seconds: Expire stored tokens after this long; 0 keeps them
        """
        self.redis = redis_client
        self.ttl_seconds = ttl_seconds

    def _key(self, session_id: str) -> str:
        return f"{self.KEY_PREFIX}{session_id}"

    async def get(self, session_id: str) -> str:
        value = await self.redis.get(self._key(session_id))
        if value is None:
            return ""
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, session_id: str, token: str) -> None:
        if self.ttl_seconds:
            await self.redis.setex(self._key(session_id), self.ttl_seconds, token)
        else:
            await self.redis.set(self._key(session_id), token)
        logger.debug("Stored session token", session_id=session_id, ttl=self.ttl_seconds)


def create_token_cache(
    settings: Settings, redis_client: Optional[AsyncRedis] = None
) -> TokenCache:
    """
    Build the token cache selected by TOKEN_CACHE_BACKEND.

    Args:
        settings: Application settings
        redis_client: Optional client override (defaults to the shared pool)

    Returns:
        TokenCache implementation
    """
    if settings.TOKEN_CACHE_BACKEND == "redis":
        client = redis_client or RedisClient.get_async_client(settings)
        return RedisTokenCache(client, ttl_seconds=settings.TOKEN_CACHE_TTL_SECONDS)
    return InMemoryTokenCache()
