"""
Token persistence.

- redis_client.py: shared async Redis connection pool
- token_cache.py: TokenCache protocol with in-memory and Redis backends
"""

from luis_router.persistence.redis_client import RedisClient
from luis_router.persistence.token_cache import (
    InMemoryTokenCache,
    RedisTokenCache,
    TokenCache,
    create_token_cache,
)

__all__ = [
    "RedisClient",
    "InMemoryTokenCache",
    "RedisTokenCache",
    "TokenCache",
    "create_token_cache",
]
