"""
Cache Service - best-effort key-value store for similarity scores

A cache never decides a score. A miss, an unreachable server or a failed
write all look the same to callers: get() returns None and they recompute.

Public API:
- get(key) -> Optional[str]
- set(key, value) -> None
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

import redis

logger = logging.getLogger(__name__)


class SimilarityCache(ABC):
    """Key-value lookup for previously computed similarity scores"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass


class InMemorySimilarityCache(SimilarityCache):
    """Process-local cache (one dict)"""

    def __init__(self):
        self.store: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.store.get(key)

    def set(self, key: str, value: str) -> None:
        self.store[key] = value

    def __len__(self) -> int:
        return len(self.store)


class RedisSimilarityCache(SimilarityCache):
    """
    Redis-backed cache shared across solver processes

    Concurrent writers may race on a key; they always write the same value.
    """

    def __init__(self, host: str = 'localhost', port: int = 6379, client: redis.Redis = None):
        """
        Initialize the cache

        Args:
            host: Redis host
            port: Redis port
            client: Optional preconfigured client (overrides host/port)
        """
        self.client = client or redis.Redis(host=host, port=port, decode_responses=True)
        logger.info(f"Using Redis cache for similarity scores at {host}:{port}")

    def get(self, key: str) -> Optional[str]:
        try:
            value = self.client.get(key)
        except redis.RedisError as e:
            logger.warning(f"Redis get failed, recomputing: {e}")
            return None
        if isinstance(value, bytes):
            value = value.decode('utf-8')
        return value

    def set(self, key: str, value: str) -> None:
        try:
            self.client.set(key, value)
        except redis.RedisError as e:
            logger.warning(f"Redis set failed, score not cached: {e}")
