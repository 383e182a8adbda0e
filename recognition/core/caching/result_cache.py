"""
Short-lived memoization of computed voting results.

Entries are keyed by voting period id. The cache is a de-duplication layer
only: every nomination write for a period invalidates its entry, and a miss
always falls through to a synchronous recomputation.
"""

# Standard library imports
from collections.abc import Callable
import time
from typing import Protocol
from uuid import UUID

# Third-party imports
from pydantic import ValidationError as PydanticValidationError
import redis.asyncio as redis
from redis.exceptions import RedisError

# Local application imports
from recognition.core.monitoring.logging import get_contextual_logger
from recognition.schemas.voting.result_schemas import VotingPeriodResults
from recognition.settings import settings

logger = get_contextual_logger(__name__)

CACHE_KEY_PREFIX = "VOTING_RESULTS"


class ResultCache(Protocol):
    async def get(self, period_id: UUID) -> VotingPeriodResults | None: ...

    async def set(self, period_id: UUID, results: VotingPeriodResults) -> None: ...

    async def invalidate(self, period_id: UUID) -> None: ...

    async def clear(self) -> None: ...


class MemoryResultCache:
    """Process-local cache with a fixed TTL."""

    def __init__(self, ttl_seconds: float = 300, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[UUID, tuple[float, VotingPeriodResults]] = {}

    async def get(self, period_id: UUID) -> VotingPeriodResults | None:
        entry = self._entries.get(period_id)
        if entry is None:
            return None
        stored_at, results = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            self._entries.pop(period_id, None)
            return None
        return results

    async def set(self, period_id: UUID, results: VotingPeriodResults) -> None:
        self._entries[period_id] = (self._clock(), results)

    async def invalidate(self, period_id: UUID) -> None:
        self._entries.pop(period_id, None)

    async def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class RedisResultCache:
    """Shared cache in Redis. Any Redis failure is logged and treated as a miss."""

    def __init__(self, client: redis.Redis, ttl_seconds: int = 300) -> None:
        self.client = client
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def cache_key(period_id: UUID) -> str:
        return f"{CACHE_KEY_PREFIX}:{period_id}"

    async def get(self, period_id: UUID) -> VotingPeriodResults | None:
        key = self.cache_key(period_id)
        try:
            cached = await self.client.get(key)
        except RedisError as e:
            logger.error(f"Error retrieving from cache: {str(e)}", exc_info=True)
            return None
        if not cached:
            return None
        try:
            return VotingPeriodResults.model_validate_json(cached)
        except PydanticValidationError:
            logger.warning(f"Discarding unreadable cache entry {key}")
            return None

    async def set(self, period_id: UUID, results: VotingPeriodResults) -> None:
        key = self.cache_key(period_id)
        try:
            await self.client.set(key, results.model_dump_json(), ex=self.ttl_seconds)
            logger.debug(f"Cached data with key: {key} for {self.ttl_seconds} seconds")
        except RedisError as e:
            logger.error(f"Error setting cache: {str(e)}", exc_info=True)

    async def invalidate(self, period_id: UUID) -> None:
        key = self.cache_key(period_id)
        try:
            await self.client.delete(key)
            logger.debug(f"Deleted cache key: {key}")
        except RedisError as e:
            logger.error(f"Error deleting cache key {key}: {str(e)}", exc_info=True)

    async def clear(self) -> None:
        pattern = f"{CACHE_KEY_PREFIX}:*"
        try:
            keys = [key async for key in self.client.scan_iter(match=pattern)]
            if keys:
                await self.client.delete(*keys)
                logger.info(f"Invalidated {len(keys)} cache keys matching pattern: {pattern}")
        except RedisError as e:
            logger.error(f"Error invalidating cache pattern {pattern}: {str(e)}", exc_info=True)


def create_result_cache() -> ResultCache:
    if settings.RESULTS_CACHE_BACKEND == "redis":
        # Local application imports
        from recognition.core.caching.redis import create_redis_client

        return RedisResultCache(create_redis_client(), ttl_seconds=settings.RESULTS_CACHE_TTL_SECONDS)
    return MemoryResultCache(ttl_seconds=settings.RESULTS_CACHE_TTL_SECONDS)
