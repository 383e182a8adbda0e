# Local application imports
from recognition.core.caching.result_cache import (
    MemoryResultCache,
    RedisResultCache,
    ResultCache,
    create_result_cache,
)

__all__ = ["MemoryResultCache", "RedisResultCache", "ResultCache", "create_result_cache"]
