# Third-party imports
import redis.asyncio as redis

# Local application imports
from recognition.settings import settings


def create_redis_client(url: str | None = None) -> redis.Redis:
    connection_pool: redis.ConnectionPool = redis.ConnectionPool.from_url(
        url or settings.REDIS_URL, decode_responses=True
    )
    return redis.Redis(connection_pool=connection_pool)
