# Local application imports
from recognition.core.db.create_async_engine import async_engine
from recognition.core.db.get_async_session import AsyncSessionLocal, get_async_session
from recognition.core.db.run_with_new_session import run_with_new_session
from recognition.core.db.transactions import commit_or_raise

__all__ = [
    "AsyncSessionLocal",
    "async_engine",
    "commit_or_raise",
    "get_async_session",
    "run_with_new_session",
]
