# Standard library imports
from collections.abc import Awaitable, Callable
from typing import Any

# Local application imports
from recognition.core.db.get_async_session import get_async_session


async def run_with_new_session(
    func: Callable[..., Awaitable[Any]],
    *args: Any,
    **kwargs: Any,
) -> Any:
    """
    Run any coroutine function with a fresh DB session.

    Used by scripts and scheduled jobs (e.g. closing expired voting periods)
    that run outside a request.

    Args:
        func: The function to run, which must accept an
        AsyncSession as its first argument.
        *args: Positional arguments to pass to the function.
        **kwargs: Keyword arguments to pass to the function.

    Returns:
        Any: The result of the function execution.
    """
    async for session in get_async_session():
        return await func(session, *args, **kwargs)
    raise RuntimeError("Failed to obtain database session")
