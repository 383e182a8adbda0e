# tests/api/conftest.py
# Standard library imports
from collections.abc import AsyncIterator

# Third-party imports
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
import pytest

# Local application imports
from main import create_app
from recognition.core.db import get_async_session
from recognition.dependancies.common import get_post_commit_hooks, get_result_cache, get_voting_group_assigner

@pytest.fixture()
def app(session_factory, cache, hooks, assigner) -> FastAPI:
    app = create_app()

    async def _get_session_override():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = _get_session_override
    app.dependency_overrides[get_result_cache] = lambda: cache
    app.dependency_overrides[get_post_commit_hooks] = lambda: hooks
    app.dependency_overrides[get_voting_group_assigner] = lambda: assigner
    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client
