# tests/api/test_test_data_api.py
# Standard library imports
from unittest.mock import patch
from uuid import UUID

# Local application imports
from tests.factories import ADMIN_HEADERS

TEST_DATA = "/api/v1/nominations/test-data"


async def test_generate_test_nominations(client, make_employee, cache) -> None:
    res = await client.post(
        "/api/v1/voting-periods",
        json={"year": 2025, "month": 6, "start_date": "2025-06-01T00:00:00Z", "end_date": "2025-06-28T00:00:00Z"},
        headers=ADMIN_HEADERS,
    )
    period_id = res.json()["data"]["id"]
    for _ in range(3):
        await make_employee()
    await client.get(f"/api/v1/voting-periods/{period_id}/results")
    assert await cache.get(UUID(period_id)) is not None

    res = await client.post(TEST_DATA, json={"count": 2})

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["created"] + data["failed"] == 2
    assert await cache.get(UUID(period_id)) is None


async def test_test_data_disabled_in_production(client) -> None:
    with patch("recognition.api.internal.routes.v1.voting.nomination_routes.settings.ENVIRONMENT", "production"):
        res = await client.post(TEST_DATA, json={"count": 2})

    assert res.status_code == 403
    assert res.json()["error"]["code"] == "forbidden"
