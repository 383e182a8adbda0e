# tests/api/test_configuration_api.py
# Local application imports
from tests.factories import ADMIN_HEADERS

CONFIGURATION = "/api/v1/configuration"


async def test_get_default_eligibility(client) -> None:
    res = await client.get(f"{CONFIGURATION}/eligibility")

    assert res.status_code == 200
    assert res.json()["data"]["minimum_days_for_eligibility"] == 365
    assert res.json()["data"]["winners_formula"] is None


async def test_patch_eligibility(client) -> None:
    res = await client.patch(
        f"{CONFIGURATION}/eligibility",
        json={"winners_formula": {"divisor": 25, "min_winners": 1}},
        headers=ADMIN_HEADERS,
    )

    assert res.status_code == 200
    assert res.json()["data"]["winners_formula"] == {"divisor": 25.0, "min_winners": 1}


async def test_invalid_configuration_is_rejected(client) -> None:
    res = await client.patch(
        f"{CONFIGURATION}/voting-groups", json={"strategy": "astrology"}, headers=ADMIN_HEADERS
    )

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "invalid_configuration"


async def test_voting_group_update_and_reset(client, assigner) -> None:
    res = await client.patch(
        f"{CONFIGURATION}/voting-groups",
        json={"strategy": "mixed", "mixed_group_mappings": [{"group_name": "Field", "locations": ["Plant 1"]}]},
        headers=ADMIN_HEADERS,
    )
    assert res.json()["data"]["strategy"] == "mixed"
    assert assigner.strategy == "mixed"

    res = await client.post(f"{CONFIGURATION}/voting-groups/reset", headers=ADMIN_HEADERS)
    assert res.json()["data"]["strategy"] == "location"
    assert assigner.strategy == "location"
