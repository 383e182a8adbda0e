# tests/api/test_voting_api.py
# Standard library imports
from uuid import uuid4

# Local application imports
from recognition.dependancies.common import get_post_commit_hooks
from recognition.services.audit.audit_services import DatabaseAuditSink
from recognition.services.events import build_post_commit_hooks
from tests.factories import ADMIN_HEADERS, headers_for, scores

PERIODS = "/api/v1/voting-periods"
NOMINATIONS = "/api/v1/nominations"
WINNERS = "/api/v1/winners"

MARCH = {
    "year": 2025,
    "month": 3,
    "start_date": "2025-03-01T00:00:00Z",
    "end_date": "2025-03-28T00:00:00Z",
}


async def _create_march(client) -> dict:
    res = await client.post(PERIODS, json=MARCH, headers=ADMIN_HEADERS)
    assert res.status_code == 201
    return res.json()["data"]


async def _nominate(client, nominee, nominator, **fields):
    body = {
        "nominated_employee_id": str(nominee.id),
        "reason": "Rebuilt the release pipeline end to end",
        "criteria": scores(),
        **fields,
    }
    return await client.post(NOMINATIONS, json=body, headers=headers_for(nominator))


async def test_create_and_fetch_period(client) -> None:
    period = await _create_march(client)

    assert period["status"] == "active"

    res = await client.get(f"{PERIODS}/current")
    assert res.status_code == 200
    assert res.json() == {"ok": True, "data": res.json()["data"]}
    assert res.json()["data"]["id"] == period["id"]


async def test_duplicate_period_is_a_conflict(client) -> None:
    await _create_march(client)

    res = await client.post(PERIODS, json={**MARCH, "status": "pending"}, headers=ADMIN_HEADERS)

    assert res.status_code == 409
    assert res.json()["ok"] is False
    assert res.json()["error"]["code"] == "duplicate_period"


async def test_missing_actor_headers_are_rejected(client) -> None:
    res = await client.post(PERIODS, json=MARCH)

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "bad_request"


async def test_inverted_dates_are_rejected(client) -> None:
    res = await client.post(PERIODS, json={**MARCH, "end_date": "2025-02-01T00:00:00Z"}, headers=ADMIN_HEADERS)

    assert res.status_code == 400
    assert "end_date must not be before start_date" in res.json()["error"]["message"]


async def test_unknown_period_is_not_found(client) -> None:
    res = await client.get(f"{PERIODS}/{uuid4()}")

    assert res.status_code == 404
    assert res.json()["error"]["code"] == "voting_period_not_found"


async def test_no_current_period(client) -> None:
    res = await client.get(f"{PERIODS}/current")

    assert res.status_code == 404
    assert res.json()["error"]["code"] == "no_active_voting_period"


async def test_nomination_flow_and_results(client, make_employee) -> None:
    period = await _create_march(client)
    alice = await make_employee(full_name="Alice")
    bob = await make_employee(full_name="Bob")
    voters = [await make_employee() for _ in range(4)]

    for voter, nominee in zip(voters, [alice, alice, alice, bob]):
        res = await _nominate(client, nominee, voter)
        assert res.status_code == 201

    res = await client.get(f"{PERIODS}/{period['id']}/results")

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["total_nominations"] == 4
    assert [(r["employee_name"], r["percentage"], r["rank"]) for r in data["results"]] == [
        ("Alice", 75.0, 1),
        ("Bob", 25.0, 2),
    ]
    assert data["results"][0]["voting_group"] == "Tijuana"
    assert [w["employee_name"] for w in data["winners"]] == ["Alice"]
    assert data["winner"]["employee_name"] == "Alice"


async def test_nomination_errors_map_to_statuses(client, make_employee) -> None:
    await _create_march(client)
    nominee = await make_employee()
    voter = await make_employee()

    res = await _nominate(client, nominee, nominee, reason="x")
    assert (res.status_code, res.json()["error"]["code"]) == (400, "self_nomination")

    res = await _nominate(client, nominee, voter, criteria=scores(innovation=7))
    assert (res.status_code, res.json()["error"]["code"]) == (400, "invalid_criteria")
    assert res.json()["error"]["details"] == {"field": "innovation"}

    res = await _nominate(client, nominee, voter, reason="too short")
    assert (res.status_code, res.json()["error"]["code"]) == (400, "invalid_reason")

    res = await client.post(
        NOMINATIONS,
        json={"nominated_employee_id": str(uuid4()), "reason": "Helped everyone all month", "criteria": scores()},
        headers=headers_for(voter),
    )
    assert (res.status_code, res.json()["error"]["code"]) == (404, "employee_not_found")

    assert (await _nominate(client, nominee, voter)).status_code == 201
    res = await _nominate(client, nominee, voter)
    assert (res.status_code, res.json()["error"]["code"]) == (409, "duplicate_nomination")


async def test_nomination_without_active_period(client, make_employee) -> None:
    res = await _nominate(client, await make_employee(), await make_employee())

    assert res.status_code == 404
    assert res.json()["error"]["code"] == "no_active_voting_period"


async def test_my_nomination_and_listing(client, make_employee) -> None:
    await _create_march(client)
    nominee = await make_employee(full_name="Listed")
    voter = await make_employee()

    res = await client.get(f"{NOMINATIONS}/mine", headers=headers_for(voter))
    assert res.json() == {"ok": True}

    created = (await _nominate(client, nominee, voter)).json()["data"]

    res = await client.get(f"{NOMINATIONS}/mine", headers=headers_for(voter))
    assert res.json()["data"]["id"] == created["id"]

    res = await client.get(NOMINATIONS, params={"limit": 10, "offset": 0})
    assert res.json()["meta"] == {"limit": 10, "offset": 0, "total_items": 1}
    assert res.json()["data"][0]["nominated_employee"]["full_name"] == "Listed"


async def test_update_and_delete_nomination(client, make_employee) -> None:
    await _create_march(client)
    created = (await _nominate(client, await make_employee(), await make_employee())).json()["data"]

    res = await client.patch(f"{NOMINATIONS}/{created['id']}", json={"criteria": scores(2)})
    assert res.status_code == 200
    assert res.json()["data"]["criteria"] == scores(2)

    res = await client.delete(f"{NOMINATIONS}/{created['id']}")
    assert res.status_code == 204

    res = await client.get(f"{NOMINATIONS}/{created['id']}")
    assert res.status_code == 404


async def test_close_reset_and_delete_period(client, make_employee) -> None:
    period = await _create_march(client)
    await _nominate(client, await make_employee(), await make_employee())

    res = await client.post(f"{PERIODS}/{period['id']}/close", headers=ADMIN_HEADERS)
    assert res.json()["data"]["status"] == "closed"

    res = await client.post(f"{PERIODS}/{period['id']}/close", headers=ADMIN_HEADERS)
    assert (res.status_code, res.json()["error"]["code"]) == (409, "already_closed")

    res = await client.post(f"{PERIODS}/{period['id']}/reset", headers=ADMIN_HEADERS)
    assert res.json()["data"]["success"] is True
    assert res.json()["data"]["nominations_deleted"] == 1

    res = await client.delete(f"{PERIODS}/{period['id']}", headers=ADMIN_HEADERS)
    assert res.json()["data"]["success"] is True
    assert (await client.get(f"{PERIODS}/{period['id']}")).status_code == 404


async def test_reset_of_unknown_period_reports_failure_in_body(client) -> None:
    res = await client.post(f"{PERIODS}/{uuid4()}/reset", headers=ADMIN_HEADERS)

    assert res.status_code == 200
    assert res.json()["data"]["success"] is False


async def test_winner_selection_and_reactions(client, make_employee) -> None:
    period = await _create_march(client)
    star = await make_employee(full_name="Star")
    await _nominate(client, star, await make_employee())

    res = await client.post(
        f"{WINNERS}/voting-periods/{period['id']}/select", params={"close_period": True}, headers=ADMIN_HEADERS
    )
    assert res.status_code == 200
    assert res.json()["data"]["general_winner"]["employee_name"] == "Star"

    current = (await client.get(f"{WINNERS}/current")).json()["data"]
    assert current["winner_type"] == "general"

    res = await client.post(f"{WINNERS}/{current['id']}/reactions", json={"emoji": "🎉"}, headers=ADMIN_HEADERS)
    assert [r["emoji"] for r in res.json()["data"]["reactions"]] == ["🎉"]

    res = await client.post(f"{WINNERS}/{current['id']}/yearly", headers=ADMIN_HEADERS)
    assert res.json()["data"]["is_yearly_winner"] is True
    assert (await client.get(f"{WINNERS}/yearly/2025")).json()["data"]["id"] == current["id"]

    res = await client.get(WINNERS, params={"year": 2025, "winner_type": "by_group"})
    assert len(res.json()["data"]) == 1


async def test_audit_history_endpoint(app, client, session_factory) -> None:
    hooks = build_post_commit_hooks(audit_sink=DatabaseAuditSink(session_factory))
    app.dependency_overrides[get_post_commit_hooks] = lambda: hooks
    period = await _create_march(client)
    await client.post(f"{PERIODS}/{period['id']}/close", headers=ADMIN_HEADERS)

    res = await client.get(f"{PERIODS}/{period['id']}/audit")

    assert res.status_code == 200
    logs = res.json()["data"]
    assert [log["action"] for log in logs] == ["create", "close"]
    assert logs[1]["user_id"] == "admin-1"
