# tests/services/test_configuration_services.py
# Third-party imports
import pytest

# Local application imports
from recognition.core.exceptions import InvalidConfiguration
from recognition.models import Employee
from recognition.models.audit.audit_log import AuditAction, AuditEntity
from recognition.schemas.configuration.config_schemas import DEFAULT_ELIGIBILITY_CONFIG, WinnersFormula
from recognition.services.configuration.configuration_services import ConfigurationService
from recognition.services.voting.voting_group_services import VotingGroupAssigner
from tests.factories import ADMIN


async def test_defaults_when_nothing_stored(configuration) -> None:
    eligibility = await configuration.get_eligibility_config()
    voting_groups = await configuration.get_voting_group_config()

    assert eligibility == DEFAULT_ELIGIBILITY_CONFIG
    assert eligibility.minimum_days_for_eligibility == 365
    assert voting_groups.strategy == "location"
    assert voting_groups.fallback_strategy == "location"


async def test_update_eligibility_merges_and_persists(configuration, audit_sink) -> None:
    await configuration.update_eligibility_config({"minimum_days_for_eligibility": 90}, ADMIN)
    updated = await configuration.update_eligibility_config(
        {"winners_formula": {"divisor": 25, "min_winners": 1}}, ADMIN
    )

    assert updated.minimum_days_for_eligibility == 90
    assert updated.winners_formula == WinnersFormula(divisor=25, min_winners=1)
    assert (await configuration.get_eligibility_config()).minimum_days_for_eligibility == 90

    entry = audit_sink.entries[-1]
    assert (entry["entity_type"], entry["action"]) == (AuditEntity.CONFIGURATION, AuditAction.UPDATE)
    assert entry["entity_id"] == "eligibility"
    assert [c.field for c in entry["changes"]] == ["winners_formula"]


@pytest.mark.parametrize(
    "changes",
    [
        {"minimum_days_for_eligibility": -1},
        {"winners_formula": {"divisor": 0}},
        {"winners_formula": {"divisor": 10, "min_winners": -2}},
        {"excluded_departments": "HR"},
    ],
)
async def test_invalid_eligibility_config(configuration, changes) -> None:
    with pytest.raises(InvalidConfiguration):
        await configuration.update_eligibility_config(changes, ADMIN)


@pytest.mark.parametrize(
    "changes",
    [
        {"strategy": "astrology"},
        {"fallback_strategy": "random"},
        {"location_group_mappings": [{"group_name": "", "locations": ["A"]}]},
    ],
)
async def test_invalid_voting_group_config(configuration, changes) -> None:
    with pytest.raises(InvalidConfiguration):
        await configuration.update_voting_group_config(changes, ADMIN)


async def test_voting_group_update_rebuilds_assigner(configuration, assigner) -> None:
    employee = Employee(email="x@example.com", location="Tijuana", department="QA")
    assert assigner.assign_group(employee) == "Tijuana"

    await configuration.update_voting_group_config(
        {"strategy": "department", "department_group_mappings": [{"group_name": "Technical", "departments": ["qa"]}]},
        ADMIN,
    )

    assert assigner.strategy == "department"
    assert assigner.assign_group(employee) == "Technical"


async def test_reset_restores_defaults(configuration, assigner) -> None:
    await configuration.update_voting_group_config({"strategy": "department"}, ADMIN)
    await configuration.update_eligibility_config({"excluded_departments": ["HR"]}, ADMIN)

    voting_groups = await configuration.reset_voting_group_config(ADMIN)
    eligibility = await configuration.reset_eligibility_config(ADMIN)

    assert voting_groups.strategy == "location"
    assert assigner.strategy == "location"
    assert eligibility.excluded_departments == []


async def test_loading_stored_config_refreshes_assigner(db, configuration, hooks) -> None:
    await configuration.update_voting_group_config({"strategy": "department"}, ADMIN)
    fresh_assigner = VotingGroupAssigner()

    await ConfigurationService(db, fresh_assigner, hooks).get_voting_group_config()

    assert fresh_assigner.strategy == "department"
