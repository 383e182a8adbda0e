"""
Voting group assignment.

An employee's voting group is a pure function of the current
``VotingGroupConfigSchema`` and the employee's location and department.
Lookups are case- and whitespace-insensitive; the values ``"Unknown"`` and
``""`` count as missing. Raw fallbacks return the trimmed value with its
original casing.
"""

# Standard library imports
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# Local application imports
from recognition.core.monitoring.logging import get_logger
from recognition.models.employees.employee import Employee
from recognition.schemas.configuration.config_schemas import DEFAULT_VOTING_GROUP_CONFIG, VotingGroupConfigSchema
from recognition.schemas.voting.result_schemas import DEFAULT_GROUP, GroupLabel

logger = get_logger(__name__)

UNKNOWN_VALUE = "Unknown"


def clean_value(value: str | None) -> str | None:
    """Trimmed value, or None for missing/"Unknown"."""
    if value is None:
        return None
    cleaned = value.strip()
    if not cleaned or cleaned == UNKNOWN_VALUE:
        return None
    return cleaned


def lookup_key(value: str | None) -> str | None:
    cleaned = clean_value(value)
    return cleaned.lower() if cleaned is not None else None


def _index(pairs: Iterable[tuple[str, str]]) -> Mapping[str, str]:
    table: dict[str, str] = {}
    for raw_key, group_name in pairs:
        key = lookup_key(raw_key)
        if key is not None:
            table[key] = group_name
    return MappingProxyType(table)


@dataclass(frozen=True)
class GroupLookupTables:
    """Immutable lookup snapshot built from one configuration."""

    strategy: str = "location"
    fallback_strategy: str = "location"
    by_location: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    by_department: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    mixed_by_location: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    mixed_by_department: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    legacy: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(cls, config: VotingGroupConfigSchema) -> "GroupLookupTables":
        return cls(
            strategy=config.strategy,
            fallback_strategy=config.fallback_strategy,
            by_location=_index(
                (location, mapping.group_name)
                for mapping in config.location_group_mappings
                for location in mapping.locations
            ),
            by_department=_index(
                (department, mapping.group_name)
                for mapping in config.department_group_mappings
                for department in mapping.departments
            ),
            mixed_by_location=_index(
                (location, mapping.group_name)
                for mapping in config.mixed_group_mappings
                for location in mapping.locations
            ),
            mixed_by_department=_index(
                (department, mapping.group_name)
                for mapping in config.mixed_group_mappings
                for department in mapping.departments
            ),
            # Legacy keys are comma-separated lists sharing one group
            legacy=_index(
                (key, group_name) for keys, group_name in config.custom_mappings.items() for key in keys.split(",")
            ),
        )

    def resolve(self, location: str | None, department: str | None) -> str | None:
        location_key = lookup_key(location)
        department_key = lookup_key(department)

        if self.strategy == "location":
            return _first(self.by_location, location_key) or clean_value(location)

        if self.strategy == "department":
            return _first(self.by_department, department_key) or clean_value(department)

        if self.strategy == "mixed":
            return (
                _first(self.mixed_by_location, location_key)
                or _first(self.mixed_by_department, department_key)
                or self._fallback(location, department)
            )

        if self.strategy == "custom":
            return (
                _first(self.mixed_by_location, location_key)
                or _first(self.mixed_by_department, department_key)
                or _first(self.by_location, location_key)
                or _first(self.by_department, department_key)
                or _first(self.legacy, location_key)
                or _first(self.legacy, department_key)
                or self._fallback(location, department)
            )

        return None

    def _fallback(self, location: str | None, department: str | None) -> str | None:
        if self.fallback_strategy == "location":
            return clean_value(location)
        if self.fallback_strategy == "department":
            return clean_value(department)
        return None


def _first(table: Mapping[str, str], key: str | None) -> str | None:
    if key is None:
        return None
    return table.get(key)


class VotingGroupAssigner:
    """
    Holds the current lookup snapshot.

    ``reload`` builds a complete new snapshot and swaps the reference in one
    assignment, so a concurrent ``assign_group`` sees either the old or the
    new tables, never a mix.
    """

    def __init__(self, config: VotingGroupConfigSchema | None = None) -> None:
        self._tables = GroupLookupTables.build(config or DEFAULT_VOTING_GROUP_CONFIG)

    @property
    def tables(self) -> GroupLookupTables:
        return self._tables

    @property
    def strategy(self) -> str:
        return self._tables.strategy

    def reload(self, config: VotingGroupConfigSchema) -> None:
        tables = GroupLookupTables.build(config)
        self._tables = tables
        logger.info(
            f"Voting group configuration loaded: strategy={tables.strategy} "
            f"fallback={tables.fallback_strategy} legacy_keys={len(tables.legacy)}"
        )

    def assign_group(self, employee: Employee) -> str | None:
        return self._tables.resolve(employee.location, employee.department)

    def group_label(self, employee: Employee | None) -> GroupLabel:
        if employee is None:
            return DEFAULT_GROUP
        name = self.assign_group(employee)
        # A group literally named "default" shares the default bucket
        return GroupLabel.parse(name)
