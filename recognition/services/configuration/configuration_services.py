# Standard library imports
from typing import Any

# Third-party imports
from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.core.db.transactions import commit_or_raise
from recognition.core.exceptions import InvalidConfiguration
from recognition.core.monitoring.logging import get_logger
from recognition.db_selectors import configuration as config_selectors
from recognition.models.configuration.eligibility_config import ELIGIBILITY_CONFIG_KEY, EligibilityConfig
from recognition.models.configuration.voting_group_config import VOTING_GROUP_CONFIG_KEY, VotingGroupConfig
from recognition.schemas.audit.audit_schemas import Actor
from recognition.schemas.configuration.config_schemas import (
    DEFAULT_ELIGIBILITY_CONFIG,
    DEFAULT_VOTING_GROUP_CONFIG,
    EligibilityConfigSchema,
    VotingGroupConfigInput,
    VotingGroupConfigSchema,
)
from recognition.services.audit.audit_services import detect_changes
from recognition.services.events import Event, EventType, PostCommitHooks
from recognition.services.voting.voting_group_services import VotingGroupAssigner

logger = get_logger(__name__)


def _validate(schema: type[BaseModel], data: dict[str, Any]) -> Any:
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        messages = [f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()]
        raise InvalidConfiguration("; ".join(messages), details=messages) from e


def _stored_fields(config: BaseModel) -> dict[str, Any]:
    return config.model_dump(mode="json", exclude={"updated_at"})


class ConfigurationService:
    """
    Reads and writes the two singleton configuration rows.

    Every voting-group load or write rebuilds the assigner's lookup tables.
    """

    def __init__(self, db: AsyncSession, assigner: VotingGroupAssigner, hooks: PostCommitHooks) -> None:
        self.db = db
        self.assigner = assigner
        self.hooks = hooks

    # ---- Eligibility ----
    async def get_eligibility_config(self) -> EligibilityConfigSchema:
        row = await config_selectors.get_eligibility_config(self.db)
        if row is None:
            return DEFAULT_ELIGIBILITY_CONFIG
        return EligibilityConfigSchema.model_validate(row)

    async def update_eligibility_config(self, changes: dict[str, Any], actor: Actor) -> EligibilityConfigSchema:
        current = await self.get_eligibility_config()
        merged: EligibilityConfigSchema = _validate(EligibilityConfigSchema, {**_stored_fields(current), **changes})
        return await self._save_eligibility(current, merged, actor)

    async def reset_eligibility_config(self, actor: Actor) -> EligibilityConfigSchema:
        current = await self.get_eligibility_config()
        return await self._save_eligibility(current, DEFAULT_ELIGIBILITY_CONFIG, actor)

    async def _save_eligibility(
        self, before: EligibilityConfigSchema, after: EligibilityConfigSchema, actor: Actor
    ) -> EligibilityConfigSchema:
        row = await config_selectors.get_eligibility_config(self.db)
        if row is None:
            row = EligibilityConfig(key=ELIGIBILITY_CONFIG_KEY)
            self.db.add(row)
        for field, value in _stored_fields(after).items():
            setattr(row, field, value)
        await commit_or_raise(self.db)

        saved = EligibilityConfigSchema.model_validate(row)
        await self._publish(ELIGIBILITY_CONFIG_KEY, before, saved, actor)
        return saved

    # ---- Voting groups ----
    async def get_voting_group_config(self) -> VotingGroupConfigSchema:
        row = await config_selectors.get_voting_group_config(self.db)
        config = DEFAULT_VOTING_GROUP_CONFIG if row is None else VotingGroupConfigSchema.model_validate(row)
        self.assigner.reload(config)
        return config

    async def update_voting_group_config(self, changes: dict[str, Any], actor: Actor) -> VotingGroupConfigSchema:
        current = await self.get_voting_group_config()
        merged: VotingGroupConfigInput = _validate(VotingGroupConfigInput, {**_stored_fields(current), **changes})
        return await self._save_voting_group(current, merged, actor)

    async def reset_voting_group_config(self, actor: Actor) -> VotingGroupConfigSchema:
        current = await self.get_voting_group_config()
        return await self._save_voting_group(current, DEFAULT_VOTING_GROUP_CONFIG, actor)

    async def _save_voting_group(
        self, before: VotingGroupConfigSchema, after: VotingGroupConfigSchema, actor: Actor
    ) -> VotingGroupConfigSchema:
        row = await config_selectors.get_voting_group_config(self.db)
        if row is None:
            row = VotingGroupConfig(key=VOTING_GROUP_CONFIG_KEY)
            self.db.add(row)
        for field, value in _stored_fields(after).items():
            setattr(row, field, value)
        await commit_or_raise(self.db)

        saved = VotingGroupConfigSchema.model_validate(row)
        self.assigner.reload(saved)
        await self._publish(VOTING_GROUP_CONFIG_KEY, before, saved, actor)
        return saved

    async def _publish(self, key: str, before: BaseModel, after: BaseModel, actor: Actor) -> None:
        logger.info(f"Configuration '{key}' updated by {actor.user_id}")
        await self.hooks.publish(
            Event(
                type=EventType.CONFIGURATION_UPDATED,
                entity_id=key,
                actor=actor,
                changes=tuple(detect_changes(_stored_fields(before), _stored_fields(after))),
                payload={"config": key},
            )
        )
