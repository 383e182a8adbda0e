# Third-party imports
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.models.configuration.eligibility_config import ELIGIBILITY_CONFIG_KEY, EligibilityConfig
from recognition.models.configuration.voting_group_config import VOTING_GROUP_CONFIG_KEY, VotingGroupConfig


async def get_eligibility_config(db: AsyncSession) -> EligibilityConfig | None:
    result = await db.execute(select(EligibilityConfig).where(EligibilityConfig.key == ELIGIBILITY_CONFIG_KEY))
    return result.scalar_one_or_none()


async def get_voting_group_config(db: AsyncSession) -> VotingGroupConfig | None:
    result = await db.execute(select(VotingGroupConfig).where(VotingGroupConfig.key == VOTING_GROUP_CONFIG_KEY))
    return result.scalar_one_or_none()
