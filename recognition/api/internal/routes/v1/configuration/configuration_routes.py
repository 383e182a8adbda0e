# Standard library imports
from typing import Any

# Third-party imports
from fastapi import APIRouter, Body

# Local application imports
from recognition.dependancies.common import ActorDep, ConfigurationServiceDep
from recognition.schemas.common import BaseResponse
from recognition.schemas.configuration import EligibilityConfigSchema, VotingGroupConfigSchema

router = APIRouter(prefix="/configuration", tags=["Configuration"])


@router.get("/eligibility", response_model=BaseResponse[EligibilityConfigSchema])
async def get_eligibility_config(configuration: ConfigurationServiceDep):
    return BaseResponse.success(await configuration.get_eligibility_config())


@router.patch("/eligibility", response_model=BaseResponse[EligibilityConfigSchema])
async def update_eligibility_config(
    configuration: ConfigurationServiceDep,
    actor: ActorDep,
    changes: dict[str, Any] = Body(...),
):
    return BaseResponse.success(await configuration.update_eligibility_config(changes, actor))


@router.post("/eligibility/reset", response_model=BaseResponse[EligibilityConfigSchema])
async def reset_eligibility_config(configuration: ConfigurationServiceDep, actor: ActorDep):
    return BaseResponse.success(await configuration.reset_eligibility_config(actor))


@router.get("/voting-groups", response_model=BaseResponse[VotingGroupConfigSchema])
async def get_voting_group_config(configuration: ConfigurationServiceDep):
    return BaseResponse.success(await configuration.get_voting_group_config())


@router.patch("/voting-groups", response_model=BaseResponse[VotingGroupConfigSchema])
async def update_voting_group_config(
    configuration: ConfigurationServiceDep,
    actor: ActorDep,
    changes: dict[str, Any] = Body(...),
):
    return BaseResponse.success(await configuration.update_voting_group_config(changes, actor))


@router.post("/voting-groups/reset", response_model=BaseResponse[VotingGroupConfigSchema])
async def reset_voting_group_config(configuration: ConfigurationServiceDep, actor: ActorDep):
    return BaseResponse.success(await configuration.reset_voting_group_config(actor))
