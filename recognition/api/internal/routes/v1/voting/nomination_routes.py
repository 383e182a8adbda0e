# Standard library imports
import random
from uuid import UUID

# Third-party imports
from fastapi import APIRouter, Body, HTTPException, Query, status

# Local application imports
from recognition.dependancies.common import (
    ActorDep,
    EmployeeDirectoryDep,
    NominationServiceDep,
    PeriodServiceDep,
    ResultCacheDep,
    SessionDep,
)
from recognition.schemas.common import BaseResponse
from recognition.schemas.voting import (
    NominationBody,
    NominationCreate,
    NominationResponse,
    NominationUpdate,
    NominationWithEmployee,
)
from recognition.services.voting.testing_services import GenerationResult, generate_test_nominations
from recognition.settings import settings

router = APIRouter(prefix="/nominations", tags=["Nominations"])

PAGINATION = settings.PAGINATION_CONFIGS["medium"]


@router.post("", response_model=BaseResponse[NominationResponse], status_code=201)
async def create_nomination(data: NominationBody, nominations: NominationServiceDep, actor: ActorDep):
    """Nominate a colleague in the current voting period"""
    nomination = await nominations.create_nomination(
        NominationCreate(
            nominated_employee_id=data.nominated_employee_id,
            nominator_user_id=actor.user_id,
            nominator_user_name=actor.user_name,
            nominator_email=actor.user_email or "",
            reason=data.reason,
            criteria=data.criteria,
        )
    )
    return BaseResponse.success(NominationResponse.model_validate(nomination))


@router.get("", response_model=BaseResponse[list[NominationWithEmployee]])
async def list_current_nominations(
    nominations: NominationServiceDep,
    limit: int = Query(PAGINATION["default_limit"], ge=PAGINATION["min_limit"], le=PAGINATION["max_limit"]),
    offset: int = Query(PAGINATION["default_offset"], ge=0),
):
    items, meta = await nominations.list_current_nominations(limit, offset)
    return BaseResponse.success(items, meta=meta)


@router.get("/mine", response_model=BaseResponse[NominationResponse | None])
async def get_my_nomination(nominations: NominationServiceDep, actor: ActorDep):
    nomination = await nominations.get_my_nomination(actor.user_id)
    return BaseResponse.success(NominationResponse.model_validate(nomination) if nomination else None)


@router.get("/employee/{employee_id}", response_model=BaseResponse[list[NominationWithEmployee]])
async def get_employee_nominations(
    employee_id: UUID,
    nominations: NominationServiceDep,
    voting_period_id: UUID | None = None,
):
    return BaseResponse.success(await nominations.get_employee_nominations(employee_id, voting_period_id))


@router.post("/test-data", response_model=BaseResponse[GenerationResult])
async def create_test_nominations(
    db: SessionDep,
    periods: PeriodServiceDep,
    directory: EmployeeDirectoryDep,
    cache: ResultCacheDep,
    count: int = Body(10, embed=True, ge=1, le=1000),
):
    """Generate random nominations in the current period (not available in production)"""
    if settings.ENVIRONMENT == "production":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Test data generation is disabled")
    result = await generate_test_nominations(db, directory, periods, cache, count, random.random)
    return BaseResponse.success(result)


@router.get("/{nomination_id}", response_model=BaseResponse[NominationResponse])
async def get_nomination(nomination_id: UUID, nominations: NominationServiceDep):
    return BaseResponse.success(NominationResponse.model_validate(await nominations.get_nomination(nomination_id)))


@router.patch("/{nomination_id}", response_model=BaseResponse[NominationResponse])
async def update_nomination(nomination_id: UUID, data: NominationUpdate, nominations: NominationServiceDep):
    nomination = await nominations.update_nomination(nomination_id, data)
    return BaseResponse.success(NominationResponse.model_validate(nomination))


@router.delete("/{nomination_id}", status_code=204)
async def delete_nomination(nomination_id: UUID, nominations: NominationServiceDep):
    await nominations.delete_nomination(nomination_id)
