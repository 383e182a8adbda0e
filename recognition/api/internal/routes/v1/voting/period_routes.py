# Standard library imports
from uuid import UUID

# Third-party imports
from fastapi import APIRouter, Query

# Local application imports
from recognition.core.exceptions import NoActiveVotingPeriod
from recognition.dependancies.common import ActorDep, PeriodServiceDep, ResultsServiceDep
from recognition.schemas.audit import AuditLogResponse
from recognition.schemas.common import BaseResponse
from recognition.schemas.voting import (
    DeleteResult,
    ResetResult,
    VotingPeriodCreate,
    VotingPeriodResponse,
    VotingPeriodResults,
    VotingPeriodUpdate,
)

router = APIRouter(prefix="/voting-periods", tags=["Voting Periods"])


@router.get("", response_model=BaseResponse[list[VotingPeriodResponse]])
async def list_recent_periods(periods: PeriodServiceDep, limit: int | None = Query(None, ge=1, le=120)):
    """Most recent periods, newest first"""
    recent = await periods.get_recent_periods(limit)
    return BaseResponse.success([VotingPeriodResponse.model_validate(period) for period in recent])


@router.get("/current", response_model=BaseResponse[VotingPeriodResponse])
async def get_current_period(periods: PeriodServiceDep):
    period = await periods.get_current_period()
    if period is None:
        raise NoActiveVotingPeriod()
    return BaseResponse.success(VotingPeriodResponse.model_validate(period))


@router.post("", response_model=BaseResponse[VotingPeriodResponse], status_code=201)
async def create_period(data: VotingPeriodCreate, periods: PeriodServiceDep, actor: ActorDep):
    period = await periods.create_period(data, actor)
    return BaseResponse.success(VotingPeriodResponse.model_validate(period))


@router.post("/close-expired", response_model=BaseResponse[list[VotingPeriodResponse]])
async def close_expired_periods(periods: PeriodServiceDep, actor: ActorDep):
    closed = await periods.close_expired_periods(actor=actor)
    return BaseResponse.success([VotingPeriodResponse.model_validate(period) for period in closed])


@router.get("/{voting_period_id}", response_model=BaseResponse[VotingPeriodResponse])
async def get_period(voting_period_id: UUID, periods: PeriodServiceDep):
    period = await periods.get_period(voting_period_id)
    return BaseResponse.success(VotingPeriodResponse.model_validate(period))


@router.patch("/{voting_period_id}", response_model=BaseResponse[VotingPeriodResponse])
async def update_period(voting_period_id: UUID, data: VotingPeriodUpdate, periods: PeriodServiceDep, actor: ActorDep):
    period = await periods.update_period(voting_period_id, data, actor)
    return BaseResponse.success(VotingPeriodResponse.model_validate(period))


@router.post("/{voting_period_id}/close", response_model=BaseResponse[VotingPeriodResponse])
async def close_period(voting_period_id: UUID, periods: PeriodServiceDep, actor: ActorDep):
    period = await periods.close_period(voting_period_id, actor)
    return BaseResponse.success(VotingPeriodResponse.model_validate(period))


@router.post("/{voting_period_id}/reset", response_model=BaseResponse[ResetResult])
async def reset_period(voting_period_id: UUID, periods: PeriodServiceDep, actor: ActorDep):
    """Delete all nominations and winners of the period; reports failure in the body"""
    return BaseResponse.success(await periods.reset_period(voting_period_id, actor))


@router.delete("/{voting_period_id}", response_model=BaseResponse[DeleteResult])
async def delete_period(voting_period_id: UUID, periods: PeriodServiceDep, actor: ActorDep):
    return BaseResponse.success(await periods.delete_period(voting_period_id, actor))


@router.get("/{voting_period_id}/audit", response_model=BaseResponse[list[AuditLogResponse]])
async def get_period_audit_history(voting_period_id: UUID, periods: PeriodServiceDep):
    logs = await periods.get_period_audit_history(voting_period_id)
    return BaseResponse.success([AuditLogResponse.model_validate(log) for log in logs])


@router.get("/{voting_period_id}/results", response_model=BaseResponse[VotingPeriodResults])
async def get_results(voting_period_id: UUID, results: ResultsServiceDep, refresh: bool = False):
    """Ranked results per voting group; ``refresh`` bypasses the cache"""
    return BaseResponse.success(await results.compute_results(voting_period_id, use_cache=not refresh))
