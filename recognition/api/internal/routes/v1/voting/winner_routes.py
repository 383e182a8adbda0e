# Standard library imports
import random
from uuid import UUID

# Third-party imports
from fastapi import APIRouter, Query

# Local application imports
from recognition.core.exceptions import WinnerNotFound
from recognition.dependancies.common import ActorDep, HistoryServiceDep
from recognition.models.voting.winner_history import WinnerType
from recognition.schemas.common import BaseResponse
from recognition.schemas.voting import (
    ProvisionalWinners,
    Reaction,
    ReactionCreate,
    WinnerHistoryResponse,
    WinnerSelection,
)

router = APIRouter(prefix="/winners", tags=["Winners"])


def _many(rows) -> list[WinnerHistoryResponse]:
    return [WinnerHistoryResponse.model_validate(row) for row in rows]


@router.post("/voting-periods/{voting_period_id}/select", response_model=BaseResponse[WinnerSelection])
async def select_winners(
    voting_period_id: UUID,
    history: HistoryServiceDep,
    actor: ActorDep,
    close_period: bool = False,
):
    """Compute winners, draw the general winner, and record them in history"""
    selection = await history.select_and_record_winners(
        voting_period_id, actor, rng=random.random, close_period=close_period
    )
    return BaseResponse.success(selection)


@router.get("/provisional", response_model=BaseResponse[list[ProvisionalWinners]])
async def get_provisional_winners(history: HistoryServiceDep):
    return BaseResponse.success(await history.get_provisional_winners())


@router.get("/current", response_model=BaseResponse[WinnerHistoryResponse])
async def get_current_winner(history: HistoryServiceDep):
    return BaseResponse.success(WinnerHistoryResponse.model_validate(await history.get_current_winner()))


@router.get("", response_model=BaseResponse[list[WinnerHistoryResponse]])
async def get_winner_history(
    history: HistoryServiceDep,
    year: int | None = Query(None, ge=2000, le=2100),
    month: int | None = Query(None, ge=1, le=12),
    winner_type: WinnerType | None = None,
):
    """All winners, or filtered by year and optionally month"""
    if year is None:
        return BaseResponse.success(_many(await history.get_all()))
    if month is None:
        return BaseResponse.success(_many(await history.get_by_year(year, winner_type)))
    return BaseResponse.success(_many(await history.get_by_year_month(year, month, winner_type)))


@router.get("/yearly", response_model=BaseResponse[list[WinnerHistoryResponse]])
async def get_yearly_winners(history: HistoryServiceDep):
    return BaseResponse.success(_many(await history.get_yearly_winners()))


@router.get("/yearly/{year}", response_model=BaseResponse[WinnerHistoryResponse])
async def get_yearly_winner(year: int, history: HistoryServiceDep):
    winner = await history.get_yearly_winner(year)
    if winner is None:
        raise WinnerNotFound(f"No yearly winner for {year}")
    return BaseResponse.success(WinnerHistoryResponse.model_validate(winner))


@router.get("/voting-periods/{voting_period_id}", response_model=BaseResponse[list[WinnerHistoryResponse]])
async def get_period_winners(voting_period_id: UUID, history: HistoryServiceDep):
    return BaseResponse.success(_many(await history.get_by_period(voting_period_id)))


@router.get("/voting-periods/{voting_period_id}/general", response_model=BaseResponse[WinnerHistoryResponse])
async def get_general_winner(voting_period_id: UUID, history: HistoryServiceDep):
    winner = await history.get_general_winner(voting_period_id)
    return BaseResponse.success(WinnerHistoryResponse.model_validate(winner))


@router.get("/voting-periods/{voting_period_id}/groups", response_model=BaseResponse[list[WinnerHistoryResponse]])
async def get_group_winners(voting_period_id: UUID, history: HistoryServiceDep):
    return BaseResponse.success(_many(await history.get_group_winners(voting_period_id)))


@router.post("/{winner_id}/yearly", response_model=BaseResponse[WinnerHistoryResponse])
async def mark_yearly_winner(winner_id: UUID, history: HistoryServiceDep, actor: ActorDep):  # noqa: ARG001
    return BaseResponse.success(WinnerHistoryResponse.model_validate(await history.mark_yearly_winner(winner_id)))


@router.delete("/{winner_id}/yearly", response_model=BaseResponse[WinnerHistoryResponse])
async def unmark_yearly_winner(winner_id: UUID, history: HistoryServiceDep, actor: ActorDep):  # noqa: ARG001
    return BaseResponse.success(WinnerHistoryResponse.model_validate(await history.unmark_yearly_winner(winner_id)))


@router.get("/{winner_id}/reactions", response_model=BaseResponse[list[Reaction]])
async def get_reactions(winner_id: UUID, history: HistoryServiceDep):
    return BaseResponse.success(await history.get_reactions(winner_id))


@router.post("/{winner_id}/reactions", response_model=BaseResponse[WinnerHistoryResponse])
async def add_reaction(winner_id: UUID, data: ReactionCreate, history: HistoryServiceDep, actor: ActorDep):
    winner = await history.add_reaction(winner_id, actor.user_id, actor.user_name, data.emoji)
    return BaseResponse.success(WinnerHistoryResponse.model_validate(winner))


@router.delete("/{winner_id}/reactions/{emoji}", response_model=BaseResponse[WinnerHistoryResponse])
async def remove_reaction(winner_id: UUID, emoji: str, history: HistoryServiceDep, actor: ActorDep):
    winner = await history.remove_reaction(winner_id, actor.user_id, emoji)
    return BaseResponse.success(WinnerHistoryResponse.model_validate(winner))
