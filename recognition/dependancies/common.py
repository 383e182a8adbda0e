# Standard library imports
from functools import lru_cache
from typing import Annotated

# Third-party imports
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.core.caching.result_cache import ResultCache, create_result_cache
from recognition.core.db import AsyncSessionLocal, get_async_session
from recognition.schemas.audit.audit_schemas import Actor
from recognition.services.audit.audit_services import DatabaseAuditSink
from recognition.services.configuration.configuration_services import ConfigurationService
from recognition.services.employees.directory_services import DatabaseEmployeeDirectory, EmployeeDirectory
from recognition.services.events import PostCommitHooks, build_post_commit_hooks
from recognition.services.notifications.notification_services import create_notifier
from recognition.services.voting.aggregation_services import ResultsService
from recognition.services.voting.history_services import WinnerHistoryService
from recognition.services.voting.nomination_services import NominationService
from recognition.services.voting.period_services import VotingPeriodService
from recognition.services.voting.validation_services import DevelopmentPolicy, NominationValidator
from recognition.services.voting.voting_group_services import VotingGroupAssigner
from recognition.settings import settings

SessionDep = Annotated[AsyncSession, Depends(get_async_session)]


async def get_actor(
    x_user_id: Annotated[str, Header(min_length=1)],
    x_user_name: Annotated[str, Header(min_length=1)],
    x_user_email: Annotated[str | None, Header()] = None,
) -> Actor:
    """The acting user, as asserted by the upstream gateway."""
    return Actor(user_id=x_user_id, user_name=x_user_name, user_email=x_user_email)


# ---- Process-wide singletons ----
@lru_cache
def get_result_cache() -> ResultCache:
    return create_result_cache()


@lru_cache
def get_voting_group_assigner() -> VotingGroupAssigner:
    return VotingGroupAssigner()


@lru_cache
def get_post_commit_hooks() -> PostCommitHooks:
    return build_post_commit_hooks(
        audit_sink=DatabaseAuditSink(AsyncSessionLocal),
        notifier=create_notifier() if settings.NOTIFICATIONS_ENABLED else None,
        broadcast_address=settings.NOTIFICATION_BROADCAST_ADDRESS,
    )


# ---- Per-request services ----
def get_employee_directory(db: SessionDep) -> EmployeeDirectory:
    return DatabaseEmployeeDirectory(db)


def get_configuration_service(
    db: SessionDep,
    assigner: Annotated[VotingGroupAssigner, Depends(get_voting_group_assigner)],
    hooks: Annotated[PostCommitHooks, Depends(get_post_commit_hooks)],
) -> ConfigurationService:
    return ConfigurationService(db, assigner, hooks)


def get_period_service(
    db: SessionDep,
    cache: Annotated[ResultCache, Depends(get_result_cache)],
    hooks: Annotated[PostCommitHooks, Depends(get_post_commit_hooks)],
) -> VotingPeriodService:
    return VotingPeriodService(db, cache, hooks, recent_limit=settings.RECENT_PERIODS_LIMIT)


def get_results_service(
    db: SessionDep,
    directory: Annotated[EmployeeDirectory, Depends(get_employee_directory)],
    configuration: Annotated[ConfigurationService, Depends(get_configuration_service)],
    cache: Annotated[ResultCache, Depends(get_result_cache)],
) -> ResultsService:
    return ResultsService(db, directory, configuration, cache)


async def get_nomination_validator(
    db: SessionDep,
    directory: Annotated[EmployeeDirectory, Depends(get_employee_directory)],
    configuration: Annotated[ConfigurationService, Depends(get_configuration_service)],
) -> NominationValidator:
    eligibility = None
    if settings.ENFORCE_NOMINEE_ELIGIBILITY:
        eligibility = await configuration.get_eligibility_config()
    return NominationValidator(
        db,
        directory,
        policy=DevelopmentPolicy(skip_nominator_validation=settings.SKIP_NOMINATOR_VALIDATION),
        eligibility=eligibility,
    )


def get_nomination_service(
    db: SessionDep,
    directory: Annotated[EmployeeDirectory, Depends(get_employee_directory)],
    validator: Annotated[NominationValidator, Depends(get_nomination_validator)],
    periods: Annotated[VotingPeriodService, Depends(get_period_service)],
    cache: Annotated[ResultCache, Depends(get_result_cache)],
    hooks: Annotated[PostCommitHooks, Depends(get_post_commit_hooks)],
) -> NominationService:
    return NominationService(db, directory, validator, periods, cache, hooks)


def get_history_service(
    db: SessionDep,
    results: Annotated[ResultsService, Depends(get_results_service)],
    periods: Annotated[VotingPeriodService, Depends(get_period_service)],
    hooks: Annotated[PostCommitHooks, Depends(get_post_commit_hooks)],
) -> WinnerHistoryService:
    return WinnerHistoryService(db, results, periods, hooks)


ActorDep = Annotated[Actor, Depends(get_actor)]
ResultCacheDep = Annotated[ResultCache, Depends(get_result_cache)]
EmployeeDirectoryDep = Annotated[EmployeeDirectory, Depends(get_employee_directory)]
ConfigurationServiceDep = Annotated[ConfigurationService, Depends(get_configuration_service)]
PeriodServiceDep = Annotated[VotingPeriodService, Depends(get_period_service)]
ResultsServiceDep = Annotated[ResultsService, Depends(get_results_service)]
NominationServiceDep = Annotated[NominationService, Depends(get_nomination_service)]
HistoryServiceDep = Annotated[WinnerHistoryService, Depends(get_history_service)]
