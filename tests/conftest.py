# tests/conftest.py
# Standard library imports
from collections.abc import AsyncIterator, Awaitable, Callable
from datetime import UTC, datetime, timedelta
from itertools import count
import os
from pathlib import Path
from typing import Any
from uuid import UUID

os.environ.setdefault("ENVIRONMENT", "dev")
os.environ.setdefault("RESULTS_CACHE_BACKEND", "memory")

# Third-party imports
import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

# Local application imports
from recognition.core.caching.result_cache import MemoryResultCache
from recognition.models import Base, Employee, Nomination, VotingPeriod, VotingPeriodStatus
from recognition.schemas.voting import NominationCreate, VotingPeriodCreate
from recognition.services.configuration.configuration_services import ConfigurationService
from recognition.services.employees.directory_services import DatabaseEmployeeDirectory
from recognition.services.events import PostCommitHooks, build_post_commit_hooks
from recognition.services.notifications.notification_services import LoggingNotifier
from recognition.services.voting.aggregation_services import ResultsService
from recognition.services.voting.history_services import WinnerHistoryService
from recognition.services.voting.nomination_services import NominationService
from recognition.services.voting.period_services import VotingPeriodService
from recognition.services.voting.validation_services import DevelopmentPolicy, NominationValidator
from recognition.services.voting.voting_group_services import VotingGroupAssigner
from tests.factories import ADMIN, BROADCAST_ADDRESS, FakeClock, RecordingAuditSink, scores

_EMPLOYEE_COUNTER = count(1)


# ---- Database ----
@pytest.fixture()
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'recognition.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture()
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


# ---- Collaborators ----
@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(clock: FakeClock) -> MemoryResultCache:
    return MemoryResultCache(ttl_seconds=300, clock=clock)


@pytest.fixture()
def audit_sink() -> RecordingAuditSink:
    return RecordingAuditSink()


@pytest.fixture()
def notifier() -> LoggingNotifier:
    return LoggingNotifier()


@pytest.fixture()
def hooks(audit_sink: RecordingAuditSink, notifier: LoggingNotifier) -> PostCommitHooks:
    return build_post_commit_hooks(audit_sink=audit_sink, notifier=notifier, broadcast_address=BROADCAST_ADDRESS)


@pytest.fixture()
def assigner() -> VotingGroupAssigner:
    return VotingGroupAssigner()


@pytest.fixture()
def directory(db: AsyncSession) -> DatabaseEmployeeDirectory:
    return DatabaseEmployeeDirectory(db)


@pytest.fixture()
def configuration(db: AsyncSession, assigner: VotingGroupAssigner, hooks: PostCommitHooks) -> ConfigurationService:
    return ConfigurationService(db, assigner, hooks)


@pytest.fixture()
def periods(db: AsyncSession, cache: MemoryResultCache, hooks: PostCommitHooks) -> VotingPeriodService:
    return VotingPeriodService(db, cache, hooks)


@pytest.fixture()
def results(
    db: AsyncSession,
    directory: DatabaseEmployeeDirectory,
    configuration: ConfigurationService,
    cache: MemoryResultCache,
) -> ResultsService:
    return ResultsService(db, directory, configuration, cache)


@pytest.fixture()
def validator(db: AsyncSession, directory: DatabaseEmployeeDirectory) -> NominationValidator:
    return NominationValidator(db, directory, policy=DevelopmentPolicy())


@pytest.fixture()
def nominations(
    db: AsyncSession,
    directory: DatabaseEmployeeDirectory,
    validator: NominationValidator,
    periods: VotingPeriodService,
    cache: MemoryResultCache,
    hooks: PostCommitHooks,
) -> NominationService:
    return NominationService(db, directory, validator, periods, cache, hooks)


@pytest.fixture()
def history(
    db: AsyncSession,
    results: ResultsService,
    periods: VotingPeriodService,
    hooks: PostCommitHooks,
) -> WinnerHistoryService:
    return WinnerHistoryService(db, results, periods, hooks)


# ---- Factories ----
@pytest.fixture()
def make_employee(db: AsyncSession) -> Callable[..., Awaitable[Employee]]:
    async def _make(**fields: Any) -> Employee:
        n = next(_EMPLOYEE_COUNTER)
        defaults: dict[str, Any] = {
            "email": f"employee{n}@example.com",
            "full_name": f"Employee {n}",
            "department": "Engineering",
            "position": "Developer",
            "job_title": "Developer",
            "location": "Tijuana",
            "hire_date": datetime.now(UTC) - timedelta(days=800),
            "is_active": True,
        }
        employee = Employee(**{**defaults, **fields})
        db.add(employee)
        await db.commit()
        return employee

    return _make


@pytest.fixture()
def make_period(periods: VotingPeriodService) -> Callable[..., Awaitable[VotingPeriod]]:
    async def _make(
        year: int = 2025,
        month: int = 3,
        status: VotingPeriodStatus = VotingPeriodStatus.ACTIVE,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> VotingPeriod:
        start = start_date or datetime(year, month, 1, tzinfo=UTC)
        return await periods.create_period(
            VotingPeriodCreate(
                year=year,
                month=month,
                start_date=start,
                end_date=end_date or start + timedelta(days=27),
                status=status,
            ),
            ADMIN,
        )

    return _make


@pytest.fixture()
def nominate(nominations: NominationService) -> Callable[..., Awaitable[Nomination]]:
    async def _nominate(nominee: Employee, nominator: Employee, **fields: Any) -> Nomination:
        data = {
            "nominated_employee_id": nominee.id,
            "nominator_user_id": str(nominator.id),
            "nominator_user_name": nominator.display_name,
            "nominator_email": nominator.email,
            "reason": "Consistently helps the whole team ship on time",
            "criteria": scores(),
            **fields,
        }
        return await nominations.create_nomination(NominationCreate(**data))

    return _nominate


@pytest.fixture()
def add_nomination(db: AsyncSession) -> Callable[..., Awaitable[Nomination]]:
    """Insert a nomination directly, bypassing validation."""
    counter = count(1)

    async def _add(period: VotingPeriod, nominee_id: UUID, criteria: dict[str, Any] | None = None) -> Nomination:
        n = next(counter)
        nomination = Nomination(
            nominated_employee_id=nominee_id,
            nominator_user_id=f"nominator-{n}",
            nominator_user_name=f"Nominator {n}",
            nominator_email=f"nominator{n}@example.com",
            reason="Always willing to lend a hand",
            criteria=criteria or scores(),
            voting_period_id=period.id,
        )
        db.add(nomination)
        await db.commit()
        return nomination

    return _add

