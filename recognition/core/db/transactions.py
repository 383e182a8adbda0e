# Third-party imports
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.core.exceptions import ConflictError, DependencyError
from recognition.core.monitoring.logging import get_logger

logger = get_logger(__name__)


async def commit_or_raise(db: AsyncSession, conflict: ConflictError | None = None) -> None:
    """
    Commit the session, translating store failures into domain errors.

    A uniqueness violation becomes ``conflict`` (or a generic ConflictError);
    any other SQLAlchemy failure becomes a DependencyError. The session is
    rolled back in both cases.
    """
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Integrity error on commit: {e.orig}")
        raise (conflict or ConflictError()) from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Database error on commit: {str(e)}", exc_info=True)
        raise DependencyError("The database is unavailable") from e
