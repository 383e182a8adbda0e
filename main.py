# Standard library imports
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

# Third-party imports
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.api import router as api_router
from recognition.api.internal.utils.exceptions import register_exception_handlers
from recognition.api.internal.utils.json_encoder import CustomJSONResponse
from recognition.core.db import AsyncSessionLocal, run_with_new_session
from recognition.core.monitoring.logging import get_logger
from recognition.dependancies.common import get_post_commit_hooks, get_voting_group_assigner
from recognition.services.configuration.configuration_services import ConfigurationService
from recognition.settings import settings

# Set up the main application logger
logger = get_logger("recognition")


def _setup_sentry_fastapi() -> None:
    """Add the FastAPI integration on top of the logging integration, in production only."""
    if settings.ENVIRONMENT != "production" or not settings.SENTRY_DSN:
        return

    logger.info(f"Initializing Sentry in {settings.ENVIRONMENT} environment")
    client = sentry_sdk.get_client()
    integrations = list(client.options.get("integrations", [])) if client.is_active() else []
    if any(isinstance(integration, FastApiIntegration) for integration in integrations):
        return

    if not any(isinstance(integration, LoggingIntegration) for integration in integrations):
        integrations.append(LoggingIntegration())
    integrations.append(FastApiIntegration())
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=integrations,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=1.0,
    )


_setup_sentry_fastapi()


async def load_voting_group_config() -> None:
    """Build the voting group lookup tables from the stored configuration."""

    async def _load(db: AsyncSession) -> None:
        configuration = ConfigurationService(db, get_voting_group_assigner(), get_post_commit_hooks())
        config = await configuration.get_voting_group_config()
        logger.info(f"Voting group strategy: {config.strategy}")

    await run_with_new_session(_load)


# ---- FASTAPI APP CREATION ----
def custom_generate_unique_id(route: APIRoute) -> str:
    # Handle routes without tags
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name or "unnamed_route"


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting up FastAPI application")
        try:
            await load_voting_group_config()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load voting group configuration, using defaults: {e}")

        yield

        logger.info("Shutting down FastAPI application")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Employee recognition: voting periods, nominations, results and winners",
        openapi_url=f"{settings.API_V1_STR}/openapi.json" if settings.ENVIRONMENT != "production" else None,
        docs_url=f"{settings.API_V1_STR}/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url=f"{settings.API_V1_STR}/redoc" if settings.ENVIRONMENT != "production" else None,
        generate_unique_id_function=custom_generate_unique_id,
        default_response_class=CustomJSONResponse,
        lifespan=lifespan,
    )

    if settings.all_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.all_cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        try:
            async with AsyncSessionLocal() as db:
                await db.execute(text("SELECT 1"))
            database = "connected"
        except SQLAlchemyError:
            database = "unavailable"
        return {"status": "healthy", "version": "1.0.0", "database": database}

    app.include_router(api_router)

    return app


# Create the app instance
app = create_app()
