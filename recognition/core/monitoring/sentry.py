# Standard library imports
import logging

# Third-party imports
import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

# Local application imports
from recognition.settings import settings


def _setup_sentry_logging() -> None:
    """
    Sets up the Sentry logging integration when running in production with a DSN.

    WARNING records become breadcrumbs and ERROR records become events.
    """
    if settings.ENVIRONMENT != "production" or not settings.SENTRY_DSN:
        return

    sentry_logging = LoggingIntegration(
        level=logging.WARNING,
        event_level=logging.ERROR,
    )

    if not sentry_sdk.get_client().is_active():
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            integrations=[sentry_logging],
            environment=settings.ENVIRONMENT,
            traces_sample_rate=1.0,
        )


def capture_exception(exc: BaseException) -> None:
    """Report ``exc`` to Sentry if a client is configured; no-op otherwise."""
    if sentry_sdk.get_client().is_active():
        sentry_sdk.capture_exception(exc)


# Call setup once at module import time
_setup_sentry_logging()
