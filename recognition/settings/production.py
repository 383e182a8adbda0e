# Local application imports
from recognition.settings.common import CommonSettings


class ProductionSettings(CommonSettings):
    DEBUG_MODE: bool = False
    SENTRY_DSN: str | None = None
    # Production builds its URI from the POSTGRES_* settings unless DATABASE_URL is given
    DATABASE_URL: str | None = None
    SKIP_NOMINATOR_VALIDATION: bool = False
