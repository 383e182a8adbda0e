# Standard library imports
from pathlib import Path
from typing import Annotated, Any, Literal

# Third-party imports
from pydantic import AnyUrl, BeforeValidator, computed_field
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR: Path = Path(__file__).resolve().parent.parent


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",")]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class CommonSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # General settings
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["dev", "staging", "production"] = "dev"
    UNDER_DEVELOPMENT: bool = False  # Set to True for skipping emails
    DEBUG_MODE: bool = False
    PROJECT_NAME: str = "Employee Recognition"

    # Database settings
    DATABASE_URL: str | None = "sqlite+aiosqlite:///./recognition.db"
    SQL_ECHO: bool = False
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "recognition"

    @property
    def SQLALCHEMY_ASYNC_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return str(
            MultiHostUrl.build(
                scheme="postgresql+asyncpg",  # async driver for async queries
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD,
                host=self.POSTGRES_SERVER,
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,
            )
        )

    # CORS settings
    BACKEND_CORS_ORIGINS: Annotated[list[AnyUrl] | str, BeforeValidator(parse_cors)] = [
        AnyUrl("http://localhost/"),
        AnyUrl("http://localhost:3000/"),
        AnyUrl("http://localhost:8000/"),
    ]

    @computed_field  # type: ignore[prop-decorator, misc]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    # Optional settings
    SENTRY_DSN: str | None = None

    # Nomination validation
    SKIP_NOMINATOR_VALIDATION: bool = False  # Development only: accept nominators missing from the directory
    ENFORCE_NOMINEE_ELIGIBILITY: bool = False

    # Results cache settings
    RESULTS_CACHE_BACKEND: Literal["memory", "redis"] = "memory"
    RESULTS_CACHE_TTL_SECONDS: int = 5 * 60  # 5 minutes

    # Redis settings
    REDIS_URL: str = "redis://localhost:6379/0"

    # Voting periods
    RECENT_PERIODS_LIMIT: int = 12

    # Notification settings
    NOTIFICATIONS_ENABLED: bool = True
    NOTIFICATION_BROADCAST_ADDRESS: str = "all@company.com"

    # Mailgun settings
    MAILGUN_API_KEY: str | None = None
    MAILGUN_DOMAIN: str | None = None

    # Pagination configurations
    PAGINATION_CONFIGS: dict[str, dict[str, int]] = {
        "small": {
            "default_limit": 10,
            "max_limit": 100,
            "min_limit": 1,
            "default_offset": 0,
        },
        "medium": {
            "default_limit": 50,
            "max_limit": 500,
            "min_limit": 1,
            "default_offset": 0,
        },
    }
