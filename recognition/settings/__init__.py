# Standard library imports
import os

# Local application imports
from recognition.settings.dev import DevSettings
from recognition.settings.production import ProductionSettings


def get_settings() -> DevSettings | ProductionSettings:
    """
    Return an instance of the appropriate settings class
    based on the ENVIRONMENT environment variable.
    """
    env = os.environ.get("ENVIRONMENT", "dev").lower()
    if env == "production":
        return ProductionSettings()
    return DevSettings()


settings = get_settings()
