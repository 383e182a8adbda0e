# Local application imports
from recognition.api.internal.routes.v1.configuration.configuration_routes import router as configuration_router

__all__ = ["configuration_router"]
