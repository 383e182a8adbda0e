# Local application imports
from recognition.api.internal.routes.v1.voting.nomination_routes import router as nomination_router
from recognition.api.internal.routes.v1.voting.period_routes import router as period_router
from recognition.api.internal.routes.v1.voting.winner_routes import router as winner_router

__all__ = ["nomination_router", "period_router", "winner_router"]
