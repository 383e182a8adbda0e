# Third-party imports
from fastapi import APIRouter

# Local application imports
from recognition.api.internal.routes.v1.configuration import configuration_router
from recognition.api.internal.routes.v1.voting import nomination_router, period_router, winner_router

router = APIRouter(prefix="/v1")

# Include all internal v1 routers
router.include_router(period_router)
router.include_router(nomination_router)
router.include_router(winner_router)
router.include_router(configuration_router)
