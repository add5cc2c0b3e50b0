"""API routers."""

from autoapply.api.routes.assistant import router as assistant_router
from autoapply.api.routes.tracker import router as tracker_router

__all__ = ["assistant_router", "tracker_router"]
