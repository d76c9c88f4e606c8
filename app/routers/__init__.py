"""init file for routers module."""
from app.routers.auth import router as auth_router
from app.routers.restaurants import router as restaurants_router
from app.routers.submissions import router as submissions_router

__all__ = ["auth_router", "restaurants_router", "submissions_router"]
