"""HTTP routers for RateTheDogs."""

from .admin import router as admin_router
from .breeds import router as breeds_router
from .dogs import router as dogs_router
from .images import router as images_router
from .leaderboard import router as leaderboard_router
from .me import router as me_router

__all__ = [
    "admin_router",
    "breeds_router",
    "dogs_router",
    "images_router",
    "leaderboard_router",
    "me_router",
]
