"""API route handlers."""

from .rankings import router as rankings_router
from .swipes import router as swipes_router
from .matches import router as matches_router
from .admin import router as admin_router
