"""API route handlers."""

from .match import router as match_router
from .stats import router as stats_router
from .catalog import router as catalog_router
