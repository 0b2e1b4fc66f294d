"""API route handlers."""

from .matches import router as matches_router
from .proposals import router as proposals_router
from .requests import router as requests_router
