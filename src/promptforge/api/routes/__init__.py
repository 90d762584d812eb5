"""API routes."""

from .analysis import router as analysis_router
from .enhancement import router as enhancement_router
from .platforms import router as platforms_router
from .tokens import router as tokens_router
from .health import router as health_router

__all__ = [
    "analysis_router",
    "enhancement_router",
    "platforms_router",
    "tokens_router",
    "health_router",
]
