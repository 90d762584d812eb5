"""Health check routes."""

from fastapi import APIRouter

from ..schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Runs a trivial analysis and enhancement to confirm the core works.
    """
    from ... import PromptForge, __version__

    components = {}
    forge = PromptForge()

    components["catalog"] = "healthy" if len(forge.catalog) else "unavailable"

    try:
        forge.analyze("health check")
        components["analysis"] = "healthy"
    except Exception:
        components["analysis"] = "unavailable"

    try:
        forge.enhance("health check", forge.catalog.ids()[0])
        components["enhancement"] = "healthy"
    except Exception:
        components["enhancement"] = "unavailable"

    all_healthy = all(v == "healthy" for v in components.values())
    status = "healthy" if all_healthy else "degraded"

    return HealthResponse(
        status=status,
        version=__version__,
        components=components
    )


@router.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    from ... import __version__

    return {
        "name": "PromptForge API",
        "version": __version__,
        "description": "Prompt analysis and enhancement for AI platforms",
        "docs": "/docs",
        "endpoints": {
            "analyze": "/api/v1/analyze",
            "enhance": "/api/v1/enhance",
            "platforms": "/api/v1/platforms",
            "tokens": "/api/v1/tokens",
            "compare_costs": "/api/v1/tokens/compare",
            "health": "/health"
        }
    }
