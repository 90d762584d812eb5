"""Platform catalog routes."""

from typing import Optional

from fastapi import APIRouter, HTTPException

from ..schemas import PlatformListResponse, PlatformResponse, ErrorResponse
from ...core.exceptions import InvalidPlatformError
from ...platforms import catalog

router = APIRouter(prefix="/platforms", tags=["platforms"])


@router.get("", response_model=PlatformListResponse)
async def list_platforms(category: Optional[str] = None) -> PlatformListResponse:
    """List platforms, optionally filtered by category."""
    platforms = catalog.by_category(category) if category else list(catalog.platforms)
    return PlatformListResponse(
        platforms=[PlatformResponse(**p.to_dict()) for p in platforms],
        categories=catalog.categories(),
        count=len(platforms)
    )


@router.get(
    "/{platform_id}",
    response_model=PlatformResponse,
    responses={404: {"model": ErrorResponse}}
)
async def get_platform(platform_id: str) -> PlatformResponse:
    """Get a single platform by id."""
    try:
        platform = catalog.require(platform_id)
    except InvalidPlatformError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return PlatformResponse(**platform.to_dict())
