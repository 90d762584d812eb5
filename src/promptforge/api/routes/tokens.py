"""Token counting and cost routes."""

from fastapi import APIRouter

from ..schemas import (
    TokensRequest,
    TokensResponse,
    CompareCostsRequest,
    CostReportResponse,
    CostComparisonResponse,
    ErrorResponse,
)
from ...platforms import catalog
from ...tokenization import count_tokens, estimate_cost, format_cost, compare_costs

router = APIRouter(prefix="/tokens", tags=["tokens"])


@router.post(
    "",
    response_model=TokensResponse,
    responses={400: {"model": ErrorResponse}}
)
async def count_text_tokens(request: TokensRequest) -> TokensResponse:
    """Estimate the token count of a text and, given a platform, its cost."""
    tokens = count_tokens(request.text)
    if request.platform_id is None:
        return TokensResponse(success=True, token_count=tokens)

    platform = catalog.require(request.platform_id)
    cost = estimate_cost(tokens, platform.id)
    return TokensResponse(
        success=True,
        token_count=tokens,
        platform_id=platform.id,
        cost=format_cost(cost),
        estimated_cost=round(cost, 6)
    )


@router.post(
    "/compare",
    response_model=CostReportResponse,
    responses={400: {"model": ErrorResponse}}
)
async def compare_platform_costs(request: CompareCostsRequest) -> CostReportResponse:
    """Compare what a text would cost across platforms, cheapest first."""
    tokens = count_tokens(request.text)
    if request.platform_ids:
        platforms = [catalog.require(pid) for pid in request.platform_ids]
    else:
        platforms = list(catalog.platforms)

    report = compare_costs(tokens, platforms)
    data = report.to_dict()
    return CostReportResponse(
        success=True,
        token_count=tokens,
        comparisons=[CostComparisonResponse(**c) for c in data["comparisons"]],
        cheapest=data["cheapest"],
        total_savings=data["total_savings"],
        recommendations=data["recommendations"]
    )
