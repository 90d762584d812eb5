"""Analysis API routes."""

import time

from fastapi import APIRouter

from ..schemas import AnalyzeRequest, AnalyzeResponse, AnalysisResponse, ErrorResponse
from ... import PromptForge

router = APIRouter(prefix="/analyze", tags=["analysis"])


@router.post(
    "",
    response_model=AnalyzeResponse,
    responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def analyze_prompt(request: AnalyzeRequest) -> AnalyzeResponse:
    """
    Analyze a prompt without modifying it.

    Returns intent, domain, complexity (1-10), missing components,
    conflicting directives, the main pain point, token count and a
    quality score (0-100).
    """
    start_time = time.time()
    analysis = PromptForge().analyze(request.prompt)

    return AnalyzeResponse(
        success=True,
        analysis=AnalysisResponse(**analysis.to_dict()),
        processing_time_ms=(time.time() - start_time) * 1000
    )
