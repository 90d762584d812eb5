"""Enhancement API routes."""

import time

from fastapi import APIRouter

from ..schemas import (
    EnhanceRequest,
    EnhanceResponse,
    EnhancedPromptResponse,
    AnalysisResponse,
    ErrorResponse,
)
from ... import PromptForge

router = APIRouter(prefix="/enhance", tags=["enhancement"])


@router.post(
    "",
    response_model=EnhanceResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def enhance_prompt(request: EnhanceRequest) -> EnhanceResponse:
    """
    Generate enhanced variations of a prompt for a platform.

    Variations follow a fixed schedule:
    - **conservative**: the requested tone and few-shot count
    - **balanced**: adds clarifications for missing components
    - **aggressive**: spartan tone, clarifications and extra examples
    """
    start_time = time.time()
    forge = PromptForge()

    report = forge.report(
        request.prompt,
        request.platform_id,
        variation_count=request.variation_count,
        tone=request.tone,
        few_shot_count=request.few_shot_count,
        system_message=request.system_message,
        dataset_content=request.dataset_content,
    )
    best = report.best

    return EnhanceResponse(
        success=True,
        original_analysis=AnalysisResponse(**report.original_analysis.to_dict()),
        enhanced_prompts=[EnhancedPromptResponse(**p.to_dict()) for p in report.enhanced_prompts],
        metadata={
            "platform_id": request.platform_id,
            "variation_count": len(report.enhanced_prompts),
            "best_variation": best.id if best else None,
            "processing_time_ms": (time.time() - start_time) * 1000,
        }
    )
