"""API schemas."""

from .requests import (
    AnalyzeRequest,
    EnhanceRequest,
    TokensRequest,
    CompareCostsRequest,
)
from .responses import (
    AnalysisResponse,
    AnalyzeResponse,
    PatternMetadataResponse,
    EnhancedPromptResponse,
    EnhanceResponse,
    PlatformResponse,
    PlatformListResponse,
    TokensResponse,
    CostComparisonResponse,
    CostReportResponse,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    # Requests
    "AnalyzeRequest",
    "EnhanceRequest",
    "TokensRequest",
    "CompareCostsRequest",
    # Responses
    "AnalysisResponse",
    "AnalyzeResponse",
    "PatternMetadataResponse",
    "EnhancedPromptResponse",
    "EnhanceResponse",
    "PlatformResponse",
    "PlatformListResponse",
    "TokensResponse",
    "CostComparisonResponse",
    "CostReportResponse",
    "HealthResponse",
    "ErrorResponse",
]
