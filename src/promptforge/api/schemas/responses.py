"""API response schemas."""

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field


class AnalysisResponse(BaseModel):
    """Heuristic analysis of a prompt."""
    intent: str
    domain: str
    complexity: int
    missing_components: List[str] = Field(default_factory=list)
    conflicts: List[str] = Field(default_factory=list)
    pain_point: str
    token_count: int
    quality_score: int
    intent_confidence: float = 0.0


class AnalyzeResponse(BaseModel):
    """Response for prompt analysis."""
    success: bool
    analysis: AnalysisResponse
    processing_time_ms: float = 0.0


class PatternMetadataResponse(BaseModel):
    """Parameters a variation was produced with."""
    enhancement_type: str
    tone: str
    few_shot_count: int


class EnhancedPromptResponse(BaseModel):
    """One enhanced variation."""
    id: str
    original: str
    enhanced: str
    platform: str
    quality_score: int
    improvements: List[str] = Field(default_factory=list)
    token_count: int
    improvement: int
    analysis: AnalysisResponse
    pattern_metadata: PatternMetadataResponse
    created_at: str


class EnhanceResponse(BaseModel):
    """Response for prompt enhancement."""
    success: bool
    original_analysis: AnalysisResponse
    enhanced_prompts: List[EnhancedPromptResponse] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class PlatformResponse(BaseModel):
    """A platform from the catalog."""
    id: str
    name: str
    icon: str
    category: str
    api_format: str
    max_tokens: int
    description: str = ""
    special_requirements: List[str] = Field(default_factory=list)
    system_prompt_template: Optional[str] = None
    user_prompt_template: Optional[str] = None


class PlatformListResponse(BaseModel):
    """All platforms plus their categories."""
    platforms: List[PlatformResponse] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    count: int = 0


class TokensResponse(BaseModel):
    """Token count with an optional cost estimate."""
    success: bool
    token_count: int
    platform_id: Optional[str] = None
    cost: Optional[str] = None
    estimated_cost: Optional[float] = None


class CostComparisonResponse(BaseModel):
    """Cost of one platform."""
    platform_id: str
    platform_name: str
    estimated_cost: float
    cost: str
    tokens_used: int
    savings: float = 0.0


class CostReportResponse(BaseModel):
    """Cost comparison across platforms."""
    success: bool
    token_count: int
    comparisons: List[CostComparisonResponse] = Field(default_factory=list)
    cheapest: Optional[str] = None
    total_savings: float = 0.0
    recommendations: List[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Response for health check."""
    status: str
    version: str
    components: Dict[str, str] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Error response."""
    success: bool = False
    error: str
    details: Dict[str, Any] = Field(default_factory=dict)
