"""Configuration management using Pydantic settings."""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List
from functools import lru_cache


class TokenizerSettings(BaseSettings):
    """Token estimation and pricing configuration."""

    chars_per_token: float = Field(4.0, gt=0, alias="PF_CHARS_PER_TOKEN")
    default_tokenizer: str = Field("heuristic", alias="PF_DEFAULT_TOKENIZER")
    # USD per million tokens for ids missing from the price table
    default_price_per_million: float = Field(2.0, ge=0, alias="PF_DEFAULT_PRICE_PER_MILLION")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class AnalysisSettings(BaseSettings):
    """Quality scoring weights and analysis thresholds."""

    base_score: int = Field(60, alias="PF_BASE_SCORE")
    critical_penalty: int = Field(8, alias="PF_CRITICAL_PENALTY")
    optional_penalty: int = Field(4, alias="PF_OPTIONAL_PENALTY")
    conflict_penalty: int = Field(10, alias="PF_CONFLICT_PENALTY")
    complexity_match_bonus: int = Field(10, alias="PF_COMPLEXITY_MATCH_BONUS")
    action_verb_bonus: int = Field(5, alias="PF_ACTION_VERB_BONUS")
    length_bonus: int = Field(10, alias="PF_LENGTH_BONUS")
    short_prompt_penalty: int = Field(15, alias="PF_SHORT_PROMPT_PENALTY")
    formatting_bonus: int = Field(5, alias="PF_FORMATTING_BONUS")
    structure_bonus: int = Field(5, alias="PF_STRUCTURE_BONUS")

    # "examples" is only reported missing above this complexity
    examples_complexity_threshold: int = Field(6, ge=1, le=10, alias="PF_EXAMPLES_COMPLEXITY_THRESHOLD")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class EnhancementSettings(BaseSettings):
    """Enhancement and variation defaults."""

    default_tone: str = Field("professional", alias="PF_DEFAULT_TONE")
    default_few_shot_count: int = Field(0, ge=0, alias="PF_DEFAULT_FEW_SHOT_COUNT")
    max_few_shot_count: int = Field(10, ge=0, alias="PF_MAX_FEW_SHOT_COUNT")
    default_variation_count: int = Field(2, ge=1, alias="PF_DEFAULT_VARIATION_COUNT")
    max_variation_count: int = Field(5, ge=1, alias="PF_MAX_VARIATION_COUNT")
    # Share of the platform budget dataset content may take
    dataset_budget_fraction: float = Field(0.4, gt=0, le=1, alias="PF_DATASET_BUDGET_FRACTION")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class APISettings(BaseSettings):
    """API server configuration."""

    host: str = Field("0.0.0.0", alias="PF_API_HOST")
    port: int = Field(8000, alias="PF_API_PORT")
    debug: bool = Field(False, alias="PF_DEBUG")
    cors_origins: List[str] = Field(["*"], alias="PF_CORS_ORIGINS")
    max_prompt_chars: int = Field(20000, gt=0, alias="PF_MAX_PROMPT_CHARS")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", alias="PF_LOG_LEVEL")
    format: str = Field("json", alias="PF_LOG_FORMAT")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class Settings(BaseSettings):
    """Root configuration aggregating all settings."""

    tokenizer: TokenizerSettings = Field(default_factory=TokenizerSettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)
    enhancement: EnhancementSettings = Field(default_factory=EnhancementSettings)
    api: APISettings = Field(default_factory=APISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {
        "env_file": ".env",
        "env_nested_delimiter": "__",
        "extra": "ignore"
    }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reload_settings() -> Settings:
    """Reload settings (clears cache)."""
    get_settings.cache_clear()
    return get_settings()
