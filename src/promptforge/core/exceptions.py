"""Custom exceptions for the prompt analysis and enhancement engine."""

from typing import Optional, Dict, Any, List


class PromptForgeError(Exception):
    """Base exception for all promptforge errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidInputError(PromptForgeError):
    """Prompt is missing or is not a string."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, details, cause)
        self.field_name = field_name
        if field_name:
            self.details["field"] = field_name


class InvalidPlatformError(PromptForgeError):
    """Unknown platform id."""

    def __init__(
        self,
        message: str,
        platform_id: Optional[str] = None,
        available: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, details, cause)
        self.platform_id = platform_id
        self.available = available or []
        if platform_id is not None:
            self.details["platform_id"] = platform_id
        if available:
            self.details["available"] = available


class BudgetExceededError(PromptForgeError):
    """
    Rendered prompt is above the platform token budget.

    Raised by the strict budget check inside the enhancer and always
    recovered there by trimming sections.
    """

    def __init__(
        self,
        message: str,
        token_count: Optional[int] = None,
        token_limit: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, details, cause)
        self.token_count = token_count
        self.token_limit = token_limit
        if token_count:
            self.details["token_count"] = token_count
        if token_limit:
            self.details["token_limit"] = token_limit


class EnhancementError(PromptForgeError):
    """Unexpected failure while building an enhanced prompt."""

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, details, cause)
        self.stage = stage
        if stage:
            self.details["stage"] = stage


class ConfigurationError(PromptForgeError):
    """Error in configuration or static catalog data."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, details, cause)
        self.config_key = config_key
        if config_key:
            self.details["config_key"] = config_key
