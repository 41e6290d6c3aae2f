from .analysis import ScreenshotAnalyzer, analyze_screenshot
from .models import (
    ActivityType,
    Fallback,
    ModelDerived,
    ScreenshotAnalysis,
    TimeAllocation,
    WorkReport,
    validate_activity_type,
)
from .openai_client import ConfigurationError, OpenAIChatClient, ProviderError
from .reporting import WorkReporter, generate_report

__all__ = [
    "ActivityType",
    "ConfigurationError",
    "Fallback",
    "ModelDerived",
    "OpenAIChatClient",
    "ProviderError",
    "ScreenshotAnalysis",
    "ScreenshotAnalyzer",
    "TimeAllocation",
    "WorkReport",
    "WorkReporter",
    "analyze_screenshot",
    "generate_report",
    "validate_activity_type",
]
