# ABOUTME: Main package for the Literary Daily content service.
# ABOUTME: Exports core models and configuration for daily content generation.

__version__ = "0.1.0"

from literary_daily.config import get_settings  # noqa: E402
from literary_daily.models import (  # noqa: E402
    ContentItem,
    DailyBundle,
    DailyPair,
    PromptKind,
    ReviewContent,
)

__all__ = [
    "__version__",
    "get_settings",
    "ContentItem",
    "DailyBundle",
    "DailyPair",
    "PromptKind",
    "ReviewContent",
]
