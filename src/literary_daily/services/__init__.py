# ABOUTME: Services module for business logic.
# ABOUTME: Exports the daily content service.

from literary_daily.services.daily_content_service import DailyContentService

__all__ = ["DailyContentService"]
