# ABOUTME: Database module initialization.
# ABOUTME: Exports core database components for persistence layer.

from literary_daily.db.models import Base, DailyContent
from literary_daily.db.repository import DailyContentRepository, InsertResult
from literary_daily.db.session import get_session, init_db

__all__ = [
    "Base",
    "DailyContent",
    "DailyContentRepository",
    "InsertResult",
    "get_session",
    "init_db",
]
