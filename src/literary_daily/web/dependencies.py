# ABOUTME: FastAPI dependency injection for database sessions and services.
# ABOUTME: Provides reusable dependencies for route handlers.

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from literary_daily.db.repository import DailyContentRepository
from literary_daily.db.session import get_db_session
from literary_daily.services.daily_content_service import DailyContentService

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_daily_content_repository(
    session: DbSession,
) -> AsyncGenerator[DailyContentRepository]:
    """Get daily content repository with session."""
    yield DailyContentRepository(session)


DailyContentRepo = Annotated[DailyContentRepository, Depends(get_daily_content_repository)]


def get_daily_content_service(repository: DailyContentRepo) -> DailyContentService:
    """Get daily content service bound to the request's repository."""
    return DailyContentService(repository)


DailyContentSvc = Annotated[DailyContentService, Depends(get_daily_content_service)]
