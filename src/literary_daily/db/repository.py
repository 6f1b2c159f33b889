# ABOUTME: Repository for date-keyed daily content storage.
# ABOUTME: Read-by-date and insert-if-absent against the daily_content table.

from collections.abc import Sequence
from datetime import date
from enum import Enum

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from literary_daily.db.models import DailyContent
from literary_daily.errors import StoreError
from literary_daily.models import DailyBundle

log = structlog.get_logger()


class InsertResult(str, Enum):
    """Outcome of an insert attempt."""

    CREATED = "created"
    CONFLICT = "conflict"


class DailyContentRepository:
    """Repository for DailyContent rows."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_date(self, day: date) -> DailyBundle | None:
        """Get the stored bundle for a date, if any."""
        try:
            result = await self.session.execute(
                select(DailyContent).where(DailyContent.date == day)
            )
        except SQLAlchemyError as e:
            raise StoreError(f"Database fetch error: {e}") from e

        row = result.scalar_one_or_none()
        return row.to_bundle() if row else None

    async def insert(self, bundle: DailyBundle) -> InsertResult:
        """Insert a bundle unless one already exists for its date.

        A duplicate date is reported as CONFLICT and leaves the stored row
        untouched. Other database failures raise StoreError.
        """
        row = DailyContent.from_bundle(bundle)
        try:
            async with self.session.begin_nested():
                self.session.add(row)
                await self.session.flush()
        except IntegrityError:
            log.info("daily_content_exists", date=bundle.date.isoformat())
            return InsertResult.CONFLICT
        except SQLAlchemyError as e:
            log.error("daily_content_insert_failed", date=bundle.date.isoformat(), error=str(e))
            raise StoreError(f"Database insert error: {e}") from e

        log.info("daily_content_inserted", date=bundle.date.isoformat(), id=row.id)
        return InsertResult.CREATED

    async def list_dates(self, limit: int = 30) -> Sequence[date]:
        """List stored dates, most recent first."""
        try:
            result = await self.session.execute(
                select(DailyContent.date).order_by(DailyContent.date.desc()).limit(limit)
            )
        except SQLAlchemyError as e:
            raise StoreError(f"Database fetch error: {e}") from e
        return result.scalars().all()
