# ABOUTME: Fetch-or-generate composition of the store and the AI orchestrator.
# ABOUTME: Serves today's bundle (generating it once per date) plus yesterday's.

from collections.abc import Awaitable, Callable
from datetime import date, timedelta

import structlog

from literary_daily.ai.orchestrator import generate_daily_content, pending_bundle, utc_today
from literary_daily.config import AIConfig, Settings, get_settings, require_ai_config
from literary_daily.db.repository import DailyContentRepository, InsertResult
from literary_daily.errors import StoreError
from literary_daily.models import DailyBundle, DailyPair, EnsureResult

log = structlog.get_logger()

ContentGenerator = Callable[[AIConfig, Settings], Awaitable[DailyPair]]


class DailyContentService:
    """Service combining daily content storage with on-demand generation."""

    def __init__(
        self,
        repository: DailyContentRepository,
        settings: Settings | None = None,
        generate: ContentGenerator = generate_daily_content,
    ) -> None:
        self.repository = repository
        self.settings = settings or get_settings()
        self._generate = generate

    async def get_daily_pair(self, today: date | None = None) -> DailyPair:
        """Return today's bundle and yesterday's, generating today's if missing.

        Yesterday falls back to a "pending" placeholder when nothing is stored.
        """
        today = today or utc_today()
        log.info("fetching_daily_content", date=today.isoformat())

        current = await self.repository.get_by_date(today)
        if current is None:
            current, _ = await self._generate_and_store(today)

        yesterday_date = today - timedelta(days=1)
        previous = await self.repository.get_by_date(yesterday_date)
        if previous is None:
            log.info("yesterday_content_missing", date=yesterday_date.isoformat())
            previous = pending_bundle(yesterday_date)

        return DailyPair(today=current, yesterday=previous)

    async def ensure_today(self, today: date | None = None) -> EnsureResult:
        """Generate and store today's bundle unless it already exists."""
        today = today or utc_today()

        existing = await self.repository.get_by_date(today)
        if existing is not None:
            log.info("generation_skipped", date=today.isoformat(), reason="already_exists")
            return EnsureResult(date=today, created=False, bundle=existing)

        bundle, created = await self._generate_and_store(today)
        return EnsureResult(date=today, created=created, bundle=bundle)

    async def _generate_and_store(self, today: date) -> tuple[DailyBundle, bool]:
        """Generate content for a date and insert it.

        Returns:
            The bundle now associated with the date and whether this call
            created it. When another writer won the race, the stored bundle
            is returned instead of the one just generated.
        """
        config = require_ai_config(self.settings)
        log.info("generating_missing_content", date=today.isoformat())

        pair = await self._generate(config, self.settings)
        bundle = pair.today
        if bundle.date != today:
            bundle = bundle.model_copy(update={"date": today})

        result = await self.repository.insert(bundle)
        if result is InsertResult.CREATED:
            return bundle, True

        stored = await self.repository.get_by_date(today)
        if stored is None:
            raise StoreError(f"Insert for {today.isoformat()} conflicted but no row was found")
        return stored, False
