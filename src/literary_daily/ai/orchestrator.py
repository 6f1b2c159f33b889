# ABOUTME: Concurrent generation of the full daily bundle.
# ABOUTME: Fans out the three prompt kinds and attaches a placeholder for yesterday.

import asyncio
from datetime import UTC, date, datetime, timedelta

import structlog

from literary_daily.ai.service import GenerationClient
from literary_daily.config import AIConfig, Settings
from literary_daily.models import (
    ContentItem,
    DailyBundle,
    DailyPair,
    PromptKind,
    ReviewContent,
)

log = structlog.get_logger()


def utc_today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(UTC).date()


def placeholder_yesterday(today: date) -> DailyBundle:
    """Synthetic bundle returned alongside freshly generated content."""
    return DailyBundle(
        date=today - timedelta(days=1),
        review=ReviewContent(title="昨日文学评论", content="昨日评论内容"),
        concept=ContentItem(title="昨日文学概念", content="昨日概念内容"),
        question=ContentItem(title="昨日考研题目", content="昨日题目内容"),
    )


def pending_bundle(day: date) -> DailyBundle:
    """Bundle shown when no content has been stored for a day yet."""
    title, content = "昨日内容待生成", "请等待AI生成昨日内容"
    return DailyBundle(
        date=day,
        review=ReviewContent(title=title, content=content),
        concept=ContentItem(title=title, content=content),
        question=ContentItem(title=title, content=content),
    )


async def generate_daily_content(
    config: AIConfig,
    settings: Settings | None = None,
    client: GenerationClient | None = None,
) -> DailyPair:
    """Generate today's review, concept and question concurrently.

    All three generations must succeed. The first terminal failure cancels
    the remaining tasks and is re-raised as-is; no partial bundle is built.

    Args:
        config: API credential and model id.
        settings: Optional settings override for the generation client.
        client: Optional pre-built client (shares config and transport).

    Returns:
        DailyPair with today's bundle dated to the current UTC date and a
        placeholder yesterday bundle.
    """
    client = client or GenerationClient(config, settings)
    log.info("generating_daily_content", model=config.model_id)

    try:
        async with asyncio.TaskGroup() as tg:
            review_task = tg.create_task(client.generate(PromptKind.REVIEW))
            concept_task = tg.create_task(client.generate(PromptKind.CONCEPT))
            question_task = tg.create_task(client.generate(PromptKind.QUESTION))
    except ExceptionGroup as eg:
        error = eg.exceptions[0]
        log.error(
            "daily_content_generation_failed",
            error_type=type(error).__name__,
            error=str(error),
        )
        raise error

    today = utc_today()
    bundle = DailyBundle(
        date=today,
        review=review_task.result(),
        concept=concept_task.result(),
        question=question_task.result(),
    )
    log.info("daily_content_generated", date=today.isoformat())

    return DailyPair(today=bundle, yesterday=placeholder_yesterday(today))
