# ABOUTME: Pytest fixtures and configuration for Literary Daily tests.
# ABOUTME: Provides mock settings, sample bundles, and a fake completion endpoint.

import json
from collections.abc import Callable
from datetime import date

import httpx
import pytest
import structlog
from pydantic import SecretStr

from literary_daily.ai.prompts import PROMPTS
from literary_daily.config import AIConfig, Settings
from literary_daily.models import (
    ContentItem,
    DailyBundle,
    DailyPair,
    PromptKind,
    ReviewContent,
)

REVIEW_JSON = {
    "review_title": "《红楼梦》中的悲剧意识",
    "review_content": "曹雪芹以家族兴衰写尽人生无常。",
    "review_author": "林清远",
    "review_tag": "#经典 #文学评论",
    "review_source": "摘自《读书杂志》2023年第5期",
}
CONCEPT_JSON = {"title": "陌生化", "content": "什克洛夫斯基提出的艺术手法。"}
QUESTION_JSON = {"title": "论鲁迅小说的启蒙主题", "content": "结合《呐喊》分析启蒙与绝望的张力。"}


def completion(text: str, status_code: int = 200) -> httpx.Response:
    """Build a chat-completion response carrying the given model text."""
    return httpx.Response(
        status_code,
        json={"choices": [{"index": 0, "message": {"role": "assistant", "content": text}}]},
    )


def fenced(payload: dict) -> str:
    return "好的，以下是结果：\n```json\n" + json.dumps(payload, ensure_ascii=False) + "\n```\n希望对你有帮助。"


def kind_of(request: httpx.Request) -> PromptKind:
    """Identify which prompt a captured request carries."""
    prompt = json.loads(request.content)["messages"][0]["content"]
    return next(kind for kind, text in PROMPTS.items() if text == prompt)


@pytest.fixture(autouse=True)
def captured_logs():
    """Capture structlog events instead of printing them to stdout."""
    with structlog.testing.capture_logs() as logs:
        yield logs


@pytest.fixture
def mock_settings() -> Settings:
    """Create mock settings for testing."""
    return Settings(
        _env_file=None,
        siliconflow_api_key=SecretStr("test-api-key"),
        siliconflow_model_id="test-model",
        ai_endpoint="https://llm.example.com/v1/chat/completions",
        ai_timeout_seconds=5,
        ai_max_attempts=2,
        ai_retry_wait_seconds=0,
        log_level="DEBUG",
    )


@pytest.fixture
def ai_config() -> AIConfig:
    return AIConfig(api_key="test-api-key", model_id="test-model")


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_transport(
    recorded_requests: list[httpx.Request],
) -> Callable[..., httpx.MockTransport]:
    """Build a MockTransport that answers from a queue of responses.

    Each queued item is either an httpx.Response or an exception to raise.
    The last item is repeated once the queue is drained.
    """

    def factory(*responses: httpx.Response | Exception) -> httpx.MockTransport:
        queue = list(responses)

        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            item = queue.pop(0) if len(queue) > 1 else queue[0]
            if isinstance(item, Exception):
                raise item
            return httpx.Response(item.status_code, headers=item.headers, content=item.content)

        return httpx.MockTransport(handler)

    return factory


@pytest.fixture
def sample_bundle() -> DailyBundle:
    """Create a sample stored bundle."""
    return DailyBundle(
        date=date(2026, 3, 14),
        review=ReviewContent(
            title=REVIEW_JSON["review_title"],
            content=REVIEW_JSON["review_content"],
            author=REVIEW_JSON["review_author"],
            tag=REVIEW_JSON["review_tag"],
            source=REVIEW_JSON["review_source"],
        ),
        concept=ContentItem(**CONCEPT_JSON),
        question=ContentItem(**QUESTION_JSON),
    )


@pytest.fixture
def previous_bundle(sample_bundle: DailyBundle) -> DailyBundle:
    """The stored bundle for the day before sample_bundle."""
    return DailyBundle(
        date=date(2026, 3, 13),
        review=ReviewContent(title="论《边城》的抒情", content="沈从文笔下的湘西世界。"),
        concept=ContentItem(title="意识流", content="以人物意识活动为线索的叙事方法。"),
        question=ContentItem(title="比较分析题", content="比较张爱玲与萧红的女性书写。"),
    )


@pytest.fixture
def sample_pair(sample_bundle: DailyBundle) -> DailyPair:
    """Orchestrator output wrapping sample_bundle."""
    from literary_daily.ai.orchestrator import placeholder_yesterday

    return DailyPair(today=sample_bundle, yesterday=placeholder_yesterday(sample_bundle.date))
