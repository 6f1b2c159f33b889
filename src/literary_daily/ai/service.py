# ABOUTME: Chat-completion client for daily literary content generation.
# ABOUTME: Classifies upstream failures, retries transient ones, and validates model output.

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception,
    stop_after_attempt,
    wait_fixed,
)

from literary_daily.ai.parsing import parse_content
from literary_daily.ai.prompts import PROMPTS
from literary_daily.config import AIConfig, Settings, get_settings
from literary_daily.errors import (
    BadRequest,
    ConnectionFailed,
    GenerationError,
    NotFound,
    RateLimited,
    RequestTimeout,
    ResponseFormatInvalid,
    RetriesExhausted,
    Unauthorized,
    Unavailable,
    UpstreamError,
    UpstreamHTTPError,
    UpstreamTimeout,
)
from literary_daily.models import ContentItem, PromptKind, ReviewContent

log = structlog.get_logger()

STATUS_ERRORS: dict[int, type[UpstreamHTTPError]] = {
    400: BadRequest,
    401: Unauthorized,
    404: NotFound,
    429: RateLimited,
    503: Unavailable,
    504: UpstreamTimeout,
}


def is_retryable(error: BaseException) -> bool:
    """Whether a failure is worth re-issuing the same request for."""
    return isinstance(error, GenerationError) and error.retryable


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    log.warning(
        "api_retry",
        attempt=retry_state.attempt_number,
        wait=retry_state.next_action.sleep if retry_state.next_action else None,
        error_type=type(error).__name__,
        error=str(error)[:200],
    )


def _error_message(response: httpx.Response) -> str:
    """Best-effort extraction of the upstream error message."""
    try:
        data = response.json()
    except ValueError:
        return response.reason_phrase or response.text[:200]

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(error, str):
            return error
        if isinstance(data.get("message"), str):
            return data["message"]
    return response.reason_phrase


def classify_response(response: httpx.Response) -> UpstreamHTTPError:
    """Map a non-2xx response to a classified error."""
    status = response.status_code
    message = _error_message(response)
    error_cls = STATUS_ERRORS.get(status)
    if error_cls is BadRequest:
        return BadRequest(f"Invalid request parameters: {message}")
    if error_cls is not None:
        return error_cls(f"API request failed ({status}): {message}")
    return UpstreamError(f"API request failed ({status}): {message}", status_code=status)


class GenerationClient:
    """Client for one-shot content generation against the completion endpoint."""

    def __init__(
        self,
        config: AIConfig,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.config = config
        self.settings = settings or get_settings()
        self._transport = transport
        self._sleep = sleep

    def _request_body(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.config.model_id,
            "messages": [{"role": "user", "content": prompt}],
            "stream": False,
            "max_tokens": self.settings.ai_max_tokens,
            "temperature": self.settings.ai_temperature,
            "top_p": self.settings.ai_top_p,
            "top_k": self.settings.ai_top_k,
            "frequency_penalty": self.settings.ai_frequency_penalty,
            "n": 1,
            "response_format": {"type": "text"},
        }

    async def _complete(self, prompt: str) -> str:
        """Issue a single completion request and return the generated text.

        Raises:
            RequestTimeout: If no response arrives within the configured timeout.
            ConnectionFailed: On network-level failures.
            UpstreamHTTPError: On any non-2xx status (subclass per status code).
            ResponseFormatInvalid: If the body lacks choices[0].message.content.
        """
        timeout = self.settings.ai_timeout_seconds
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
        }

        try:
            async with asyncio.timeout(timeout):
                async with httpx.AsyncClient(
                    timeout=timeout, transport=self._transport
                ) as client:
                    response = await client.post(
                        self.settings.ai_endpoint,
                        json=self._request_body(prompt),
                        headers=headers,
                    )
        except (TimeoutError, httpx.TimeoutException) as e:
            log.warning("api_request_timeout", timeout_seconds=timeout, error_type=type(e).__name__)
            raise RequestTimeout() from e
        except httpx.TransportError as e:
            raise ConnectionFailed(f"Could not connect to the API server: {e}") from e

        if not response.is_success:
            error = classify_response(response)
            log.error(
                "api_error",
                status=response.status_code,
                error_type=type(error).__name__,
                error=str(error),
            )
            raise error

        try:
            return response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ResponseFormatInvalid(
                f"unexpected completion body: {e!r}", response.text[:200]
            ) from e

    async def _generate_once(self, kind: PromptKind) -> ContentItem | ReviewContent:
        prompt = PROMPTS[kind]
        log.debug(
            "generating_content",
            kind=kind.value,
            model=self.config.model_id,
            prompt_length=len(prompt),
        )

        text = await self._complete(prompt)
        if not isinstance(text, str):
            raise ResponseFormatInvalid(
                f"message content is {type(text).__name__}, not text", str(text)[:200]
            )

        content = parse_content(text, kind)
        log.debug("generation_complete", kind=kind.value, title=content.title[:50])
        return content

    async def generate(self, kind: PromptKind) -> ContentItem | ReviewContent:
        """Generate and validate content for one prompt kind.

        Retryable failures are re-issued after a fixed wait until the
        configured number of attempts is used up.

        Args:
            kind: Which prompt to run.

        Returns:
            ReviewContent for the review kind, ContentItem otherwise.

        Raises:
            RetriesExhausted: If every attempt failed with a retryable error.
            GenerationError: Terminal failures (bad request, unauthorized, ...)
                propagate immediately.
        """
        retrying = AsyncRetrying(
            retry=retry_if_exception(is_retryable),
            stop=stop_after_attempt(self.settings.ai_max_attempts),
            wait=wait_fixed(self.settings.ai_retry_wait_seconds),
            sleep=self._sleep,
            before_sleep=_log_retry,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    return await self._generate_once(kind)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            log.error(
                "api_retries_exhausted",
                kind=kind.value,
                attempts=e.last_attempt.attempt_number,
                error_type=type(last_error).__name__,
            )
            raise RetriesExhausted(e.last_attempt.attempt_number, last_error) from last_error
