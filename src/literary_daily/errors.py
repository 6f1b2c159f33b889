# ABOUTME: Classified error taxonomy for content generation and storage.
# ABOUTME: Each generation error declares whether a retry may succeed.


class LiteraryDailyError(Exception):
    """Base class for all application errors."""


class ConfigurationError(LiteraryDailyError):
    """Required configuration (credential, model id) is missing."""


class StoreError(LiteraryDailyError):
    """Persistence failed for a reason other than a duplicate date."""


class GenerationError(LiteraryDailyError):
    """Failure while generating content from the completion endpoint."""

    retryable: bool = False


class RequestTimeout(GenerationError):
    retryable = True

    def __init__(self, message: str = "API request timed out") -> None:
        super().__init__(message)


class ConnectionFailed(GenerationError):
    retryable = True

    def __init__(self, message: str = "Could not connect to the API server") -> None:
        super().__init__(message)


class UpstreamHTTPError(GenerationError):
    """Non-2xx response from the completion endpoint."""

    status_code: int = 0

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class BadRequest(UpstreamHTTPError):
    status_code = 400


class Unauthorized(UpstreamHTTPError):
    status_code = 401


class NotFound(UpstreamHTTPError):
    status_code = 404


class RateLimited(UpstreamHTTPError):
    status_code = 429
    retryable = True


class Unavailable(UpstreamHTTPError):
    status_code = 503
    retryable = True


class UpstreamTimeout(UpstreamHTTPError):
    status_code = 504
    retryable = True


class UpstreamError(UpstreamHTTPError):
    """Any other non-2xx status."""


class ResponseFormatInvalid(GenerationError):
    """Model output could not be parsed or did not match the expected schema."""

    retryable = True

    def __init__(self, error: str, snippet: str) -> None:
        super().__init__(f"Failed to parse AI response: {error}. Raw snippet: {snippet}...")
        self.error = error
        self.snippet = snippet


class RetriesExhausted(GenerationError):
    """Retryable failures persisted past the configured attempt limit."""

    def __init__(self, attempts: int, last_error: GenerationError) -> None:
        super().__init__(f"Giving up after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error
