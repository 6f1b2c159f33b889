# ABOUTME: Extraction and validation of JSON payloads from free-form model output.
# ABOUTME: Tolerates fenced code blocks and surrounding prose around the JSON object.

import json
import re

import structlog
from pydantic import ValidationError

from literary_daily.errors import ResponseFormatInvalid
from literary_daily.models import PAYLOAD_SCHEMAS, ContentItem, PromptKind, ReviewContent

log = structlog.get_logger()

SNIPPET_LENGTH = 200

_JSON_FENCE = re.compile(r"```json\s*\n(.*?)\n?\s*```", re.DOTALL | re.IGNORECASE)


def extract_json_text(text: str) -> str:
    """Isolate the JSON candidate inside a model response.

    Tries, in order: a ```json fenced block, the span from the first "{" to
    the last "}", and finally the raw text unchanged.
    """
    match = _JSON_FENCE.search(text)
    if match:
        return match.group(1)

    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last > first:
        return text[first : last + 1]

    return text


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item["loc"]) or "<root>"
        parts.append(f"{loc}: {item['msg']}")
    return "; ".join(parts)


def parse_content(text: str, kind: PromptKind) -> ContentItem | ReviewContent:
    """Parse model output into the content type expected for a prompt kind.

    Raises:
        ResponseFormatInvalid: If no JSON object can be parsed or required
            fields are missing or not strings.
    """
    snippet = text[:SNIPPET_LENGTH]
    candidate = extract_json_text(text)

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        log.error("json_parse_failed", kind=kind.value, error=str(e), response_preview=snippet)
        raise ResponseFormatInvalid(str(e), snippet) from e

    if not isinstance(data, dict):
        log.error("json_not_an_object", kind=kind.value, response_preview=snippet)
        raise ResponseFormatInvalid(f"expected a JSON object, got {type(data).__name__}", snippet)

    schema = PAYLOAD_SCHEMAS[kind]
    try:
        payload = schema.model_validate(data)
    except ValidationError as e:
        message = f"AI response format is incorrect for {kind.value}: {_describe(e)}"
        log.error("payload_validation_failed", kind=kind.value, error=message)
        raise ResponseFormatInvalid(message, snippet) from e

    return payload.to_content()
