# ABOUTME: Pydantic models for daily content data structures.
# ABOUTME: Defines ContentItem, ReviewContent, DailyBundle, DailyPair and per-kind AI payloads.

from datetime import date
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

NonEmptyStr = Annotated[str, StringConstraints(strict=True, min_length=1)]


class PromptKind(str, Enum):
    """The three kinds of generated content."""

    REVIEW = "review"
    CONCEPT = "concept"
    QUESTION = "question"


class ContentItem(BaseModel):
    """Generic unit of generated text."""

    model_config = ConfigDict(frozen=True)

    title: NonEmptyStr
    content: NonEmptyStr


class ReviewContent(ContentItem):
    """Literary review with optional attribution metadata."""

    author: str | None = None
    tag: str | None = None
    source: str | None = None

    @field_validator("author", "tag", "source", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        # Attribution is free text; anything else the model invents is dropped.
        if value is None or not isinstance(value, str) or not value.strip():
            return None
        return value


class DailyBundle(BaseModel):
    """The three generated items for one calendar date."""

    model_config = ConfigDict(frozen=True)

    date: date
    review: ReviewContent
    concept: ContentItem
    question: ContentItem


class DailyPair(BaseModel):
    """Payload served to the presentation client."""

    today: DailyBundle
    yesterday: DailyBundle


# --- AI payload schemas (one per prompt kind) ---


class ReviewPayload(BaseModel):
    """Raw JSON shape requested by the review prompt."""

    review_title: NonEmptyStr
    review_content: NonEmptyStr
    review_author: object = None
    review_tag: object = None
    review_source: object = None

    def to_content(self) -> ReviewContent:
        return ReviewContent(
            title=self.review_title,
            content=self.review_content,
            author=self.review_author,
            tag=self.review_tag,
            source=self.review_source,
        )


class ConceptPayload(BaseModel):
    """Raw JSON shape requested by the concept prompt."""

    title: NonEmptyStr
    content: NonEmptyStr

    def to_content(self) -> ContentItem:
        return ContentItem(title=self.title, content=self.content)


class QuestionPayload(ConceptPayload):
    """Raw JSON shape requested by the question prompt."""


PAYLOAD_SCHEMAS: dict[PromptKind, type[ReviewPayload] | type[ConceptPayload]] = {
    PromptKind.REVIEW: ReviewPayload,
    PromptKind.CONCEPT: ConceptPayload,
    PromptKind.QUESTION: QuestionPayload,
}


class EnsureResult(BaseModel):
    """Outcome of a scheduled generation run."""

    date: date
    created: bool
    bundle: DailyBundle = Field(exclude=True)
