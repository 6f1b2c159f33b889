# ABOUTME: Tests for Pydantic content models.
# ABOUTME: Verifies required fields, optional attribution handling, and serialization.

from datetime import date

import pytest
from pydantic import ValidationError

from literary_daily.models import (
    ConceptPayload,
    ContentItem,
    DailyBundle,
    DailyPair,
    ReviewContent,
    ReviewPayload,
)


class TestContentItem:
    """Tests for ContentItem."""

    def test_requires_non_empty_fields(self) -> None:
        """Test that empty title or content is rejected."""
        with pytest.raises(ValidationError):
            ContentItem(title="", content="text")
        with pytest.raises(ValidationError):
            ContentItem(title="title", content="")

    def test_rejects_non_string(self) -> None:
        """Test that a number is not coerced to a title."""
        with pytest.raises(ValidationError):
            ContentItem(title=42, content="text")

    def test_is_immutable(self) -> None:
        """Test that items cannot be modified after creation."""
        item = ContentItem(title="a", content="b")
        with pytest.raises(ValidationError):
            item.title = "c"


class TestReviewContent:
    """Tests for ReviewContent optional attribution."""

    def test_optional_fields_default_to_none(self) -> None:
        """Test that attribution fields are optional."""
        review = ReviewContent(title="t", content="c")
        assert review.author is None
        assert review.tag is None
        assert review.source is None

    def test_empty_strings_become_none(self) -> None:
        """Test that blank attribution values are normalized to None."""
        review = ReviewContent(title="t", content="c", author="", tag="   ", source="出处")
        assert review.author is None
        assert review.tag is None
        assert review.source == "出处"

    def test_non_string_attribution_dropped(self) -> None:
        """Test that a non-string attribution value is dropped."""
        review = ReviewContent(title="t", content="c", tag=["#经典"])
        assert review.tag is None


class TestPayloads:
    """Tests for per-kind payload schemas."""

    def test_review_payload_maps_fields(self) -> None:
        """Test that review_* keys map onto ReviewContent."""
        payload = ReviewPayload(
            review_title="标题",
            review_content="内容",
            review_author="作者",
        )
        review = payload.to_content()

        assert isinstance(review, ReviewContent)
        assert review.title == "标题"
        assert review.content == "内容"
        assert review.author == "作者"
        assert review.source is None

    def test_concept_payload_requires_strings(self) -> None:
        """Test that non-string concept content is rejected."""
        with pytest.raises(ValidationError):
            ConceptPayload.model_validate({"title": "t", "content": ["not", "text"]})

    def test_payload_ignores_extra_fields(self) -> None:
        """Test that unknown keys in model output are ignored."""
        payload = ConceptPayload.model_validate({"title": "t", "content": "c", "notes": "x"})
        assert payload.to_content() == ContentItem(title="t", content="c")


class TestDailyPair:
    """Tests for serialized bundle shape."""

    def test_json_uses_iso_date(self, sample_bundle: DailyBundle) -> None:
        """Test that dates serialize as ISO strings."""
        pair = DailyPair(today=sample_bundle, yesterday=sample_bundle)
        data = pair.model_dump(mode="json")

        assert data["today"]["date"] == "2026-03-14"
        assert data["today"]["review"]["author"] == "林清远"
        assert set(data) == {"today", "yesterday"}

    def test_bundle_date_parses_iso_string(self, sample_bundle: DailyBundle) -> None:
        """Test that a serialized bundle validates back to the same date."""
        data = sample_bundle.model_dump(mode="json")
        assert DailyBundle.model_validate(data).date == date(2026, 3, 14)
