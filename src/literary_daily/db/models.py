# ABOUTME: SQLAlchemy ORM models for daily content persistence.
# ABOUTME: Defines the daily_content table, one row per calendar date.

from datetime import UTC, date, datetime

from sqlalchemy import Date, DateTime, Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from literary_daily.models import ContentItem, DailyBundle, ReviewContent


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class DailyContent(Base):
    """Generated review, concept and question for one date."""

    __tablename__ = "daily_content"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    date: Mapped[date] = mapped_column(Date, nullable=False, unique=True, index=True)

    review_title: Mapped[str] = mapped_column(Text, nullable=False)
    review_content: Mapped[str] = mapped_column(Text, nullable=False)
    review_author: Mapped[str | None] = mapped_column(Text, nullable=True)
    review_tag: Mapped[str | None] = mapped_column(Text, nullable=True)
    review_source: Mapped[str | None] = mapped_column(Text, nullable=True)

    concept_title: Mapped[str] = mapped_column(Text, nullable=False)
    concept_content: Mapped[str] = mapped_column(Text, nullable=False)

    question_title: Mapped[str] = mapped_column(Text, nullable=False)
    question_content: Mapped[str] = mapped_column(Text, nullable=False)

    @classmethod
    def from_bundle(cls, bundle: DailyBundle) -> "DailyContent":
        return cls(
            date=bundle.date,
            review_title=bundle.review.title,
            review_content=bundle.review.content,
            review_author=bundle.review.author,
            review_tag=bundle.review.tag,
            review_source=bundle.review.source,
            concept_title=bundle.concept.title,
            concept_content=bundle.concept.content,
            question_title=bundle.question.title,
            question_content=bundle.question.content,
        )

    def to_bundle(self) -> DailyBundle:
        return DailyBundle(
            date=self.date,
            review=ReviewContent(
                title=self.review_title,
                content=self.review_content,
                author=self.review_author,
                tag=self.review_tag,
                source=self.review_source,
            ),
            concept=ContentItem(title=self.concept_title, content=self.concept_content),
            question=ContentItem(title=self.question_title, content=self.question_content),
        )

    def __repr__(self) -> str:
        return f"<DailyContent {self.date}: {self.review_title[:50]}>"
