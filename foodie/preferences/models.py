from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class PreferenceCategory(str, Enum):
    liked = "liked"
    disliked = "disliked"
    restaurant = "restaurant"
    mood_tag = "mood_tag"


class ItemCategory(str, Enum):
    restaurant = "restaurant"
    cuisine = "cuisine"
    dish = "dish"


class Confidence(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


def _clean_strings(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    cleaned: list[str] = []
    for item in value:
        if item is None:
            continue
        text = str(item).strip()
        if text:
            cleaned.append(text)
    return cleaned


class PreferenceSet(BaseModel):
    """Categorized food preferences for one person, as parsed from a submission."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    liked: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("liked", "preferences"),
    )
    restaurants: tuple[str, ...] = Field(default=())
    disliked: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("disliked", "dislikes"),
    )
    mood_tags: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("mood_tags", "moodTags"),
    )
    raw_text: str | None = Field(
        default=None, validation_alias=AliasChoices("raw_text", "rawText"),
    )

    @field_validator("liked", "restaurants", "disliked", "mood_tags", mode="before")
    @classmethod
    def _drop_blank_entries(cls, value: Any) -> list[str]:
        return _clean_strings(value)

    @field_validator("raw_text", mode="before")
    @classmethod
    def _blank_raw_text_is_none(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    def total_entries(self) -> int:
        return len(self.liked) + len(self.restaurants)

    def is_empty(self) -> bool:
        return not (self.liked or self.restaurants or self.disliked or self.mood_tags)


class ClassifiedEntry(BaseModel):
    category: PreferenceCategory
    value: str = Field(..., min_length=1)


class AggregatedEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    display_name: str
    normalized_key: str
    count: int = Field(..., ge=1)


class CandidateItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    category: ItemCategory
    weight: float = Field(..., gt=0)


class SuggestionDraft(BaseModel):
    """A suggestion without an id, e.g. one produced by the external backend."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    category: ItemCategory = Field(default=ItemCategory.dish, alias="type")
    justification: str = Field(default="", alias="reason")
    tags: list[str] = Field(default_factory=list)
    confidence: Confidence = Confidence.medium

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _lowercase_category(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("confidence", mode="before")
    @classmethod
    def _lowercase_confidence(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


# Upper bound on tags per suggestion, including the category tag
MAX_SUGGESTION_TAGS = 4


class Suggestion(SuggestionDraft):
    id: str
    tags: list[str] = Field(default_factory=list, max_length=MAX_SUGGESTION_TAGS)


class SummaryStats(BaseModel):
    total_liked_entries: int = 0
    total_restaurant_visits: int = 0
    unique_liked: int = 0
    unique_restaurants: int = 0


class CompiledSummary(BaseModel):
    top_liked: list[str] = Field(default_factory=list)
    top_restaurants: list[str] = Field(default_factory=list)
    disliked: list[str] = Field(default_factory=list)
    mood_tags: list[str] = Field(default_factory=list)
    raw_text_summary: str | None = None
    stats: SummaryStats = Field(default_factory=SummaryStats)
    liked_stats_threshold: int = Field(default=20, exclude=True)
    restaurant_stats_threshold: int = Field(default=10, exclude=True)

    def to_prompt_text(self) -> str:
        """Render the summary as one labelled line per non-empty category."""
        sections: list[str] = []
        if self.top_liked:
            sections.append(f"Liked foods/cuisines: {', '.join(self.top_liked)}")
        if self.top_restaurants:
            sections.append(f"Favorite restaurants: {', '.join(self.top_restaurants)}")
        if self.disliked:
            sections.append(f"Dislikes/Avoid: {', '.join(self.disliked)}")
        if self.mood_tags:
            sections.append(f"Mood preferences: {', '.join(self.mood_tags)}")
        if self.raw_text_summary:
            sections.append(f"Additional notes: {self.raw_text_summary}")

        stats = self.stats
        if (
            stats.total_liked_entries > self.liked_stats_threshold
            or stats.total_restaurant_visits > self.restaurant_stats_threshold
        ):
            sections.append(
                f"Data summary: {stats.total_liked_entries} food entries "
                f"({stats.unique_liked} unique), "
                f"{stats.total_restaurant_visits} restaurant visits "
                f"({stats.unique_restaurants} unique)"
            )
        return "\n".join(sections)
