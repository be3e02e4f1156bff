"""
Keyword tables and size limits for preference extraction.

Responsibilities:
- Hold the vocabulary the classifier uses to route lines into categories.
- Hold the cuisine / food-type keyword lists shared with the engine.
- Hold the size bounds used when compiling a prompt summary.

Everything here is immutable so callers (and tests) can swap in an
alternate vocabulary without touching module state.
"""
from __future__ import annotations

from dataclasses import dataclass

from .models import PreferenceCategory


@dataclass(frozen=True)
class Vocabulary:
    bullet_markers: tuple[str, ...] = ("-", "*", "•")

    # "label: value" prefixes, checked in this order
    prefix_labels: tuple[tuple[PreferenceCategory, tuple[str, ...]], ...] = (
        (PreferenceCategory.restaurant, ("restaurant", "place")),
        (PreferenceCategory.disliked, ("dislike", "avoid", "hate", "no")),
        (PreferenceCategory.mood_tag, ("mood", "tag", "vibe")),
        (PreferenceCategory.liked, ("like", "love", "favorite", "preference")),
    )

    # "[label]" / "(label)" markers anywhere in the line
    inline_markers: tuple[tuple[PreferenceCategory, tuple[str, ...]], ...] = (
        (PreferenceCategory.restaurant, ("restaurant", "place")),
        (PreferenceCategory.disliked, ("dislike", "avoid")),
        (PreferenceCategory.mood_tag, ("mood", "vibe")),
        (PreferenceCategory.liked, ("like", "favorite")),
    )

    dislike_triggers: tuple[str, ...] = ("dislike", "avoid", "hate", "don't like", "no ")
    like_triggers: tuple[str, ...] = ("love", "favorite", "like", "enjoy")
    restaurant_triggers: tuple[str, ...] = ("restaurant", "cafe", "diner", "bistro")

    min_item_length: int = 2
    max_item_length: int = 50

    # Type column synonyms for JSON / CSV records
    type_synonyms: tuple[tuple[str, PreferenceCategory], ...] = (
        ("cuisine", PreferenceCategory.liked),
        ("food", PreferenceCategory.liked),
        ("preference", PreferenceCategory.liked),
        ("restaurant", PreferenceCategory.restaurant),
        ("place", PreferenceCategory.restaurant),
        ("dislike", PreferenceCategory.disliked),
        ("avoid", PreferenceCategory.disliked),
        ("no", PreferenceCategory.disliked),
        ("mood", PreferenceCategory.mood_tag),
        ("tag", PreferenceCategory.mood_tag),
    )

    # A liked item containing any of these is a cuisine, otherwise a dish
    cuisine_markers: tuple[str, ...] = (
        "italian", "thai", "chinese", "japanese", "mexican", "indian",
        "korean", "vietnamese", "greek", "mediterranean", "american",
        "french", "spanish", "asian", "latin", "food", "cuisine",
    )

    # Tag keywords, in priority order: cuisines first, then food types
    cuisine_tags: tuple[str, ...] = (
        "italian", "thai", "chinese", "japanese", "mexican", "indian",
        "korean", "vietnamese", "greek", "mediterranean", "american",
        "french", "spanish", "middle eastern", "asian", "latin",
    )
    food_tags: tuple[str, ...] = (
        "pizza", "sushi", "ramen", "burger", "taco", "pasta", "salad",
        "sandwich", "noodles", "curry", "steak", "seafood", "vegetarian",
        "vegan", "healthy", "comfort food", "fast food", "brunch", "breakfast",
    )

    def category_for_type(self, type_label: object) -> PreferenceCategory:
        """Map a structured ``type`` value to a category; unknown means liked."""
        label = type_label.strip().lower() if isinstance(type_label, str) else ""
        for synonym, category in self.type_synonyms:
            if label == synonym:
                return category
        return PreferenceCategory.liked

    @property
    def tag_keywords(self) -> tuple[str, ...]:
        return self.cuisine_tags + self.food_tags


DEFAULT_VOCABULARY = Vocabulary()


@dataclass(frozen=True)
class CompilerConfig:
    max_liked: int = 15
    max_restaurants: int = 15
    max_disliked: int = 20
    max_mood_tags: int = 10
    raw_text_limit: int = 500
    boundary_ratio: float = 0.7
    boundary_marker: str = " [truncated]"
    hard_cut_marker: str = "... [truncated]"
    liked_stats_threshold: int = 20
    restaurant_stats_threshold: int = 10


DEFAULT_COMPILER_CONFIG = CompilerConfig()
