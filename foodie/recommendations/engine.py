"""
Local recommendation engine.

Responsibilities:
- Turn aggregated preference counts into a weighted candidate pool.
- Draw a diverse batch with weighted sampling without replacement.
- Attach a confidence tier, a justification and tags to every pick.

Every random decision goes through the ``rng`` argument, so a seeded
``random.Random`` makes a batch fully reproducible.
"""
from __future__ import annotations

import random
from collections.abc import Iterable, Sequence

from ..preferences.aggregator import aggregate, max_count, normalize
from ..preferences.config import DEFAULT_VOCABULARY, Vocabulary
from ..preferences.models import (
    CandidateItem,
    Confidence,
    MAX_SUGGESTION_TAGS,
    ItemCategory,
    PreferenceSet,
    Suggestion,
    SuggestionDraft,
)
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig


class CandidatePool:
    """Weighted candidates plus the per-category maxima used for confidence."""

    def __init__(
        self,
        items: list[CandidateItem],
        max_restaurant_count: int = 1,
        max_liked_count: int = 1,
    ) -> None:
        self.items = items
        self.max_restaurant_count = max_restaurant_count
        self.max_liked_count = max_liked_count

    def __len__(self) -> int:
        return len(self.items)

    def max_count_for(self, category: ItemCategory) -> int:
        if category == ItemCategory.restaurant:
            return self.max_restaurant_count
        return self.max_liked_count


def _resolve_rng(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else random.Random()


def classify_item(name: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> ItemCategory:
    lower = name.lower()
    if any(marker in lower for marker in vocabulary.cuisine_markers):
        return ItemCategory.cuisine
    return ItemCategory.dish


def build_candidates(
    preferences: PreferenceSet,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> CandidatePool:
    restaurants = aggregate(preferences.restaurants)
    liked = aggregate(preferences.liked)

    items: list[CandidateItem] = [
        CandidateItem(name=entry.display_name, category=ItemCategory.restaurant, weight=entry.count)
        for entry in restaurants
    ]
    items.extend(
        CandidateItem(
            name=entry.display_name,
            category=classify_item(entry.display_name, vocabulary),
            weight=entry.count,
        )
        for entry in liked
    )
    return CandidatePool(
        items,
        max_restaurant_count=max_count(restaurants),
        max_liked_count=max_count(liked),
    )


def weighted_sample(
    items: Sequence[CandidateItem],
    k: int,
    rng: random.Random | None = None,
) -> list[CandidateItem]:
    """
    Weighted sampling without replacement.

    Each round draws a point in ``[0, total remaining weight)`` and walks the
    remaining items until the cumulative weight covers it; the hit is removed
    from the pool before the next round.
    """
    rng = _resolve_rng(rng)
    available = list(items)
    selected: list[CandidateItem] = []

    while len(selected) < k and available:
        total = sum(item.weight for item in available)
        point = rng.random() * total

        index = len(available) - 1  # float rounding can leave the point uncovered
        cumulative = 0.0
        for i, item in enumerate(available):
            cumulative += item.weight
            if point < cumulative:
                index = i
                break

        selected.append(available.pop(index))

    return selected


def confidence_for(
    count: int,
    category_max: int,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> Confidence:
    thresholds = config.thresholds
    ratio = count / max(category_max, 1)
    if ratio >= thresholds.high_ratio or count >= thresholds.high_count:
        return Confidence.high
    if ratio >= thresholds.medium_ratio or count >= thresholds.medium_count:
        return Confidence.medium
    return Confidence.low


def justification_for(
    item: CandidateItem,
    rng: random.Random | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> str:
    # A single mention always reads as a wild card, whatever its tier
    rng = _resolve_rng(rng)
    count = int(item.weight)
    if count == 1:
        return rng.choice(config.wild_card_templates)
    template = rng.choice(config.templates_for(item.category))
    return template.format(name=item.name, count=count)


def tags_for(
    name: str,
    category: ItemCategory,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    max_tags: int = DEFAULT_ENGINE_CONFIG.max_tags,
) -> list[str]:
    tags = [category.value]
    limit = min(max_tags, MAX_SUGGESTION_TAGS)
    lower = name.lower()
    for keyword in vocabulary.tag_keywords:
        if len(tags) >= limit:
            break
        if keyword in lower and keyword not in tags:
            tags.append(keyword)
    return tags


def _batch_token(rng: random.Random) -> str:
    return f"{rng.getrandbits(32):08x}"


def generate(
    preferences: PreferenceSet,
    count: int = DEFAULT_ENGINE_CONFIG.default_count,
    rng: random.Random | None = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[Suggestion]:
    """
    Produce up to ``count`` distinct suggestions from ``preferences``.

    Returns an empty list when there is nothing to suggest; a short list when
    there are fewer distinct candidates than requested.
    """
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}")

    rng = _resolve_rng(rng)
    pool = build_candidates(preferences, vocabulary)
    if not pool.items:
        return []

    batch = _batch_token(rng)
    used: set[str] = set()
    suggestions: list[Suggestion] = []

    def _append(item: CandidateItem, justification: str, confidence: Confidence) -> None:
        suggestions.append(Suggestion(
            id=f"{config.id_prefix}-{batch}-{len(suggestions)}",
            name=item.name,
            category=item.category,
            justification=justification,
            tags=tags_for(item.name, item.category, vocabulary, config.max_tags),
            confidence=confidence,
        ))

    for item in weighted_sample(pool.items, min(count, len(pool)), rng):
        key = normalize(item.name)
        if key in used:
            continue
        used.add(key)
        _append(
            item,
            justification_for(item, rng, config),
            confidence_for(int(item.weight), pool.max_count_for(item.category), config),
        )

    # Same name in two categories collapses above; top up from what is left
    for item in pool.items:
        if len(suggestions) >= count:
            break
        key = normalize(item.name)
        if key in used:
            continue
        used.add(key)
        _append(item, rng.choice(config.fallback_templates), Confidence.low)

    rng.shuffle(suggestions)
    return suggestions


def intro_message(
    preferences: PreferenceSet,
    rng: random.Random | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> str:
    total = preferences.total_entries()
    if total < config.min_intro_entries:
        return config.not_much_data_message
    return _resolve_rng(rng).choice(config.intro_templates).format(total=total)


def assign_ids(
    drafts: Iterable[SuggestionDraft],
    rng: random.Random | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[Suggestion]:
    """
    Give externally produced drafts batch-unique ids.

    Duplicate names are dropped and tags are clamped so the result obeys the
    same shape as a locally generated batch.
    """
    batch = _batch_token(_resolve_rng(rng))
    tag_limit = min(config.max_tags, MAX_SUGGESTION_TAGS)
    used: set[str] = set()
    suggestions: list[Suggestion] = []
    for draft in drafts:
        key = normalize(draft.name)
        if key in used:
            continue
        used.add(key)
        extra_tags = [
            tag for tag in (t.strip() for t in draft.tags)
            if tag and tag.lower() != draft.category.value
        ]
        suggestions.append(Suggestion(
            id=f"{config.id_prefix}-{batch}-{len(suggestions)}",
            name=draft.name,
            category=draft.category,
            justification=draft.justification,
            tags=([draft.category.value] + extra_tags)[:tag_limit],
            confidence=draft.confidence,
        ))
    return suggestions
