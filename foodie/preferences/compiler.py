"""
Preference compiler.

Responsibilities:
- Aggregate a PreferenceSet into a compact, size-bounded summary.
- Render the summary as deterministic prompt text for an external backend.
- Offer a cheap token estimate for callers with a size budget.
"""
from __future__ import annotations

import math

from .aggregator import aggregate, unique
from .config import DEFAULT_COMPILER_CONFIG, CompilerConfig
from .models import AggregatedEntry, CompiledSummary, PreferenceSet, SummaryStats


def format_entry(entry: AggregatedEntry) -> str:
    """``"Italian"`` for a single mention, ``"Italian (15x)"`` otherwise."""
    if entry.count > 1:
        return f"{entry.display_name} ({entry.count}x)"
    return entry.display_name


def truncate_raw_text(
    text: str,
    limit: int = DEFAULT_COMPILER_CONFIG.raw_text_limit,
    boundary_ratio: float = DEFAULT_COMPILER_CONFIG.boundary_ratio,
    boundary_marker: str = DEFAULT_COMPILER_CONFIG.boundary_marker,
    hard_cut_marker: str = DEFAULT_COMPILER_CONFIG.hard_cut_marker,
) -> str:
    if len(text) <= limit:
        return text

    truncated = text[:limit]
    cut_point = max(truncated.rfind("."), truncated.rfind("\n"))
    if cut_point >= 0 and cut_point >= limit * boundary_ratio:
        return truncated[:cut_point + 1].rstrip() + boundary_marker
    return truncated + hard_cut_marker


def compile_preferences(
    preferences: PreferenceSet,
    config: CompilerConfig = DEFAULT_COMPILER_CONFIG,
) -> CompiledSummary:
    liked = aggregate(preferences.liked)
    restaurants = aggregate(preferences.restaurants)

    raw_summary = None
    if preferences.raw_text:
        raw_summary = truncate_raw_text(
            preferences.raw_text,
            limit=config.raw_text_limit,
            boundary_ratio=config.boundary_ratio,
            boundary_marker=config.boundary_marker,
            hard_cut_marker=config.hard_cut_marker,
        )

    return CompiledSummary(
        top_liked=[format_entry(e) for e in liked[:config.max_liked]],
        top_restaurants=[format_entry(e) for e in restaurants[:config.max_restaurants]],
        disliked=unique(preferences.disliked, limit=config.max_disliked),
        mood_tags=unique(preferences.mood_tags, limit=config.max_mood_tags),
        raw_text_summary=raw_summary,
        stats=SummaryStats(
            total_liked_entries=len(preferences.liked),
            total_restaurant_visits=len(preferences.restaurants),
            unique_liked=len(liked),
            unique_restaurants=len(restaurants),
        ),
        liked_stats_threshold=config.liked_stats_threshold,
        restaurant_stats_threshold=config.restaurant_stats_threshold,
    )


def compile_to_text(
    preferences: PreferenceSet,
    config: CompilerConfig = DEFAULT_COMPILER_CONFIG,
) -> str:
    return compile_preferences(preferences, config).to_prompt_text()


def estimate_tokens(text: str) -> int:
    """
    Rough token count: one token per four characters, rounded up.

    This is an approximation for budget checks, not a real tokenizer.
    """
    return math.ceil(len(text) / 4)
