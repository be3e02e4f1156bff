"""
In-memory log of parse and recommendation events.

Events are plain dicts so ``compute_analytics`` can tally them without
knowing about the request models. The log is bounded; the oldest events
drop off once it is full.
"""
from __future__ import annotations

import time
from collections import deque
from typing import Any

from ..preferences.models import PreferenceSet
from ..recommendations.models import RecommendationResponse

PARSE_EVENT = "parse"
RECOMMENDATION_EVENT = "recommendations"

_MAX_EVENTS = 10_000

_events: deque[dict[str, Any]] = deque(maxlen=_MAX_EVENTS)


def _entry_counts(preferences: PreferenceSet) -> dict[str, int]:
    return {
        "liked_entries": len(preferences.liked),
        "restaurant_entries": len(preferences.restaurants),
        "disliked_entries": len(preferences.disliked),
        "mood_tag_entries": len(preferences.mood_tags),
    }


def record_event(event_type: str, data: dict[str, Any]) -> None:
    _events.append({
        "type": event_type,
        "timestamp": time.time(),
        **data,
    })


def record_parse(
    source: str,
    preferences: PreferenceSet | None = None,
    error: str | None = None,
) -> None:
    """Log one parse attempt; a missing ``preferences`` marks a failure."""
    data: dict[str, Any] = {"source": source, "success": preferences is not None}
    if preferences is not None:
        data.update(_entry_counts(preferences))
        data["has_raw_text"] = preferences.raw_text is not None
    if error is not None:
        data["error"] = error
    record_event(PARSE_EVENT, data)


def record_recommendations(
    preferences: PreferenceSet,
    response: RecommendationResponse,
    backend_attempted: bool,
    response_time_ms: float,
) -> None:
    record_event(RECOMMENDATION_EVENT, {
        "method": response.method.value,
        "backend_attempted": backend_attempted,
        **_entry_counts(preferences),
        "total_candidates": response.total_candidates,
        "results_returned": len(response.recommendations),
        "names": [s.name for s in response.recommendations],
        "response_time_ms": response_time_ms,
    })


def get_events(event_type: str | None = None) -> list[dict[str, Any]]:
    if event_type is None:
        return list(_events)
    return [e for e in _events if e["type"] == event_type]


def clear_events() -> None:
    _events.clear()
