from __future__ import annotations

from collections import Counter
from typing import Any

from .store import PARSE_EVENT, RECOMMENDATION_EVENT


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    parses = [e for e in events if e["type"] == PARSE_EVENT]
    requests = [e for e in events if e["type"] == RECOMMENDATION_EVENT]
    total = len(requests)

    # Parse outcomes per source
    parse_sources: Counter[str] = Counter()
    parse_failures = 0
    for p in parses:
        parse_sources[p.get("source", "unknown")] += 1
        if not p.get("success", False):
            parse_failures += 1

    # Average response time
    times = [r["response_time_ms"] for r in requests if "response_time_ms" in r]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Generation method usage
    method_counter: Counter[str] = Counter()
    for r in requests:
        method_counter[r.get("method", "unknown")] += 1
    backend_attempts = sum(1 for r in requests if r.get("backend_attempted"))
    backend_successes = method_counter.get("ai", 0)

    # Output size
    returned = [r.get("results_returned", 0) for r in requests]
    avg_returned = round(sum(returned) / total, 1) if total else 0.0
    empty_results = sum(1 for n in returned if n == 0)

    # Top suggestions
    name_counter: Counter[str] = Counter()
    for r in requests:
        for name in r.get("names", []) or []:
            name_counter[name] += 1
    top_suggestions = [{"name": n, "count": c} for n, c in name_counter.most_common(10)]

    return {
        "total_parses": len(parses),
        "parse_failures": parse_failures,
        "parse_sources": dict(parse_sources),
        "total_requests": total,
        "avg_response_time_ms": avg_time,
        "method_usage": dict(method_counter),
        "backend": {
            "attempts": backend_attempts,
            "successes": backend_successes,
            "fallback_rate": (
                round((backend_attempts - backend_successes) / backend_attempts * 100, 1)
                if backend_attempts else 0.0
            ),
        },
        "avg_suggestions_returned": avg_returned,
        "empty_results": empty_results,
        "top_suggestions": top_suggestions,
    }
