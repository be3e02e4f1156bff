from __future__ import annotations

import re
from collections.abc import Iterable

from .models import AggregatedEntry

_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Lower-case, trim and collapse internal whitespace for comparison."""
    return _WHITESPACE_RE.sub(" ", text.strip().lower())


def _sort_key(entry: AggregatedEntry) -> tuple[int, str, str]:
    return (-entry.count, entry.display_name.casefold(), entry.display_name)


def aggregate(items: Iterable[str], top_k: int | None = None) -> list[AggregatedEntry]:
    """
    Count duplicates case- and whitespace-insensitively.

    The first-seen spelling becomes the display name. Output is ordered by
    count descending, then display name ascending; ``top_k`` truncates after
    sorting.
    """
    counts: dict[str, list] = {}
    for item in items:
        if not isinstance(item, str):
            continue
        key = normalize(item)
        if not key:
            continue
        slot = counts.get(key)
        if slot is None:
            counts[key] = [item.strip(), 1]
        else:
            slot[1] += 1

    entries = sorted(
        (
            AggregatedEntry(display_name=display, normalized_key=key, count=count)
            for key, (display, count) in counts.items()
        ),
        key=_sort_key,
    )
    if top_k is not None:
        entries = entries[:max(top_k, 0)]
    return entries


def unique(items: Iterable[str], limit: int | None = None) -> list[str]:
    """De-duplicate without counting, keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if limit is not None and len(result) >= limit:
            break
        if not isinstance(item, str):
            continue
        key = normalize(item)
        if key and key not in seen:
            seen.add(key)
            result.append(item.strip())
    return result


def max_count(entries: Iterable[AggregatedEntry]) -> int:
    """Largest count among ``entries``, never less than 1."""
    return max((entry.count for entry in entries), default=1)
