"""
Heuristic line classifier.

Routes one raw input unit (a text line, or one structured field with an
optional type label) into a preference category. Classification is total:
anything that cannot be placed is dropped by returning ``None``.

Precedence for free text, first match wins:
1. section headers with no payload ("Restaurants:") are discarded
2. explicit ``label: value`` prefixes
3. inline ``[label]`` / ``(label)`` markers
4. keyword triggers (dislike, then like, then restaurant)
5. short plausible item names default to liked
"""
from __future__ import annotations

import re
from collections.abc import Iterable

from .config import DEFAULT_VOCABULARY, Vocabulary
from .models import ClassifiedEntry, PreferenceCategory, PreferenceSet

_WHITESPACE_RE = re.compile(r"\s+")


def _collapse(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def _strip_bullet(line: str, vocabulary: Vocabulary) -> str:
    for marker in vocabulary.bullet_markers:
        if line.startswith(marker):
            return line[len(marker):].strip()
    return line


def _labels_pattern(labels: Iterable[str]) -> str:
    return "|".join(re.escape(label) for label in labels)


def _all_prefix_labels(vocabulary: Vocabulary) -> list[str]:
    return [label for _, labels in vocabulary.prefix_labels for label in labels]


def _is_section_header(line: str, vocabulary: Vocabulary) -> bool:
    # Any prefix label, singular or plural, with nothing after the colon
    pattern = rf"^(?:{_labels_pattern(_all_prefix_labels(vocabulary))})s?\s*:$"
    return re.match(pattern, line, re.IGNORECASE) is not None


def _match_prefix(line: str, vocabulary: Vocabulary) -> ClassifiedEntry | None:
    for category, labels in vocabulary.prefix_labels:
        pattern = rf"^(?:{_labels_pattern(labels)})s?\s*:\s*(.+)$"
        match = re.match(pattern, line, re.IGNORECASE)
        if match:
            value = match.group(1).strip()
            if value:
                return ClassifiedEntry(category=category, value=value)
    return None


def _match_inline_marker(line: str, vocabulary: Vocabulary) -> ClassifiedEntry | None:
    for category, labels in vocabulary.inline_markers:
        marker_re = re.compile(
            rf"\[\s*(?:{_labels_pattern(labels)})\s*\]|\(\s*(?:{_labels_pattern(labels)})\s*\)",
            re.IGNORECASE,
        )
        if marker_re.search(line):
            value = _collapse(marker_re.sub(" ", line))
            if value:
                return ClassifiedEntry(category=category, value=value)
            return None
    return None


def _match_keywords(line: str, vocabulary: Vocabulary) -> ClassifiedEntry | None:
    lower = line.lower()
    if any(trigger in lower for trigger in vocabulary.dislike_triggers):
        return ClassifiedEntry(category=PreferenceCategory.disliked, value=line)
    if any(trigger in lower for trigger in vocabulary.like_triggers):
        return ClassifiedEntry(category=PreferenceCategory.liked, value=line)
    if any(trigger in lower for trigger in vocabulary.restaurant_triggers):
        return ClassifiedEntry(category=PreferenceCategory.restaurant, value=line)
    return None


def classify_line(
    line: str,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> ClassifiedEntry | None:
    """Classify one free-text line. Returns ``None`` when the line is dropped."""
    if not isinstance(line, str):
        return None
    text = _strip_bullet(line.strip(), vocabulary)
    if not text:
        return None

    if _is_section_header(text, vocabulary):
        return None

    entry = (
        _match_prefix(text, vocabulary)
        or _match_inline_marker(text, vocabulary)
        or _match_keywords(text, vocabulary)
    )
    if entry is not None:
        return entry

    if vocabulary.min_item_length <= len(text) <= vocabulary.max_item_length:
        return ClassifiedEntry(category=PreferenceCategory.liked, value=text)
    return None


def classify_field(
    value: object,
    type_label: object = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> ClassifiedEntry | None:
    """Classify a structured (JSON / CSV) field.

    The explicit type wins over any text heuristic; a missing or unknown type
    routes to liked rather than dropping the value.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return ClassifiedEntry(category=vocabulary.category_for_type(type_label), value=text)


def build_preference_set(
    entries: Iterable[ClassifiedEntry | None],
    raw_text: str | None = None,
) -> PreferenceSet:
    """Fold classified entries into a PreferenceSet, keeping insertion order."""
    buckets: dict[PreferenceCategory, list[str]] = {category: [] for category in PreferenceCategory}
    for entry in entries:
        if entry is not None:
            buckets[entry.category].append(entry.value)
    return PreferenceSet(
        liked=buckets[PreferenceCategory.liked],
        restaurants=buckets[PreferenceCategory.restaurant],
        disliked=buckets[PreferenceCategory.disliked],
        mood_tags=buckets[PreferenceCategory.mood_tag],
        raw_text=raw_text,
    )


def classify_lines(
    lines: Iterable[str],
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    raw_text: str | None = None,
) -> PreferenceSet:
    return build_preference_set(
        (classify_line(line, vocabulary) for line in lines),
        raw_text=raw_text,
    )
