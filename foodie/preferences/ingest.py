"""
Preference ingestion.

Responsibilities:
- Accept free text, JSON, CSV, or extracted document text.
- Route every line / field through the classifier.
- Produce a single immutable PreferenceSet per submission.
"""
from __future__ import annotations

import io
import json
import logging
import re
from pathlib import PurePath
from typing import Any, List

import pandas as pd

from .classifier import build_preference_set, classify_field, classify_line
from .config import DEFAULT_VOCABULARY, Vocabulary
from .models import ClassifiedEntry, PreferenceCategory, PreferenceSet

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """Raised when a submission contains no usable food preferences."""


_DOCUMENT_SPLIT_RE = re.compile(r"[\n,;]+")

# JSON keys per category; the first key holding a list wins
_JSON_KEYS: dict[PreferenceCategory, tuple[str, ...]] = {
    PreferenceCategory.liked: ("preferences", "liked", "likes"),
    PreferenceCategory.restaurant: ("restaurants",),
    PreferenceCategory.disliked: ("dislikes", "disliked"),
    PreferenceCategory.mood_tag: ("mood_tags", "moodTags", "tags"),
}

_CSV_TYPE_COLUMNS = ["type", "Type"]
_CSV_NAME_COLUMNS = ["name", "Name", "item", "Item"]
_CSV_NOTES_COLUMNS = ["notes", "Notes"]


def _log_parsed(source: str, preferences: PreferenceSet) -> None:
    logger.info(
        "Parsed %s preferences: liked=%d restaurants=%d disliked=%d mood_tags=%d raw_text=%s",
        source,
        len(preferences.liked),
        len(preferences.restaurants),
        len(preferences.disliked),
        len(preferences.mood_tags),
        preferences.raw_text is not None,
    )


def _fail(source: str, message: str) -> ParseError:
    logger.warning("Failed to parse %s preferences: %s", source, message)
    return ParseError(message)


# ---------------------------------------------------------------------------
# Free text
# ---------------------------------------------------------------------------


def parse_text(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> PreferenceSet:
    trimmed = (text or "").strip()
    if not trimmed:
        raise _fail("text", "Please enter some food preferences.")

    preferences = build_preference_set(
        classify_line(line, vocabulary) for line in trimmed.splitlines()
    )
    if preferences.is_empty():
        raise _fail("text", "Could not parse any food preferences. Please check the format.")

    _log_parsed("text", preferences)
    return preferences


def parse_document(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> PreferenceSet:
    """Classify text already extracted from a PDF or word-processor document.

    The full text is kept as ``raw_text`` so the compiler can pass it along
    when the line heuristics miss something.
    """
    trimmed = (text or "").strip()
    if not trimmed:
        raise _fail(
            "document",
            "The document appears to be empty or couldn't be read. "
            "Try a different file or use text input instead.",
        )

    fragments = (part.strip() for part in _DOCUMENT_SPLIT_RE.split(trimmed))
    preferences = build_preference_set(
        (classify_line(fragment, vocabulary) for fragment in fragments if fragment),
        raw_text=trimmed,
    )
    _log_parsed("document", preferences)
    return preferences


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


def _extract_strings(obj: Any) -> List[str]:
    strings: List[str] = []

    def _walk(item: Any) -> None:
        if isinstance(item, str):
            if item.strip():
                strings.append(item.strip())
        elif isinstance(item, list):
            for child in item:
                _walk(child)
        elif isinstance(item, dict):
            for child in item.values():
                _walk(child)

    _walk(obj)
    return strings


def _record_entry(record: dict, vocabulary: Vocabulary) -> ClassifiedEntry | None:
    name = record.get("name") or record.get("item") or ""
    notes = record.get("notes") or ""
    value = f"{name} ({notes})" if name and notes else str(name)
    return classify_field(value, record.get("type"), vocabulary)


def parse_json(
    payload: str | bytes | dict | list,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> PreferenceSet:
    if isinstance(payload, (str, bytes)):
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise _fail("json", f"Failed to parse JSON: {exc}") from exc
    else:
        data = payload

    entries: List[ClassifiedEntry | None] = []
    if isinstance(data, list):
        # A list of {type, name, notes} records, or of bare strings
        for item in data:
            if isinstance(item, dict):
                entries.append(_record_entry(item, vocabulary))
            else:
                entries.append(classify_field(item, None, vocabulary))
    elif isinstance(data, dict):
        for category, keys in _JSON_KEYS.items():
            for key in keys:
                values = data.get(key)
                if isinstance(values, list):
                    entries.extend(
                        ClassifiedEntry(category=category, value=str(v).strip())
                        for v in values
                        if isinstance(v, (str, int, float)) and str(v).strip()
                    )
                    break

    preferences = build_preference_set(entries)
    if preferences.is_empty():
        # No recognised structure: treat every string in the document as a like
        extracted = _extract_strings(data)
        if not extracted:
            raise _fail(
                "json",
                "Couldn't find any food preferences in the JSON file. "
                "Make sure it has preferences, restaurants, or dislikes arrays.",
            )
        preferences = PreferenceSet(liked=extracted)

    _log_parsed("json", preferences)
    return preferences


# ---------------------------------------------------------------------------
# CSV
# ---------------------------------------------------------------------------


def _first_present(df: pd.DataFrame, columns: List[str]) -> str | None:
    for col in columns:
        if col in df.columns:
            return col
    return None


def parse_csv(
    payload: str | bytes,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> PreferenceSet:
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8", errors="replace")

    expected = "Couldn't extract food preferences from the CSV. Expected columns: type, name, notes"
    try:
        df = pd.read_csv(
            io.StringIO(payload), dtype=str, keep_default_na=False, skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as exc:
        raise _fail("csv", expected) from exc
    except pd.errors.ParserError as exc:
        raise _fail("csv", f"Failed to parse CSV: {exc}") from exc

    col_type = _first_present(df, _CSV_TYPE_COLUMNS)
    col_name = _first_present(df, _CSV_NAME_COLUMNS)
    col_notes = _first_present(df, _CSV_NOTES_COLUMNS)
    if col_name is None:
        raise _fail("csv", expected)

    df = df.fillna("")
    entries: List[ClassifiedEntry | None] = []
    for _, row in df.iterrows():
        name = str(row[col_name]).strip()
        notes = str(row[col_notes]).strip() if col_notes else ""
        value = f"{name} ({notes})" if name and notes else name
        type_label = str(row[col_type]) if col_type else None
        entries.append(classify_field(value, type_label, vocabulary))

    preferences = build_preference_set(entries)
    if preferences.is_empty():
        raise _fail("csv", expected)

    _log_parsed("csv", preferences)
    return preferences


# ---------------------------------------------------------------------------
# Upload dispatch
# ---------------------------------------------------------------------------


def parse_upload(
    filename: str,
    content: str | bytes,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> PreferenceSet:
    """Route an uploaded file to the matching parser by extension."""
    extension = PurePath(filename).suffix.lower().lstrip(".")
    if extension == "json":
        return parse_json(content, vocabulary)
    if extension == "csv":
        return parse_csv(content, vocabulary)

    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    if extension in ("txt", "md"):
        return parse_text(content, vocabulary)

    raise _fail(
        "upload",
        f"Unsupported file type: .{extension}. Please upload a JSON, CSV, or text file.",
    )
