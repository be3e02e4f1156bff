from __future__ import annotations

import random

from foodie.preferences.aggregator import aggregate, max_count, normalize, unique
from foodie.preferences.models import AggregatedEntry


def test_normalize_collapses_case_and_whitespace():
    assert normalize("  Joe's   PIZZA \t") == "joe's pizza"


def test_counts_and_orders_by_frequency_then_name():
    entries = aggregate(["Italian", "Italian", "Thai"])
    assert entries == [
        AggregatedEntry(display_name="Italian", normalized_key="italian", count=2),
        AggregatedEntry(display_name="Thai", normalized_key="thai", count=1),
    ]


def test_first_seen_casing_is_kept():
    entries = aggregate(["sushi", "SUSHI", " Sushi  "])
    assert len(entries) == 1
    assert entries[0].display_name == "sushi"
    assert entries[0].count == 3


def test_whitespace_variants_share_a_key():
    entries = aggregate(["Pad  Thai", "pad thai"])
    assert entries[0].normalized_key == "pad thai"
    assert entries[0].count == 2


def test_ties_sort_alphabetically():
    entries = aggregate(["Tacos", "burgers", "Arepas"])
    assert [e.display_name for e in entries] == ["Arepas", "burgers", "Tacos"]


def test_blank_items_are_skipped():
    assert aggregate(["", "   ", "Ramen"]) == [
        AggregatedEntry(display_name="Ramen", normalized_key="ramen", count=1),
    ]


def test_top_k_truncates_after_sorting():
    items = ["Zucchini"] * 3 + ["Apple", "Banana", "Cherry"]
    entries = aggregate(items, top_k=2)
    assert [e.display_name for e in entries] == ["Zucchini", "Apple"]


def test_empty_input():
    assert aggregate([]) == []
    assert max_count([]) == 1


def test_max_count():
    assert max_count(aggregate(["a1", "a1", "b2"])) == 2


def test_reaggregating_display_names_does_not_increase_counts():
    rng = random.Random(7)
    vocabulary = ["Thai", "thai", "THAI ", "Pho", "pho", "Tacos", "Dim Sum", "dim  sum"]
    items = [rng.choice(vocabulary) for _ in range(200)]

    first = aggregate(items)
    second = aggregate([e.display_name for e in first])

    by_key = {e.normalized_key: e.count for e in first}
    for entry in second:
        assert entry.count <= by_key[entry.normalized_key]


def test_expanding_entries_reproduces_them():
    original = aggregate(["Thai", "thai", "Pho", "Tacos", "tacos", "TACOS"])
    expanded = [e.display_name for e in original for _ in range(e.count)]
    assert aggregate(expanded) == original


def test_unique_keeps_first_seen_order_and_limit():
    items = ["Cilantro", "olives", "cilantro", "Anchovies", "OLIVES", "Beets"]
    assert unique(items) == ["Cilantro", "olives", "Anchovies", "Beets"]
    assert unique(items, limit=2) == ["Cilantro", "olives"]
