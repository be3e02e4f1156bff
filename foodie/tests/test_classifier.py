from __future__ import annotations

import pytest

from foodie.preferences.classifier import (
    build_preference_set,
    classify_field,
    classify_line,
    classify_lines,
)
from foodie.preferences.config import Vocabulary
from foodie.preferences.models import PreferenceCategory


class TestPrefixForms:
    def test_dislike_prefix(self):
        entry = classify_line("dislike: Cilantro")
        assert entry.category == PreferenceCategory.disliked
        assert entry.value == "Cilantro"

    @pytest.mark.parametrize(
        "line, category, value",
        [
            ("Restaurant: Joe's Pizza", PreferenceCategory.restaurant, "Joe's Pizza"),
            ("places: Corner Bistro", PreferenceCategory.restaurant, "Corner Bistro"),
            ("Avoid: shellfish", PreferenceCategory.disliked, "shellfish"),
            ("no: olives", PreferenceCategory.disliked, "olives"),
            ("Mood: comfort food", PreferenceCategory.mood_tag, "comfort food"),
            ("vibes: date night", PreferenceCategory.mood_tag, "date night"),
            ("Favorites: Thai", PreferenceCategory.liked, "Thai"),
            ("LOVE: ramen", PreferenceCategory.liked, "ramen"),
        ],
    )
    def test_labels_route_to_category(self, line, category, value):
        entry = classify_line(line)
        assert entry.category == category
        assert entry.value == value

    def test_bullet_is_stripped_before_prefix(self):
        entry = classify_line("- restaurant: Sushi Zen")
        assert entry.category == PreferenceCategory.restaurant
        assert entry.value == "Sushi Zen"

    def test_unicode_bullet(self):
        entry = classify_line("• hate: mushrooms")
        assert entry.category == PreferenceCategory.disliked
        assert entry.value == "mushrooms"


class TestInlineMarkers:
    def test_bracket_restaurant_marker(self):
        entry = classify_line("Joe's Pizza [restaurant]")
        assert entry.category == PreferenceCategory.restaurant
        assert entry.value == "Joe's Pizza"

    def test_paren_dislike_marker(self):
        entry = classify_line("(dislike) blue cheese")
        assert entry.category == PreferenceCategory.disliked
        assert entry.value == "blue cheese"

    def test_marker_only_line_is_dropped(self):
        assert classify_line("[avoid]") is None


class TestKeywordHeuristics:
    def test_unmarked_name_defaults_to_liked(self):
        entry = classify_line("Joe's Pizza")
        assert entry.category == PreferenceCategory.liked
        assert entry.value == "Joe's Pizza"

    def test_dislike_trigger_beats_like_trigger(self):
        entry = classify_line("I don't like spicy food")
        assert entry.category == PreferenceCategory.disliked

    def test_like_trigger(self):
        entry = classify_line("I really enjoy dumplings")
        assert entry.category == PreferenceCategory.liked
        assert entry.value == "I really enjoy dumplings"

    def test_restaurant_trigger(self):
        entry = classify_line("the little cafe on 5th street")
        assert entry.category == PreferenceCategory.restaurant

    def test_no_space_trigger(self):
        entry = classify_line("no onions please")
        assert entry.category == PreferenceCategory.disliked

    def test_long_unmarked_line_is_dropped(self):
        assert classify_line("x" * 51) is None

    def test_single_character_is_dropped(self):
        assert classify_line("x") is None


class TestDroppedLines:
    @pytest.mark.parametrize(
        "line",
        ["Restaurants:", "Dislikes:", "  - Mood:", "likes :", "Hate:", "Love:", "Preference:", "Nos:"],
    )
    def test_section_headers_are_discarded(self, line):
        assert classify_line(line) is None

    @pytest.mark.parametrize("line", ["", "   ", "-", "*  "])
    def test_blank_lines_are_discarded(self, line):
        assert classify_line(line) is None

    def test_non_string_is_discarded(self):
        assert classify_line(None) is None  # type: ignore[arg-type]


class TestStructuredFields:
    @pytest.mark.parametrize(
        "type_label, category",
        [
            ("cuisine", PreferenceCategory.liked),
            ("Food", PreferenceCategory.liked),
            ("preference", PreferenceCategory.liked),
            ("restaurant", PreferenceCategory.restaurant),
            ("place", PreferenceCategory.restaurant),
            ("dislike", PreferenceCategory.disliked),
            ("avoid", PreferenceCategory.disliked),
            ("no", PreferenceCategory.disliked),
            ("mood", PreferenceCategory.mood_tag),
            ("TAG ", PreferenceCategory.mood_tag),
        ],
    )
    def test_type_synonyms(self, type_label, category):
        assert classify_field("Pho", type_label).category == category

    def test_explicit_type_beats_text_heuristics(self):
        entry = classify_field("I hate waiting", "restaurant")
        assert entry.category == PreferenceCategory.restaurant

    def test_unknown_type_defaults_to_liked(self):
        assert classify_field("Tacos", "snack-ish").category == PreferenceCategory.liked

    @pytest.mark.parametrize("type_label", [5, True, ["restaurant"], {"type": "avoid"}])
    def test_non_string_type_routes_to_liked(self, type_label):
        assert classify_field("Pho", type_label).category == PreferenceCategory.liked

    def test_missing_type_defaults_to_liked(self):
        assert classify_field("avoid: tacos").category == PreferenceCategory.liked

    def test_blank_value_is_dropped(self):
        assert classify_field("   ", "cuisine") is None
        assert classify_field(None, "cuisine") is None


class TestFolding:
    def test_classify_lines_preserves_order_and_duplicates(self):
        prefs = classify_lines([
            "Italian",
            "restaurant: Joe's Pizza",
            "Italian",
            "dislike: Cilantro",
            "mood: cozy",
            "Restaurants:",
        ])
        assert prefs.liked == ("Italian", "Italian")
        assert prefs.restaurants == ("Joe's Pizza",)
        assert prefs.disliked == ("Cilantro",)
        assert prefs.mood_tags == ("cozy",)

    def test_build_preference_set_skips_none(self):
        prefs = build_preference_set([None, classify_line("Thai")])
        assert prefs.liked == ("Thai",)


def test_alternate_vocabulary_is_honoured():
    vocab = Vocabulary(dislike_triggers=("meh",), like_triggers=(), restaurant_triggers=())
    assert classify_line("meh about beets").category == PreferenceCategory.liked
    assert classify_line("meh about beets", vocab).category == PreferenceCategory.disliked
