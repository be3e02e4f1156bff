from __future__ import annotations

from dataclasses import dataclass

from ..preferences.models import ItemCategory


@dataclass(frozen=True)
class ConfidenceThresholds:
    high_ratio: float = 0.3
    high_count: int = 10
    medium_ratio: float = 0.1
    medium_count: int = 3


@dataclass(frozen=True)
class EngineConfig:
    """Tone and tuning for the local recommendation engine.

    Templates accept ``{name}`` and ``{count}`` placeholders.
    """

    thresholds: ConfidenceThresholds = ConfidenceThresholds()

    category_templates: tuple[tuple[ItemCategory, tuple[str, ...]], ...] = (
        (ItemCategory.restaurant, (
            "They've been here {count} times. At this point, the staff probably knows the order.",
            "With {count} visits, this place is basically a second home.",
            "Ordered from here {count} times - clearly a favorite!",
            "{count} orders can't be wrong. This is a safe bet.",
            "They keep coming back ({count}x). Must be doing something right.",
            "A {count}-time repeat customer. The odds are in your favor.",
        )),
        (ItemCategory.cuisine, (
            "Into {name} food - mentioned it {count} times in the preferences.",
            "{name} appears {count} times. Definitely a thing for it.",
            "With {count} mentions of {name}, this is a solid choice.",
            "{name} ({count}x) - a recurring theme in these food preferences.",
            "Clearly loves {name} cuisine based on {count} data points.",
        )),
        (ItemCategory.dish, (
            "This has come up {count} times. They know what they like.",
            "{count} mentions of this dish. It's a winner.",
            "Appears {count} times in the preferences - pretty telling!",
            "Mentioned this {count} times. Take the hint!",
        )),
    )

    wild_card_templates: tuple[str, ...] = (
        "Only mentioned once, but hey, variety is the spice of life.",
        "A wild card pick! It got a mention, so there's hope.",
        "Not the usual go-to, but worth a shot.",
        "Throwing this in for some variety. Fingers crossed!",
        "A less frequent choice, but sometimes you gotta take risks.",
    )

    fallback_templates: tuple[str, ...] = (
        "Based on the general preferences, this could work.",
        "Matches the vibe based on the data.",
        "The algorithm thinks this might land.",
        "A calculated suggestion based on the taste profile.",
    )

    intro_templates: tuple[str, ...] = (
        "Analyzed {total} data points. Here's what the algorithm thinks:",
        "Based on {total} entries, these should work:",
        "Crunched the numbers from {total} preferences. Try these:",
        "{total} data points don't lie. Here are your best bets:",
        "The data has spoken ({total} entries). Presenting your options:",
        "After analyzing {total} food choices, here's what stands out:",
    )
    not_much_data_message: str = "Not much data to work with, but here's what we've got:"
    min_intro_entries: int = 5

    max_tags: int = 4
    default_count: int = 12
    id_prefix: str = "rec"

    def templates_for(self, category: ItemCategory) -> tuple[str, ...]:
        for templated_category, templates in self.category_templates:
            if templated_category == category:
                return templates
        return self.fallback_templates


DEFAULT_ENGINE_CONFIG = EngineConfig()
