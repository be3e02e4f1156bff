import json
from unittest.mock import MagicMock, patch

from foodie.llm.config import LLMConfig
from foodie.llm.groq_client import build_prompt, parse_backend_content, suggest
from foodie.preferences.models import Confidence, ItemCategory, PreferenceSet

SAMPLE_PREFERENCES = PreferenceSet(
    liked=["Italian", "Italian", "Thai"],
    restaurants=["Joe's Pizza"],
    disliked=["Cilantro"],
)

ENABLED_CONFIG = LLMConfig(api_key="test-key", enabled=True)
DISABLED_CONFIG = LLMConfig(api_key="test-key", enabled=False)


def _mock_groq_response(content: str) -> MagicMock:
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


def test_build_prompt_embeds_compiled_summary():
    prompt = build_prompt(SAMPLE_PREFERENCES)
    assert "Liked foods/cuisines: Italian (2x), Thai" in prompt
    assert "Favorite restaurants: Joe's Pizza" in prompt
    assert "Dislikes/Avoid: Cilantro" in prompt
    assert '{"recommendations":[{"name":"string"' in prompt


def test_build_prompt_is_deterministic():
    assert build_prompt(SAMPLE_PREFERENCES) == build_prompt(SAMPLE_PREFERENCES)


@patch("foodie.llm.groq_client.Groq")
def test_suggest_returns_drafts(mock_groq_cls):
    llm_response = json.dumps({
        "recommendations": [
            {"name": "Joe's Pizza", "type": "restaurant", "reason": "A regular haunt.",
             "tags": ["pizza"], "confidence": "high"},
            {"name": "Green Curry", "type": "dish", "reason": "Thai fan.",
             "tags": ["thai", "curry"], "confidence": "medium"},
        ],
        "message": "Here you go!",
    })
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response(llm_response)

    result = suggest(SAMPLE_PREFERENCES, config=ENABLED_CONFIG)

    assert result.message == "Here you go!"
    assert [d.name for d in result.drafts] == ["Joe's Pizza", "Green Curry"]
    assert result.drafts[0].category == ItemCategory.restaurant
    assert result.drafts[0].justification == "A regular haunt."
    assert result.drafts[1].confidence == Confidence.medium


@patch("foodie.llm.groq_client.Groq")
def test_suggest_skips_invalid_records(mock_groq_cls):
    llm_response = json.dumps({
        "recommendations": [
            {"name": "", "type": "dish"},
            {"name": "Pho", "type": "spaceship"},
            "not a record",
            {"name": "Ramen", "type": "dish", "reason": "Noodles."},
        ],
        "message": "",
    })
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response(llm_response)

    result = suggest(SAMPLE_PREFERENCES, config=ENABLED_CONFIG)

    assert [d.name for d in result.drafts] == ["Ramen"]


@patch("foodie.llm.groq_client.Groq")
def test_suggest_fallback_on_api_error(mock_groq_cls):
    mock_groq_cls.return_value.chat.completions.create.side_effect = Exception("API timeout")

    assert suggest(SAMPLE_PREFERENCES, config=ENABLED_CONFIG) is None


@patch("foodie.llm.groq_client.Groq")
def test_suggest_fallback_on_bad_json(mock_groq_cls):
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response("not valid json{{{")

    assert suggest(SAMPLE_PREFERENCES, config=ENABLED_CONFIG) is None


@patch("foodie.llm.groq_client.Groq")
def test_suggest_fallback_on_empty_recommendations(mock_groq_cls):
    content = json.dumps({"recommendations": [], "message": "Nothing"})
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response(content)

    assert suggest(SAMPLE_PREFERENCES, config=ENABLED_CONFIG) is None


@patch("foodie.llm.groq_client.Groq")
def test_suggest_disabled(mock_groq_cls):
    assert suggest(SAMPLE_PREFERENCES, config=DISABLED_CONFIG) is None
    mock_groq_cls.assert_not_called()


def test_suggest_without_api_key():
    assert suggest(SAMPLE_PREFERENCES, config=LLMConfig(api_key="", enabled=True)) is None


def test_parse_backend_content_extracts_wrapped_json():
    content = 'Sure! Here it is:\n{"recommendations": [{"name": "Tacos", "type": "Cuisine"}], "message": "Hi"}\nEnjoy.'
    result = parse_backend_content(content)
    assert result.drafts[0].name == "Tacos"
    assert result.drafts[0].category == ItemCategory.cuisine
    assert result.message == "Hi"


def test_parse_backend_content_without_json():
    assert parse_backend_content("no braces here") is None
