from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field

from groq import Groq
from pydantic import ValidationError

from ..preferences.compiler import compile_preferences, estimate_tokens
from ..preferences.models import PreferenceSet, SuggestionDraft
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "You are a helpful food recommendation assistant. Based on the following "
    "food preferences, generate 10-12 diverse food suggestions. Items with "
    '"(Nx)" indicate frequency - higher frequency means stronger preference.\n\n'
    "{summary}\n\n"
    "Generate suggestions as JSON:\n"
    '{{"recommendations":[{{"name":"string","type":"restaurant"|"cuisine"|"dish",'
    '"reason":"string (humorous, brief)","tags":["string"],'
    '"confidence":"high"|"medium"|"low"}}],"message":"string (fun intro)"}}'
)

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


@dataclass
class BackendResult:
    drafts: list[SuggestionDraft] = field(default_factory=list)
    message: str = ""


def build_prompt(preferences: PreferenceSet) -> str:
    """Embed the compiled summary in the fixed JSON-only prompt."""
    summary = compile_preferences(preferences).to_prompt_text()
    return PROMPT_TEMPLATE.format(summary=summary)


def parse_backend_content(content: str) -> BackendResult | None:
    """
    Pull the first JSON object out of a completion and validate its records.

    Records that fail validation are skipped; returns None when nothing
    usable remains.
    """
    match = _JSON_OBJECT_RE.search(content or "")
    if not match:
        return None
    parsed = json.loads(match.group(0))

    drafts: list[SuggestionDraft] = []
    for record in parsed.get("recommendations", []) or []:
        if not isinstance(record, dict):
            continue
        try:
            drafts.append(SuggestionDraft.model_validate(record))
        except ValidationError:
            logger.debug("Skipping invalid backend record: %r", record)

    if not drafts:
        return None
    return BackendResult(drafts=drafts, message=str(parsed.get("message") or ""))


def suggest(
    preferences: PreferenceSet,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> BackendResult | None:
    """
    Ask Groq for suggestions based on the compiled preference summary.

    Returns None on any failure (disabled, no key, timeout, API error,
    bad JSON, no valid records).
    """
    if not config.available:
        return None

    prompt = build_prompt(preferences)
    logger.info("Calling suggestion backend (~%d prompt tokens)", estimate_tokens(prompt))

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=config.max_tokens,
            temperature=config.temperature,
            response_format={"type": "json_object"},
        )

        content = response.choices[0].message.content or ""
        result = parse_backend_content(content)
        if result is None:
            logger.warning("Suggestion backend returned no usable recommendations")
        return result

    except Exception:
        logger.warning("Groq LLM call failed, falling back to local generation", exc_info=True)
        return None
