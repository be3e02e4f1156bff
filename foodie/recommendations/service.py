from __future__ import annotations

import logging
import random
import time

from ..analytics.store import record_recommendations
from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import suggest
from ..preferences.models import PreferenceSet
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .engine import assign_ids, build_candidates, generate, intro_message
from .models import GenerationMethod, RecommendationResponse

logger = logging.getLogger(__name__)

AI_UNAVAILABLE_MESSAGE = "AI was unavailable, but here's what we found based on the preferences:"


def get_recommendations(
    preferences: PreferenceSet,
    count: int = DEFAULT_ENGINE_CONFIG.default_count,
    rng: random.Random | None = None,
    llm_config: LLMConfig = DEFAULT_LLM_CONFIG,
    engine_config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> RecommendationResponse:
    """
    Try the external backend when enabled, otherwise (or on failure)
    generate locally. An empty batch is returned as-is; callers decide how
    to surface "not enough data".
    """
    start_time = time.time()
    rng = rng if rng is not None else random.Random()
    total_candidates = len(build_candidates(preferences))

    backend_attempted = llm_config.available
    result = suggest(preferences, llm_config) if backend_attempted else None

    if result is not None:
        method = GenerationMethod.ai
        recommendations = assign_ids(result.drafts, rng, engine_config)[:count]
        message = result.message or intro_message(preferences, rng, engine_config)
    else:
        method = GenerationMethod.local
        recommendations = generate(preferences, count, rng, config=engine_config)
        message = intro_message(preferences, rng, engine_config)
        if backend_attempted:
            message = AI_UNAVAILABLE_MESSAGE

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        "Generated %d recommendations via %s in %.1f ms (candidates=%d)",
        len(recommendations), method.value, elapsed_ms, total_candidates,
    )
    response = RecommendationResponse(
        recommendations=recommendations,
        message=message,
        method=method,
        total_candidates=total_candidates,
    )
    record_recommendations(preferences, response, backend_attempted, elapsed_ms)
    return response
