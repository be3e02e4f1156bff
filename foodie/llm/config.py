from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# GROQ_API_KEY and FOODIE_* settings may live in a .env at the repo root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class LLMConfig:
    """Settings for the optional Groq suggestion backend.

    The backend is opt-in: local generation is used unless FOODIE_USE_AI
    is set and an API key is available.
    """

    api_key: str = os.getenv("GROQ_API_KEY", "")
    model: str = os.getenv("FOODIE_LLM_MODEL", "llama-3.3-70b-versatile")
    timeout: float = 10.0
    max_tokens: int = 2048
    temperature: float = 0.7
    enabled: bool = _env_flag("FOODIE_USE_AI")

    @property
    def available(self) -> bool:
        return self.enabled and bool(self.api_key)


DEFAULT_LLM_CONFIG = LLMConfig()
