from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from ..preferences.models import PreferenceSet, Suggestion, SummaryStats


class GenerationMethod(str, Enum):
    ai = "ai"
    local = "local"


class RecommendationRequest(BaseModel):
    preferences: PreferenceSet
    count: int = Field(default=12, ge=1, le=50)
    seed: int | None = Field(
        default=None, description="Seed for a reproducible batch",
    )


class RecommendationResponse(BaseModel):
    recommendations: list[Suggestion]
    message: str
    method: GenerationMethod
    total_candidates: int


class ParseTextRequest(BaseModel):
    text: str = Field(..., max_length=100_000)


class ParseUploadRequest(BaseModel):
    filename: str = Field(..., min_length=1)
    content: str = Field(..., max_length=1_000_000)


class ParseDocumentRequest(BaseModel):
    text: str = Field(..., max_length=1_000_000)


class CompileResponse(BaseModel):
    summary: str
    estimated_tokens: int
    stats: SummaryStats
