from __future__ import annotations

import random
from typing import Callable

from fastapi import FastAPI, HTTPException

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_parse
from .preferences.compiler import compile_preferences, estimate_tokens
from .preferences.ingest import ParseError, parse_document, parse_text, parse_upload
from .preferences.models import PreferenceSet
from .recommendations.models import (
    CompileResponse,
    ParseDocumentRequest,
    ParseTextRequest,
    ParseUploadRequest,
    RecommendationRequest,
    RecommendationResponse,
)
from .recommendations.service import get_recommendations

app = FastAPI(title="Food Preference Recommendation API", version="1.0.0")

NOT_ENOUGH_DATA = "No recommendations could be generated. Please add more food preferences."


def _run_parser(source: str, parser: Callable[[], PreferenceSet]) -> PreferenceSet:
    try:
        preferences = parser()
    except ParseError as exc:
        record_parse(source, error=str(exc))
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    record_parse(source, preferences)
    return preferences


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Parsing ──────────────────────────────────────────────────────────────


@app.post("/parse/text", response_model=PreferenceSet)
def parse_text_endpoint(body: ParseTextRequest) -> PreferenceSet:
    return _run_parser("text", lambda: parse_text(body.text))


@app.post("/parse/document", response_model=PreferenceSet)
def parse_document_endpoint(body: ParseDocumentRequest) -> PreferenceSet:
    return _run_parser("document", lambda: parse_document(body.text))


@app.post("/parse/upload", response_model=PreferenceSet)
def parse_upload_endpoint(body: ParseUploadRequest) -> PreferenceSet:
    return _run_parser("upload", lambda: parse_upload(body.filename, body.content))


# ── Compilation ──────────────────────────────────────────────────────────


@app.post("/compile", response_model=CompileResponse)
def compile_endpoint(body: PreferenceSet) -> CompileResponse:
    compiled = compile_preferences(body)
    summary = compiled.to_prompt_text()
    return CompileResponse(
        summary=summary,
        estimated_tokens=estimate_tokens(summary),
        stats=compiled.stats,
    )


# ── Recommendations ──────────────────────────────────────────────────────


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(body: RecommendationRequest) -> RecommendationResponse:
    rng = random.Random(body.seed) if body.seed is not None else None
    response = get_recommendations(body.preferences, count=body.count, rng=rng)
    if not response.recommendations:
        raise HTTPException(status_code=422, detail=NOT_ENOUGH_DATA)
    return response


# ── Analytics ────────────────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())
