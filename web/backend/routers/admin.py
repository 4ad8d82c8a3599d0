#!/usr/bin/env python3
"""
Admin endpoints - scoring weights and embedding maintenance.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from core.app_context import AppContext
from ..dependencies import get_app_context
from ..models.requests import ScoringWeightsUpdate, EmbeddingBackfillRequest
from ..models.responses import (
    ScoringWeightsResponse,
    EmbeddingCoverageResponse,
    EmbeddingBackfillResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/scoring-weights", response_model=ScoringWeightsResponse)
def get_scoring_weights(ctx: AppContext = Depends(get_app_context)):
    """
    Get the scoring weights currently in effect.

    Served from the weights cache, so a value written by another process
    may take up to the cache TTL to appear.
    """
    return ScoringWeightsResponse(**ctx.weights_store.get().model_dump())


@router.patch("/scoring-weights", response_model=ScoringWeightsResponse)
def update_scoring_weights(
    update: ScoringWeightsUpdate,
    ctx: AppContext = Depends(get_app_context)
):
    """
    Update scoring weights.

    Omitted fields keep their current value. The four component weights
    must sum to 1.0 and large_org_threshold must exceed small_org_threshold;
    violations return 400 and nothing is stored.
    """
    changes = update.model_dump(exclude_none=True)
    weights = ctx.weights_store.update(**changes)
    logger.info(f"Scoring weights updated: {changes}")
    return ScoringWeightsResponse(**weights.model_dump())


@router.get("/embeddings", response_model=EmbeddingCoverageResponse)
def get_embedding_coverage(ctx: AppContext = Depends(get_app_context)):
    """How many volunteers and vacancies have a semantic embedding."""
    with ctx.uow() as repos:
        coverage = repos.embeddings.coverage()
    return EmbeddingCoverageResponse(
        enabled=ctx.embedding_service is not None,
        coverage=coverage
    )


@router.post("/embeddings", response_model=EmbeddingBackfillResponse)
def backfill_embeddings(
    request: EmbeddingBackfillRequest = EmbeddingBackfillRequest(),
    ctx: AppContext = Depends(get_app_context)
):
    """
    Embed a batch of volunteers and vacancies that have no embedding yet.

    Requires an LLM API key; without one semantic retrieval stays off and
    this returns 503.
    """
    if ctx.embedding_service is None:
        raise HTTPException(status_code=503, detail="Embeddings are not configured (no LLM API key)")

    with ctx.uow() as repos:
        result = ctx.embedding_service.backfill(repos, limit=request.limit)
    return EmbeddingBackfillResponse(**result.to_dict())
