#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.

All routers reach services through get_app_context(), so tests can swap
the whole wiring with app.dependency_overrides.
"""

import functools
from fastapi import Depends

from core.app_context import AppContext
from core.config_loader import get_config
from database.uow import swipe_uow
from .services.ranking_service import RankingService

_context: AppContext = None


def get_app_context() -> AppContext:
    """
    FastAPI dependency returning the process-wide AppContext.

    Built lazily on first use so importing the app does not open a
    database connection.
    """
    global _context
    if _context is None:
        from database.database import SessionLocal
        _context = AppContext.build(get_config(), SessionLocal)
    return _context


def get_ranking_service(ctx: AppContext = Depends(get_app_context)) -> RankingService:
    return RankingService(
        pipeline=ctx.retrieval_pipeline,
        scoring=ctx.scoring_service,
        uow_factory=functools.partial(swipe_uow, ctx.session_factory),
        retrieval_config=ctx.config.matching.retrieval
    )


def shutdown_app_context() -> None:
    """Drain the side-effect runner on application shutdown."""
    global _context
    if _context is not None:
        _context.side_effect_runner.shutdown()
        _context = None
