#!/usr/bin/env python3
"""
Organisation SLA - Response time score derived from accepted matches.

avg_hours <= target_hours maps to 100, avg_hours >= zero_hours maps to 0,
linear in between. Only matches with a started_at take part.
"""
import logging
from datetime import datetime
from typing import Any, Callable, ContextManager, Iterable, Optional, Tuple

from core.config_loader import SlaConfig

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 60 * 60


def response_hours(created_at: datetime, started_at: datetime) -> float:
    return (started_at - created_at).total_seconds() / SECONDS_PER_HOUR


def compute_sla(
    durations_hours: Iterable[float],
    target_hours: float = 24.0,
    zero_hours: float = 168.0
) -> Optional[Tuple[float, int]]:
    """
    Average response time and SLA score.

    Returns:
        (avg_response_hours, sla_score) or None when there is nothing to average
    """
    durations = list(durations_hours)
    if not durations:
        return None

    avg = sum(durations) / len(durations)
    span = zero_hours - target_hours
    raw = 100.0 - (avg - target_hours) / span * 100.0 if span > 0 else (100.0 if avg <= target_hours else 0.0)
    score = max(0, min(100, int(round(raw))))
    return avg, score


class SlaService:
    """Recomputes and stores an organisation's SLA in its own unit of work."""

    def __init__(self, uow_factory: Callable[[], ContextManager[Any]], config: Optional[SlaConfig] = None):
        self.uow_factory = uow_factory
        self.config = config or SlaConfig()

    def recompute(self, organisation_id: Any) -> Optional[Tuple[float, int]]:
        with self.uow_factory() as repos:
            rows = repos.matches.response_times_for_organisation(organisation_id)
            result = compute_sla(
                (response_hours(created, started) for created, started in rows),
                self.config.target_hours,
                self.config.zero_hours
            )
            if result is None:
                return None

            avg, score = result
            repos.matches.update_organisation_sla(organisation_id, avg, score)

        logger.info(f"SLA for organisation {organisation_id}: {avg:.1f}h avg, score {score}")
        return result
