#!/usr/bin/env python3
"""
Scoring Weights Store - Runtime-tunable weights with a TTL cache.

Reads are served from an immutable (weights, loaded_at) snapshot that is
replaced with a single attribute assignment, so readers never take the
write lock. Updates are validated, persisted through the backend and then
invalidate the snapshot so the next read reloads.
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from pydantic import BaseModel, Field, ValidationError, model_validator

from core.exceptions import InvalidWeightsException

logger = logging.getLogger(__name__)

WEIGHT_SUM_TOLERANCE = 0.005
DEFAULT_TTL_SECONDS = 60.0


class ScoringWeights(BaseModel):
    """Component weights plus the tunable freshness and fairness parameters."""
    motivation: float = Field(default=0.40, ge=0.0, le=1.0)
    distance: float = Field(default=0.30, ge=0.0, le=1.0)
    skill: float = Field(default=0.20, ge=0.0, le=1.0)
    freshness: float = Field(default=0.10, ge=0.0, le=1.0)
    freshness_window_days: int = Field(default=60, ge=1, le=365)
    small_org_threshold: int = Field(default=10, ge=1)
    large_org_threshold: int = Field(default=150, ge=1)

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def _check_invariants(self) -> "ScoringWeights":
        total = self.motivation + self.distance + self.skill + self.freshness
        # A sum exactly WEIGHT_SUM_TOLERANCE away from 1.0 is accepted
        if round(abs(total - 1.0), 9) > WEIGHT_SUM_TOLERANCE:
            raise ValueError(
                f"Component weights must sum to 1.0 (got {total:.3f})"
            )
        if self.large_org_threshold <= self.small_org_threshold:
            raise ValueError(
                "large_org_threshold must be greater than small_org_threshold"
            )
        return self


def validate_weights(data: Dict[str, Any]) -> ScoringWeights:
    """
    Build ScoringWeights from a plain dict.

    Raises:
        InvalidWeightsException: With the first validation message
    """
    try:
        return ScoringWeights(**data)
    except ValidationError as e:
        errors = e.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(p) for p in first.get('loc', ()))
        message = first.get('msg', str(e))
        if field:
            message = f"{field}: {message}"
        raise InvalidWeightsException(message) from e


class WeightsBackend(Protocol):
    """Authoritative storage for the weights (see database/repositories/settings.py)."""

    def load(self) -> Optional[Dict[str, Any]]:
        ...

    def save(self, data: Dict[str, Any]) -> None:
        ...


class ScoringWeightsStore:
    """
    Single-writer, many-reader cache over a WeightsBackend.

    get() never raises: an unreachable or corrupt backend yields the
    defaults and is retried after the TTL.
    """

    def __init__(
        self,
        backend: WeightsBackend,
        defaults: Optional[ScoringWeights] = None,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        self.backend = backend
        self.defaults = defaults or ScoringWeights()
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._snapshot: Optional[Tuple[ScoringWeights, float]] = None
        self._write_lock = threading.Lock()

    def get(self) -> ScoringWeights:
        snapshot = self._snapshot
        if snapshot is not None and self._clock() - snapshot[1] < self.ttl_seconds:
            return snapshot[0]

        weights = self._load()
        self._snapshot = (weights, self._clock())
        return weights

    def invalidate(self) -> None:
        self._snapshot = None

    def update(self, **changes: Any) -> ScoringWeights:
        """
        Merge changes into the current weights, validate and persist.

        Args:
            **changes: Any subset of ScoringWeights fields

        Returns:
            The accepted weights

        Raises:
            InvalidWeightsException: If the merged weights are invalid.
                Nothing is persisted in that case.
        """
        with self._write_lock:
            merged = self._load().model_dump()
            merged.update({k: v for k, v in changes.items() if v is not None})
            weights = validate_weights(merged)

            self.backend.save(weights.model_dump())
            self.invalidate()

        logger.info(f"Scoring weights updated: {weights.model_dump()}")
        return weights

    def _load(self) -> ScoringWeights:
        try:
            stored = self.backend.load()
        except Exception as e:
            logger.warning(f"Could not load scoring weights, using defaults: {e}")
            return self.defaults

        if not stored:
            return self.defaults

        try:
            return ScoringWeights(**{**self.defaults.model_dump(), **stored})
        except (ValidationError, TypeError) as e:
            logger.warning(f"Stored scoring weights are invalid, using defaults: {e}")
            return self.defaults
