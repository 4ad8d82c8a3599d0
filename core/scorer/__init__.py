#!/usr/bin/env python3
"""
Scoring Module - Exact re-ranking of retrieved candidates.

Public API:
- ScoringService: Scores pairs and ranks candidate lists
- ScoringWeightsStore / ScoringWeights: Runtime-tunable weights
- MatchScore: Scored result with component breakdown

Modules:
- components.py: Motivation, distance, skill and freshness scorers
- fairness.py: Organisation exposure multiplier
- weights.py: Weights model, validation and TTL cache
- models.py: Data structures (ComponentScore, MatchScore)
- service.py: ScoringService orchestrator
"""

from core.scorer.models import ComponentScore, MatchScore, RankedVacancy, RankedVolunteer
from core.scorer.weights import ScoringWeights, ScoringWeightsStore, validate_weights
from core.scorer.service import ScoringService

__all__ = [
    'ScoringService',
    'ScoringWeights',
    'ScoringWeightsStore',
    'validate_weights',
    'ComponentScore',
    'MatchScore',
    'RankedVacancy',
    'RankedVolunteer',
]
