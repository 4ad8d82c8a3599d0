"""Swipes Module - Swipe recording, match state machine and SLA."""
from core.swipes.swipe_service import SwipeService, SwipeResult
from core.swipes.match_service import MatchService, MatchTransitionResult, apply_transition
from core.swipes.sla import SlaService, compute_sla
from core.swipes.side_effects import SideEffectRunner, MatchSideEffects

__all__ = [
    'SwipeService',
    'SwipeResult',
    'MatchService',
    'MatchTransitionResult',
    'apply_transition',
    'SlaService',
    'compute_sla',
    'SideEffectRunner',
    'MatchSideEffects',
]
