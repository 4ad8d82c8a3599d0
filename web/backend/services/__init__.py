"""Business logic services."""

from .ranking_service import RankingService
