#!/usr/bin/env python3
"""
Retrieval Strategies - First stage of candidate retrieval.

Each strategy narrows the open pool to a bounded candidate list. The
pipeline asks strategies in order and uses the first available one:

- SemanticRetriever: pgvector cosine ANN over precomputed embeddings
- RecencyRetriever:  newest first, always available
"""
from abc import ABC, abstractmethod
import logging
from typing import Any, Iterable, List, Optional

from database.models import Vacancy, Volunteer
from database.repositories import VacancyRepository, VolunteerRepository

logger = logging.getLogger(__name__)


class RetrievalStrategy(ABC):
    """Selects a bounded candidate set for exact re-ranking."""

    name = "base"

    @abstractmethod
    def is_available(self, subject_embedding: Optional[List[float]]) -> bool:
        pass

    @abstractmethod
    def fetch_vacancies(
        self,
        repo: VacancyRepository,
        subject_embedding: Optional[List[float]],
        take: int,
        exclude_ids: Iterable[Any]
    ) -> List[Vacancy]:
        pass

    @abstractmethod
    def fetch_volunteers(
        self,
        repo: VolunteerRepository,
        subject_embedding: Optional[List[float]],
        take: int,
        exclude_ids: Iterable[Any]
    ) -> List[Volunteer]:
        pass


class SemanticRetriever(RetrievalStrategy):
    """
    Approximate nearest neighbours by embedding cosine distance.

    Fetches max(pool_size, take * pool_multiplier) rows; exact scoring
    decides the final order. Runs inside a savepoint so a failing vector
    query leaves the surrounding transaction usable for the fallback.
    """

    name = "semantic"

    def __init__(self, pool_size: int = 80, pool_multiplier: int = 4, enabled: bool = True):
        self.pool_size = pool_size
        self.pool_multiplier = pool_multiplier
        self.enabled = enabled

    def is_available(self, subject_embedding: Optional[List[float]]) -> bool:
        return self.enabled and subject_embedding is not None and len(subject_embedding) > 0

    def _limit(self, take: int) -> int:
        return max(self.pool_size, take * self.pool_multiplier)

    def fetch_vacancies(self, repo, subject_embedding, take, exclude_ids):
        with repo.db.begin_nested():
            rows = repo.find_similar(list(subject_embedding), self._limit(take), exclude_ids)
        return [vacancy for vacancy, _ in rows]

    def fetch_volunteers(self, repo, subject_embedding, take, exclude_ids):
        with repo.db.begin_nested():
            rows = repo.find_similar(list(subject_embedding), self._limit(take), exclude_ids)
        return [volunteer for volunteer, _ in rows]


class RecencyRetriever(RetrievalStrategy):
    """Newest open records first, over-fetching to survive the distance filter."""

    name = "recency"

    def __init__(self, pool_multiplier: int = 4):
        self.pool_multiplier = pool_multiplier

    def is_available(self, subject_embedding: Optional[List[float]]) -> bool:
        return True

    def fetch_vacancies(self, repo, subject_embedding, take, exclude_ids):
        return repo.find_recent(take * self.pool_multiplier, exclude_ids)

    def fetch_volunteers(self, repo, subject_embedding, take, exclude_ids):
        return repo.find_recent(take * self.pool_multiplier, exclude_ids)
