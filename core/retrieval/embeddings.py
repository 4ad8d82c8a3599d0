#!/usr/bin/env python3
"""
Embedding Service - Builds profile/vacancy documents and backfills vectors.

Rows without an embedding are simply skipped by semantic retrieval, so
backfilling is an optimisation that can run at any time.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from core.llm.interfaces import LLMProvider
from database.models import Vacancy, Volunteer

logger = logging.getLogger(__name__)


def vacancy_to_text(vacancy: Vacancy) -> str:
    """Combine the semantic signals of a vacancy into one document."""
    if vacancy.remote:
        location = "Remote possible"
    elif vacancy.city:
        location = f"Location: {vacancy.city}"
    else:
        location = ""

    lines = [
        f"Role: {vacancy.title}",
        vacancy.description or "",
        f"Sector: {', '.join(vacancy.categories)}" if vacancy.categories else "",
        f"Skills: {', '.join(vacancy.required_skills)}" if vacancy.required_skills else "",
        location,
    ]
    return "\n".join(line for line in lines if line)


def volunteer_to_text(volunteer: Volunteer) -> str:
    lines = [
        f"Volunteer: {volunteer.name}" if volunteer.name else "",
        volunteer.bio or "",
        f"Interests: {', '.join(volunteer.interests)}" if volunteer.interests else "",
        f"Skills: {', '.join(volunteer.skills)}" if volunteer.skills else "",
        f"Lives in: {volunteer.city}" if volunteer.city else "",
    ]
    return "\n".join(line for line in lines if line)


@dataclass
class BackfillResult:
    volunteers: int = 0
    vacancies: int = 0
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'volunteers': self.volunteers,
            'vacancies': self.vacancies,
            'errors': list(self.errors),
        }


class EmbeddingService:
    """Generates and stores embeddings for volunteers and vacancies."""

    def __init__(self, llm: LLMProvider):
        self.llm = llm

    def embed_volunteer(self, volunteer: Volunteer) -> bool:
        text = volunteer_to_text(volunteer)
        if not text:
            return False
        volunteer.embedding = self.llm.generate_embedding(text)
        return True

    def embed_vacancy(self, vacancy: Vacancy) -> bool:
        text = vacancy_to_text(vacancy)
        if not text:
            return False
        vacancy.embedding = self.llm.generate_embedding(text)
        return True

    def backfill(self, repos: Any, limit: int = 50) -> BackfillResult:
        """
        Embed up to `limit` volunteers and `limit` vacancies lacking a vector.

        One failing row does not stop the batch; its error is reported.
        """
        result = BackfillResult()

        for volunteer in repos.embeddings.volunteers_missing_embedding(limit):
            try:
                if self.embed_volunteer(volunteer):
                    result.volunteers += 1
            except Exception as e:
                logger.warning(f"Embedding volunteer {volunteer.id} failed: {e}")
                result.errors.append(f"volunteer {volunteer.id}: {e}")

        for vacancy in repos.embeddings.vacancies_missing_embedding(limit):
            try:
                if self.embed_vacancy(vacancy):
                    result.vacancies += 1
            except Exception as e:
                logger.warning(f"Embedding vacancy {vacancy.id} failed: {e}")
                result.errors.append(f"vacancy {vacancy.id}: {e}")

        logger.info(
            f"Embedding backfill: {result.volunteers} volunteers, "
            f"{result.vacancies} vacancies, {len(result.errors)} errors"
        )
        return result
