"""Retrieval Module - Candidate retrieval strategies and pipeline."""
from core.retrieval.strategies import RetrievalStrategy, SemanticRetriever, RecencyRetriever
from core.retrieval.pipeline import (
    CandidateRetrievalPipeline,
    to_volunteer_profile,
    to_vacancy_candidate,
    within_travel_distance,
)

__all__ = [
    'RetrievalStrategy',
    'SemanticRetriever',
    'RecencyRetriever',
    'CandidateRetrievalPipeline',
    'to_volunteer_profile',
    'to_vacancy_candidate',
    'within_travel_distance',
]
