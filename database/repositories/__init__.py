from database.repositories.base import BaseRepository
from database.repositories.volunteer import VolunteerRepository
from database.repositories.vacancy import VacancyRepository
from database.repositories.swipe import SwipeRepository
from database.repositories.match import MatchRepository
from database.repositories.settings import SettingsRepository, DatabaseWeightsBackend
from database.repositories.embedding import EmbeddingRepository

__all__ = [
    'BaseRepository',
    'VolunteerRepository',
    'VacancyRepository',
    'SwipeRepository',
    'MatchRepository',
    'SettingsRepository',
    'DatabaseWeightsBackend',
    'EmbeddingRepository',
]
