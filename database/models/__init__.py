from .base import Base, EMBEDDING_DIMENSIONS
from .volunteer import Volunteer
from .organisation import Organisation
from .vacancy import Vacancy
from .swipe import Swipe
from .match import Match, Conversation, Message
from .settings import AppSettings

__all__ = [
    'Base',
    'EMBEDDING_DIMENSIONS',
    'Volunteer',
    'Organisation',
    'Vacancy',
    'Swipe',
    'Match',
    'Conversation',
    'Message',
    'AppSettings',
]
