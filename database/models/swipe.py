import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, UniqueConstraint, Index, func
from sqlalchemy.dialects.postgresql import UUID, JSONB

from .base import Base

ACTOR_VOLUNTEER = 'volunteer'
ACTOR_ORGANISATION = 'organisation'

LIKE = 'LIKE'
DISLIKE = 'DISLIKE'
SUPER_LIKE = 'SUPER_LIKE'
DIRECTIONS = (LIKE, DISLIKE, SUPER_LIKE)
POSITIVE_DIRECTIONS = (LIKE, SUPER_LIKE)


class Swipe(Base):
    """
    A directional swipe by a volunteer on a vacancy, or by an organisation
    on a volunteer for one of its vacancies.

    One row per (actor_type, volunteer, vacancy); re-swiping updates it.
    Daily counts are derived from created_at, never stored. swiped_at moves
    on every re-swipe and orders "most recent swipe" for undo.
    """
    __tablename__ = 'swipe'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    actor_type = Column(Text, nullable=False)  # volunteer|organisation
    actor_id = Column(UUID(as_uuid=True), nullable=False)
    volunteer_id = Column(UUID(as_uuid=True), ForeignKey('volunteer.id', ondelete='CASCADE'), nullable=False)
    vacancy_id = Column(UUID(as_uuid=True), ForeignKey('vacancy.id', ondelete='CASCADE'), nullable=False)

    direction = Column(Text, nullable=False)  # LIKE|DISLIKE|SUPER_LIKE
    reason = Column(Text)
    score_snapshot = Column(JSONB)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    swiped_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.clock_timestamp())

    __table_args__ = (
        UniqueConstraint('actor_type', 'volunteer_id', 'vacancy_id', name='uq_swipe_actor_pair'),
        Index('idx_swipe_actor_created', 'actor_type', 'actor_id', 'created_at'),
        Index('idx_swipe_actor_swiped', 'actor_type', 'actor_id', 'swiped_at'),
        Index('idx_swipe_vacancy', 'vacancy_id'),
    )
