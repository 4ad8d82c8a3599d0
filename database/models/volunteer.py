import uuid

from sqlalchemy import Column, Text, Integer, Float, Date, TIMESTAMP, func, Index
from sqlalchemy.dialects.postgresql import UUID, JSONB, ARRAY
from sqlalchemy.orm import relationship
from pgvector.sqlalchemy import Vector

from .base import Base, EMBEDDING_DIMENSIONS


class Volunteer(Base):
    """
    Volunteer profile with the questionnaire answers used for matching.

    functions_profile holds the six-dimension motivation inventory (1-5),
    values_profile the optional ten-dimension values model (0-5). Both are
    stored as submitted and parsed at ranking time.
    """
    __tablename__ = 'volunteer'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text)
    email = Column(Text, unique=True)
    bio = Column(Text)
    status = Column(Text, nullable=False, default='approved')  # approved|pending|blocked

    # Motivation
    functions_profile = Column(JSONB)
    values_profile = Column(JSONB)
    interests = Column(ARRAY(Text), nullable=False, default=list)
    skills = Column(ARRAY(Text), nullable=False, default=list)

    # Location
    city = Column(Text)
    lat = Column(Float)
    lon = Column(Float)
    max_distance_km = Column(Float, nullable=False, default=25.0)

    # Engagement
    streak_days = Column(Integer, nullable=False, default=0)
    last_active_date = Column(Date)

    embedding = Column(Vector(EMBEDDING_DIMENSIONS))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    matches = relationship("Match", back_populates="volunteer", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_volunteer_status', 'status'),
        Index('idx_volunteer_embedding_hnsw', 'embedding', postgresql_using='hnsw', postgresql_with={'m': 16, 'ef_construction': 64}, postgresql_ops={'embedding': 'vector_cosine_ops'}),
    )
