import uuid

from sqlalchemy import Column, Text, Boolean, Float, TIMESTAMP, ForeignKey, func, Index
from sqlalchemy.dialects.postgresql import UUID, ARRAY
from sqlalchemy.orm import relationship
from pgvector.sqlalchemy import Vector

from .base import Base, EMBEDDING_DIMENSIONS


class Vacancy(Base):
    __tablename__ = 'vacancy'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    organisation_id = Column(UUID(as_uuid=True), ForeignKey('organisation.id', ondelete='CASCADE'), nullable=False)

    title = Column(Text, nullable=False)
    description = Column(Text)
    categories = Column(ARRAY(Text), nullable=False, default=list)
    required_skills = Column(ARRAY(Text), nullable=False, default=list)

    # Location
    city = Column(Text)
    lat = Column(Float)
    lon = Column(Float)
    remote = Column(Boolean, nullable=False, default=False)

    status = Column(Text, nullable=False, default='active')  # active|paused|closed

    embedding = Column(Vector(EMBEDDING_DIMENSIONS))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    organisation = relationship("Organisation", back_populates="vacancies")
    matches = relationship("Match", back_populates="vacancy", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_vacancy_status_created', 'status', 'created_at'),
        Index('idx_vacancy_organisation', 'organisation_id'),
        Index('idx_vacancy_embedding_hnsw', 'embedding', postgresql_using='hnsw', postgresql_with={'m': 16, 'ef_construction': 64}, postgresql_ops={'embedding': 'vector_cosine_ops'}),
    )
