import uuid

from sqlalchemy import Column, Text, Integer, Float, TIMESTAMP, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from .base import Base


class Organisation(Base):
    """Organisation posting vacancies. SLA fields are derived from match response times."""
    __tablename__ = 'organisation'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    email = Column(Text)  # contact address for match notifications
    status = Column(Text, nullable=False, default='approved')  # approved|pending|rejected

    avg_response_hours = Column(Float)
    sla_score = Column(Integer)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    vacancies = relationship("Vacancy", back_populates="organisation", cascade="all, delete-orphan")
