import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, UniqueConstraint, Index, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from .base import Base

PENDING = 'PENDING'
ACCEPTED = 'ACCEPTED'
REJECTED = 'REJECTED'
COMPLETED = 'COMPLETED'

ALLOWED_TRANSITIONS = {
    PENDING: (ACCEPTED, REJECTED),
    ACCEPTED: (COMPLETED,),
    REJECTED: (),
    COMPLETED: (),
}


class Match(Base):
    """
    Interest between a volunteer and a vacancy.

    PENDING -> ACCEPTED | REJECTED, ACCEPTED -> COMPLETED. started_at is
    stamped once on acceptance and anchors the organisation SLA.
    """
    __tablename__ = 'match'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    volunteer_id = Column(UUID(as_uuid=True), ForeignKey('volunteer.id', ondelete='CASCADE'), nullable=False)
    vacancy_id = Column(UUID(as_uuid=True), ForeignKey('vacancy.id', ondelete='CASCADE'), nullable=False)

    status = Column(Text, nullable=False, default=PENDING)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    started_at = Column(TIMESTAMP(timezone=True))
    resolved_at = Column(TIMESTAMP(timezone=True))

    volunteer = relationship("Volunteer", back_populates="matches")
    vacancy = relationship("Vacancy", back_populates="matches")
    conversation = relationship("Conversation", uselist=False, back_populates="match", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint('volunteer_id', 'vacancy_id', name='uq_match_pair'),
        Index('idx_match_vacancy_status', 'vacancy_id', 'status'),
    )


class Conversation(Base):
    """Chat thread opened when a match is accepted. One per match."""
    __tablename__ = 'conversation'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    match_id = Column(UUID(as_uuid=True), ForeignKey('match.id', ondelete='CASCADE'), nullable=False, unique=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    match = relationship("Match", back_populates="conversation")
    messages = relationship("Message", back_populates="conversation", cascade="all, delete-orphan", order_by="Message.created_at")


class Message(Base):
    __tablename__ = 'message'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    conversation_id = Column(UUID(as_uuid=True), ForeignKey('conversation.id', ondelete='CASCADE'), nullable=False)
    sender_id = Column(UUID(as_uuid=True))  # NULL for system messages
    type = Column(Text, nullable=False, default='TEXT')  # TEXT|SYSTEM
    content = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    conversation = relationship("Conversation", back_populates="messages")

    __table_args__ = (
        Index('idx_message_conversation_created', 'conversation_id', 'created_at'),
    )
