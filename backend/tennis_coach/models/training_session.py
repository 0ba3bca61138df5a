"""
Training session model
"""
import enum
import uuid

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from tennis_coach.database import Base, utcnow

NOTES_MAX_LENGTH = 1000


class SessionType(enum.IntEnum):
    INDIVIDUAL = 0
    GROUP = 1


class SessionStatus(enum.IntEnum):
    SCHEDULED = 0
    COMPLETED = 1
    CANCELLED = 2


class TrainingSession(Base):
    """Training sessions table"""
    __tablename__ = "training_sessions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    coach_id = Column(
        Uuid,
        ForeignKey("coaches.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    scheduled_at = Column(DateTime(timezone=True), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    type = Column(Enum(SessionType, name="session_type"), nullable=False)
    status = Column(
        Enum(SessionStatus, name="session_status"),
        nullable=False,
        default=SessionStatus.SCHEDULED,
    )
    notes = Column(String(NOTES_MAX_LENGTH))

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    coach = relationship("Coach", back_populates="training_sessions")
