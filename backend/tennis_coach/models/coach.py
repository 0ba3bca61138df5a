"""
Coach account model
"""
import uuid

from sqlalchemy import Column, DateTime, String, Uuid
from sqlalchemy.orm import relationship

from tennis_coach.database import Base, utcnow


class Coach(Base):
    """Coach accounts table"""
    __tablename__ = "coaches"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, index=True, nullable=False)  # stored lowercase
    password_hash = Column(String, nullable=False)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    training_sessions = relationship(
        "TrainingSession",
        back_populates="coach",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
