"""
CRUD operations for training sessions
"""
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from tennis_coach.database import as_utc, utcnow
from tennis_coach.models.training_session import SessionStatus, SessionType, TrainingSession


def get_coach_sessions(db: Session, coach_id: uuid.UUID) -> List[TrainingSession]:
    """All sessions of a coach, most recently scheduled first"""
    return (
        db.query(TrainingSession)
        .filter(TrainingSession.coach_id == coach_id)
        .order_by(TrainingSession.scheduled_at.desc())
        .all()
    )


def get_coach_session(
    db: Session,
    coach_id: uuid.UUID,
    session_id: uuid.UUID,
    for_update: bool = False,
) -> Optional[TrainingSession]:
    """A single session, only when it belongs to the coach"""
    query = db.query(TrainingSession).filter(
        TrainingSession.id == session_id,
        TrainingSession.coach_id == coach_id,
    )
    if for_update:
        query = query.with_for_update()
    return query.first()


def create_session(
    db: Session,
    coach_id: uuid.UUID,
    scheduled_at: datetime,
    duration_minutes: int,
    session_type: SessionType,
    notes: Optional[str] = None,
) -> TrainingSession:
    """Create a session in the scheduled state"""
    db_session = TrainingSession(
        id=uuid.uuid4(),
        coach_id=coach_id,
        scheduled_at=as_utc(scheduled_at),
        duration_minutes=duration_minutes,
        type=session_type,
        status=SessionStatus.SCHEDULED,
        notes=notes,
        created_at=utcnow(),
    )

    db.add(db_session)
    db.commit()
    db.refresh(db_session)

    return db_session


def update_session_details(
    db: Session,
    db_session: TrainingSession,
    scheduled_at: datetime,
    duration_minutes: int,
    session_type: SessionType,
    notes: Optional[str] = None,
) -> TrainingSession:
    """Overwrite the editable fields of a session"""
    db_session.scheduled_at = as_utc(scheduled_at)
    db_session.duration_minutes = duration_minutes
    db_session.type = session_type
    db_session.notes = notes
    db_session.updated_at = utcnow()

    db.commit()
    db.refresh(db_session)

    return db_session


def set_session_status(
    db: Session,
    db_session: TrainingSession,
    status: SessionStatus,
) -> TrainingSession:
    """Move a session to a new status"""
    db_session.status = status
    db_session.updated_at = utcnow()

    db.commit()
    db.refresh(db_session)

    return db_session
