"""
Training session lifecycle

Scheduled sessions can be completed or cancelled. Cancelled is final:
such a session cannot be edited, cancelled again or completed. A
completed session can still be edited and cancelled.
"""
import logging
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from tennis_coach.crud import training_session as crud_session
from tennis_coach.errors import ConflictError, NotFoundError
from tennis_coach.models.training_session import SessionStatus, SessionType, TrainingSession
from tennis_coach.security import CoachPrincipal

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Training session not found"


def _load_owned(
    db: Session,
    principal: CoachPrincipal,
    session_id: uuid.UUID,
    for_update: bool = False,
) -> TrainingSession:
    # A foreign-owned session is reported exactly like a missing one
    session = crud_session.get_coach_session(
        db, principal.coach_id, session_id, for_update=for_update
    )
    if session is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return session


def list_sessions(db: Session, principal: CoachPrincipal) -> List[TrainingSession]:
    return crud_session.get_coach_sessions(db, principal.coach_id)


def get_session(db: Session, principal: CoachPrincipal, session_id: uuid.UUID) -> TrainingSession:
    return _load_owned(db, principal, session_id)


def create_session(
    db: Session,
    principal: CoachPrincipal,
    scheduled_at: datetime,
    duration_minutes: int,
    session_type: SessionType,
    notes: Optional[str] = None,
) -> TrainingSession:
    session = crud_session.create_session(
        db,
        coach_id=principal.coach_id,
        scheduled_at=scheduled_at,
        duration_minutes=duration_minutes,
        session_type=session_type,
        notes=notes,
    )
    logger.info("Coach %s scheduled session %s", principal.coach_id, session.id)
    return session


def update_session(
    db: Session,
    principal: CoachPrincipal,
    session_id: uuid.UUID,
    scheduled_at: datetime,
    duration_minutes: int,
    session_type: SessionType,
    notes: Optional[str] = None,
) -> TrainingSession:
    session = _load_owned(db, principal, session_id, for_update=True)

    # Only cancellation blocks edits; completed sessions stay editable
    if session.status == SessionStatus.CANCELLED:
        raise ConflictError("Cannot update a cancelled session")

    return crud_session.update_session_details(
        db,
        session,
        scheduled_at=scheduled_at,
        duration_minutes=duration_minutes,
        session_type=session_type,
        notes=notes,
    )


def cancel_session(db: Session, principal: CoachPrincipal, session_id: uuid.UUID) -> TrainingSession:
    session = _load_owned(db, principal, session_id, for_update=True)

    if session.status == SessionStatus.CANCELLED:
        raise ConflictError("Session is already cancelled")

    previous = session.status
    session = crud_session.set_session_status(db, session, SessionStatus.CANCELLED)
    logger.info("Session %s cancelled (was %s)", session.id, previous.name)
    return session


def complete_session(db: Session, principal: CoachPrincipal, session_id: uuid.UUID) -> TrainingSession:
    session = _load_owned(db, principal, session_id, for_update=True)

    if session.status != SessionStatus.SCHEDULED:
        raise ConflictError("Only scheduled sessions can be marked as completed")

    session = crud_session.set_session_status(db, session, SessionStatus.COMPLETED)
    logger.info("Session %s completed", session.id)
    return session
