"""
Training session router

Every route sits behind the training session feature flag, checked
before authentication so a disabled feature looks like a missing route.
"""
import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from tennis_coach import session_service
from tennis_coach.database import as_utc, get_db
from tennis_coach.dependencies import get_current_principal, require_training_sessions_enabled
from tennis_coach.errors import NotFoundError
from tennis_coach.models.training_session import NOTES_MAX_LENGTH, SessionStatus, SessionType
from tennis_coach.security import CoachPrincipal

ROUTE_PREFIX = "/api/training-sessions"

# Durations are 32-bit integers; zero and negative values are accepted
DURATION_MIN = -(2 ** 31)
DURATION_MAX = 2 ** 31 - 1

router = APIRouter(
    prefix=ROUTE_PREFIX,
    tags=["training-sessions"],
    dependencies=[Depends(require_training_sessions_enabled)],
)


# Request/response models
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TrainingSessionRequest(CamelModel):
    """Body for create and update"""
    scheduled_at: datetime
    duration_minutes: int = Field(ge=DURATION_MIN, le=DURATION_MAX)
    type: SessionType
    notes: Optional[str] = Field(default=None, max_length=NOTES_MAX_LENGTH)

    @field_validator("scheduled_at")
    @classmethod
    def _normalize_scheduled_at(cls, value: datetime) -> datetime:
        return as_utc(value)


class TrainingSessionResponse(CamelModel):
    id: uuid.UUID
    scheduled_at: datetime
    duration_minutes: int
    type: SessionType
    status: SessionStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    # SQLite hands timestamps back without a zone; they are stored as UTC
    @field_validator("scheduled_at", "created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class SessionEnvelope(BaseModel):
    data: TrainingSessionResponse


class SessionListEnvelope(BaseModel):
    data: List[TrainingSessionResponse]


def _parse_session_id(session_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(session_id)
    except ValueError:
        raise NotFoundError(session_service.NOT_FOUND_MESSAGE) from None


def _envelope(session) -> SessionEnvelope:
    return SessionEnvelope(data=TrainingSessionResponse.model_validate(session))


@router.get("", response_model=SessionListEnvelope)
def list_training_sessions(
    principal: CoachPrincipal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """The caller's sessions, most recently scheduled first"""
    sessions = session_service.list_sessions(db, principal)
    return SessionListEnvelope(
        data=[TrainingSessionResponse.model_validate(s) for s in sessions]
    )


@router.get("/{session_id}", response_model=SessionEnvelope)
def get_training_session(
    session_id: str,
    principal: CoachPrincipal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    session = session_service.get_session(db, principal, _parse_session_id(session_id))
    return _envelope(session)


@router.post("", response_model=SessionEnvelope, status_code=status.HTTP_201_CREATED)
def create_training_session(
    session_data: TrainingSessionRequest,
    response: Response,
    principal: CoachPrincipal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Schedule a new session"""
    session = session_service.create_session(
        db,
        principal,
        scheduled_at=session_data.scheduled_at,
        duration_minutes=session_data.duration_minutes,
        session_type=session_data.type,
        notes=session_data.notes,
    )
    response.headers["Location"] = f"{ROUTE_PREFIX}/{session.id}"
    return _envelope(session)


@router.put("/{session_id}", response_model=SessionEnvelope)
def update_training_session(
    session_id: str,
    session_data: TrainingSessionRequest,
    principal: CoachPrincipal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    session = session_service.update_session(
        db,
        principal,
        _parse_session_id(session_id),
        scheduled_at=session_data.scheduled_at,
        duration_minutes=session_data.duration_minutes,
        session_type=session_data.type,
        notes=session_data.notes,
    )
    return _envelope(session)


@router.post("/{session_id}/cancel", response_model=SessionEnvelope)
def cancel_training_session(
    session_id: str,
    principal: CoachPrincipal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    session = session_service.cancel_session(db, principal, _parse_session_id(session_id))
    return _envelope(session)


@router.post("/{session_id}/complete", response_model=SessionEnvelope)
def complete_training_session(
    session_id: str,
    principal: CoachPrincipal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    session = session_service.complete_session(db, principal, _parse_session_id(session_id))
    return _envelope(session)
