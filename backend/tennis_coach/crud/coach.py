"""
CRUD operations for coach accounts
"""
import uuid
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tennis_coach.errors import ConflictError
from tennis_coach.models.coach import Coach
from tennis_coach.security import get_password_hash, verify_password

DUPLICATE_EMAIL_MESSAGE = "Email already registered"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_coach(db: Session, coach_id: uuid.UUID) -> Optional[Coach]:
    """Fetch a coach by id"""
    return db.get(Coach, coach_id)


def get_coach_by_email(db: Session, email: str) -> Optional[Coach]:
    """Fetch a coach by email, case-insensitively"""
    return db.query(Coach).filter(Coach.email == normalize_email(email)).first()


def create_coach(db: Session, email: str, password: str, name: str) -> Coach:
    """Create a coach account"""
    db_coach = Coach(
        id=uuid.uuid4(),
        email=normalize_email(email),
        password_hash=get_password_hash(password),
        name=name.strip(),
    )

    db.add(db_coach)
    try:
        db.commit()
    except IntegrityError as exc:
        # A concurrent registration won the unique index on email
        db.rollback()
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from exc
    db.refresh(db_coach)

    return db_coach


def authenticate_coach(db: Session, email: str, password: str) -> Optional[Coach]:
    """Return the coach when the credentials match"""
    coach = get_coach_by_email(db, email)
    if not coach:
        return None
    if not verify_password(password, coach.password_hash):
        return None
    return coach
