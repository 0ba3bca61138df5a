"""
Registration, login and current-coach lookup
"""
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from tennis_coach.crud import coach as crud_coach
from tennis_coach.errors import AuthenticationError, ConflictError, ValidationError
from tennis_coach.models.coach import Coach
from tennis_coach.security import CoachPrincipal, TokenIssuer

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


@dataclass
class AuthResult:
    token: str
    coach: Coach


def _is_blank(value) -> bool:
    return value is None or not str(value).strip()


def register(
    db: Session,
    token_issuer: TokenIssuer,
    email: str,
    password: str,
    name: str,
) -> AuthResult:
    """Create an account and sign the new coach in"""
    if _is_blank(email) or _is_blank(password) or _is_blank(name):
        raise ValidationError("Email, password, and name are required")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if crud_coach.get_coach_by_email(db, email) is not None:
        raise ConflictError(crud_coach.DUPLICATE_EMAIL_MESSAGE)

    coach = crud_coach.create_coach(db, email=email, password=password, name=name)
    logger.info("Registered coach %s", coach.id)

    token = token_issuer.issue(coach.id, coach.email, coach.name)
    return AuthResult(token=token, coach=coach)


def login(db: Session, token_issuer: TokenIssuer, email: str, password: str) -> AuthResult:
    """Check credentials and issue a token"""
    if _is_blank(email) or _is_blank(password):
        raise ValidationError("Email and password are required")

    coach = crud_coach.authenticate_coach(db, email=email, password=password)
    if coach is None:
        # Same answer for unknown email and wrong password
        logger.warning("Failed login for %s", crud_coach.normalize_email(email))
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

    token = token_issuer.issue(coach.id, coach.email, coach.name)
    return AuthResult(token=token, coach=coach)


def get_current_coach(db: Session, principal: CoachPrincipal) -> Coach:
    """Resolve the token subject to a stored coach"""
    coach = crud_coach.get_coach(db, principal.coach_id)
    if coach is None:
        logger.warning("Token subject %s no longer resolves to a coach", principal.coach_id)
        raise AuthenticationError("Not authenticated")
    return coach
