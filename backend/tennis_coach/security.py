"""
Password hashing and identity tokens
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from tennis_coach.config import Settings
from tennis_coach.errors import AuthenticationError

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

INVALID_TOKEN_MESSAGE = "Invalid or expired token"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its stored hash"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password"""
    return pwd_context.hash(password)


@dataclass(frozen=True)
class CoachPrincipal:
    """The authenticated coach, as asserted by a validated token"""
    coach_id: uuid.UUID
    email: str
    name: str


class TokenIssuer:
    """Mints and validates signed identity tokens"""

    def __init__(self, settings: Settings):
        if not settings.jwt_secret:
            raise RuntimeError("JWT secret is not configured")
        self._settings = settings

    def issue(
        self,
        coach_id: uuid.UUID,
        email: str,
        name: str,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        settings = self._settings
        now = datetime.now(timezone.utc)
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

        claims = {
            "sub": str(coach_id),
            "email": email,
            "name": name,
            "jti": uuid.uuid4().hex,
            "iss": settings.jwt_issuer,
            "aud": settings.jwt_audience,
            "iat": now,
            "exp": now + expires_delta,
        }
        return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    def validate(self, token: Optional[str]) -> CoachPrincipal:
        """Check signature, issuer, audience and expiry; no clock-skew leeway"""
        if not token:
            raise AuthenticationError("Not authenticated")

        settings = self._settings
        try:
            payload = jwt.decode(
                token,
                settings.jwt_secret,
                algorithms=[settings.jwt_algorithm],
                audience=settings.jwt_audience,
                issuer=settings.jwt_issuer,
                options={"require_exp": True, "require_sub": True, "leeway": 0},
            )
        except JWTError as exc:
            logger.warning("Rejected identity token: %s", exc)
            raise AuthenticationError(INVALID_TOKEN_MESSAGE) from exc

        try:
            coach_id = uuid.UUID(str(payload["sub"]))
        except ValueError as exc:
            logger.warning("Identity token subject is not a coach id")
            raise AuthenticationError(INVALID_TOKEN_MESSAGE) from exc

        return CoachPrincipal(
            coach_id=coach_id,
            email=payload.get("email", ""),
            name=payload.get("name", ""),
        )
