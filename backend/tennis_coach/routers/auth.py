"""
Authentication router
"""
import uuid

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from tennis_coach import auth_service
from tennis_coach.database import get_db
from tennis_coach.dependencies import get_current_principal, get_token_issuer
from tennis_coach.security import CoachPrincipal, TokenIssuer

router = APIRouter(
    prefix="/api/auth",
    tags=["auth"]
)


# Request/response models
class RegisterRequest(BaseModel):
    """Account registration"""
    email: str = ""
    password: str = ""
    name: str = ""


class LoginRequest(BaseModel):
    """Login credentials"""
    email: str = ""
    password: str = ""


class CoachInfo(BaseModel):
    """Public coach details"""
    id: uuid.UUID
    email: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    token: str
    coach: CoachInfo


class AuthEnvelope(BaseModel):
    data: AuthResponse


class CoachEnvelope(BaseModel):
    data: CoachInfo


def _auth_envelope(result: auth_service.AuthResult) -> AuthEnvelope:
    return AuthEnvelope(
        data=AuthResponse(token=result.token, coach=CoachInfo.model_validate(result.coach))
    )


@router.post("/register", response_model=AuthEnvelope)
def register(
    registration: RegisterRequest,
    db: Session = Depends(get_db),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
):
    """Register a coach account"""
    result = auth_service.register(
        db,
        token_issuer,
        email=registration.email,
        password=registration.password,
        name=registration.name,
    )
    return _auth_envelope(result)


@router.post("/login", response_model=AuthEnvelope)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
):
    """Coach login"""
    result = auth_service.login(db, token_issuer, email=credentials.email, password=credentials.password)
    return _auth_envelope(result)


@router.get("/me", response_model=CoachEnvelope)
def read_current_coach(
    principal: CoachPrincipal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Details of the signed-in coach"""
    coach = auth_service.get_current_coach(db, principal)
    return CoachEnvelope(data=CoachInfo.model_validate(coach))
