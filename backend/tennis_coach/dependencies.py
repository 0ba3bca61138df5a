"""
Shared FastAPI dependencies
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from tennis_coach.config import Settings
from tennis_coach.errors import NotFoundError
from tennis_coach.feature_flags import TRAINING_SESSION_MANAGEMENT, FeatureFlagService
from tennis_coach.security import CoachPrincipal, TokenIssuer

# Bearer token from the Authorization header; missing tokens are reported by us as 401
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_feature_flags(request: Request) -> FeatureFlagService:
    return request.app.state.feature_flags


def get_current_principal(
    token: Optional[str] = Depends(oauth2_scheme),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> CoachPrincipal:
    """Validated identity of the caller"""
    return token_issuer.validate(token)


def require_training_sessions_enabled(
    feature_flags: FeatureFlagService = Depends(get_feature_flags),
) -> None:
    """Hide the training session routes while the feature is off"""
    if not feature_flags.is_enabled(TRAINING_SESSION_MANAGEMENT):
        raise NotFoundError("Not Found")
