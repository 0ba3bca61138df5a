"""
Application settings

Loaded from environment variables (and .env) with pydantic-settings.
FEATURE_* variables become feature flag overrides, keyed by the
lowercased remainder of the name.
"""
import logging
import os
from typing import Dict, List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Environments where the development JWT secret is acceptable
LOCAL_ENVIRONMENTS = ("development", "testing")

DEV_JWT_SECRET = "dev-secret-key-change-in-production-0123456789"

# Overrides for feature flags: FEATURE_TRAINING_SESSION_MANAGEMENT=false
FEATURE_ENV_PREFIX = "FEATURE_"


def _feature_overrides(environ) -> Dict[str, str]:
    overrides = {}
    for key, value in environ.items():
        if key.upper().startswith(FEATURE_ENV_PREFIX) and value.strip():
            name = key[len(FEATURE_ENV_PREFIX):].lower()
            overrides[name] = value.strip()
    return overrides


class Settings(BaseSettings):
    """Process-wide configuration, built once at startup"""

    environment: str = Field(default="development", alias="APP_ENV")
    database_url: str = Field(default="sqlite:///./tennis_coach.db", alias="DATABASE_URL")

    # Identity tokens
    jwt_secret: str = Field(
        default="",
        alias="JWT_SECRET",
        description="HMAC secret for identity tokens. Required outside development/testing.",
    )
    jwt_issuer: str = Field(default="TennisCoach", alias="JWT_ISSUER")
    jwt_audience: str = Field(default="TennisCoachApp", alias="JWT_AUDIENCE")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=1440, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    cors_origins: str = Field(
        default="http://localhost:3000",
        alias="CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins",
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    create_tables: Optional[bool] = Field(
        default=None,
        alias="CREATE_TABLES",
        description="Create tables at startup. Defaults to on in development only.",
    )
    feature_flags: Dict[str, str] = Field(default_factory=dict)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _collect_feature_overrides(cls, data):
        if isinstance(data, dict) and "feature_flags" not in data:
            data["feature_flags"] = _feature_overrides(os.environ)
        return data

    @field_validator("environment")
    @classmethod
    def _default_environment(cls, value: str) -> str:
        return value.strip() or "development"

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def _check_secret_and_defaults(self) -> "Settings":
        local = self.environment.lower() in LOCAL_ENVIRONMENTS
        if not self.jwt_secret:
            if not local:
                raise ValueError("JWT_SECRET is not configured")
            logger.warning("JWT_SECRET not set; using the development secret")
            self.jwt_secret = DEV_JWT_SECRET

        if self.create_tables is None:
            self.create_tables = self.is_development
        return self

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def load_settings() -> Settings:
    """Build settings from the environment (.env is loaded first)"""
    # FEATURE_* entries in .env only reach the overrides through os.environ
    load_dotenv()
    return Settings()
