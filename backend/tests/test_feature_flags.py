"""
Feature flag and settings tests
"""
import pytest

from tennis_coach.config import DEV_JWT_SECRET, Settings, load_settings
from tennis_coach.feature_flags import TRAINING_SESSION_MANAGEMENT, FeatureFlagService
from tennis_coach.security import TokenIssuer

SECRET = "unit-test-secret-0123456789"

SETTINGS_ENV_VARS = (
    "APP_ENV",
    "JWT_SECRET",
    "DATABASE_URL",
    "CORS_ORIGINS",
    "CREATE_TABLES",
    "ACCESS_TOKEN_EXPIRE_MINUTES",
    "LOG_LEVEL",
)


def make_settings(environment, **kwargs):
    kwargs.setdefault("jwt_secret", SECRET)
    kwargs.setdefault("feature_flags", {})
    return Settings(environment=environment, **kwargs)


@pytest.fixture
def clean_env(monkeypatch):
    for name in SETTINGS_ENV_VARS + ("FEATURE_TRAINING_SESSION_MANAGEMENT",):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of these tests
    monkeypatch.setattr("tennis_coach.config.load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.setitem(Settings.model_config, "env_file", None)
    return monkeypatch


@pytest.mark.parametrize(
    "environment, expected",
    [
        ("development", True),
        ("Development", True),
        ("staging", True),
        ("production", False),
        ("testing", False),
    ],
)
def test_default_depends_on_environment(environment, expected):
    flags = FeatureFlagService(make_settings(environment))

    assert flags.is_enabled(TRAINING_SESSION_MANAGEMENT) is expected


@pytest.mark.parametrize("value, expected", [("true", True), ("False", False), ("1", True), ("off", False)])
def test_override_wins_over_environment(value, expected):
    for environment in ("development", "production"):
        settings = make_settings(environment, feature_flags={TRAINING_SESSION_MANAGEMENT: value})

        assert FeatureFlagService(settings).is_enabled(TRAINING_SESSION_MANAGEMENT) is expected


def test_override_lookup_ignores_name_case():
    settings = make_settings("production", feature_flags={TRAINING_SESSION_MANAGEMENT: "true"})
    flags = FeatureFlagService(settings)

    assert flags.is_enabled("TRAINING_SESSION_MANAGEMENT") is True
    assert flags.is_enabled("Training_Session_Management") is True


def test_unparseable_override_falls_back_to_environment():
    settings = make_settings("staging", feature_flags={TRAINING_SESSION_MANAGEMENT: "maybe"})

    assert FeatureFlagService(settings).is_enabled(TRAINING_SESSION_MANAGEMENT) is True


def test_flags_are_evaluated_on_every_call():
    settings = make_settings("production")
    flags = FeatureFlagService(settings)
    assert flags.is_enabled(TRAINING_SESSION_MANAGEMENT) is False

    settings.feature_flags[TRAINING_SESSION_MANAGEMENT] = "true"
    assert flags.is_enabled(TRAINING_SESSION_MANAGEMENT) is True

    del settings.feature_flags[TRAINING_SESSION_MANAGEMENT]
    settings.environment = "staging"
    assert flags.is_enabled(TRAINING_SESSION_MANAGEMENT) is True


def test_other_features_ignore_unrelated_overrides():
    settings = make_settings("production", feature_flags={TRAINING_SESSION_MANAGEMENT: "true"})

    assert FeatureFlagService(settings).is_enabled("something_else") is False


def test_load_settings_reads_environment(clean_env):
    clean_env.setenv("APP_ENV", "production")
    clean_env.setenv("JWT_SECRET", "prod-secret")
    clean_env.setenv("DATABASE_URL", "postgresql://u:p@db/tennis")
    clean_env.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    clean_env.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30")
    clean_env.setenv("FEATURE_TRAINING_SESSION_MANAGEMENT", "true")

    settings = load_settings()

    assert settings.environment == "production"
    assert settings.jwt_secret == "prod-secret"
    assert settings.database_url == "postgresql://u:p@db/tennis"
    assert settings.cors_origins_list == ["https://a.example", "https://b.example"]
    assert settings.access_token_expire_minutes == 30
    assert settings.create_tables is False
    assert settings.feature_flags == {TRAINING_SESSION_MANAGEMENT: "true"}
    assert FeatureFlagService(settings).is_enabled(TRAINING_SESSION_MANAGEMENT) is True


def test_create_tables_can_be_forced_on(clean_env):
    clean_env.setenv("APP_ENV", "staging")
    clean_env.setenv("JWT_SECRET", "staging-secret")
    clean_env.setenv("CREATE_TABLES", "yes")

    assert load_settings().create_tables is True


def test_load_settings_requires_secret_outside_development(clean_env):
    clean_env.setenv("APP_ENV", "production")

    with pytest.raises(ValueError, match="JWT_SECRET"):
        load_settings()


def test_direct_construction_never_falls_back_to_dev_secret():
    with pytest.raises(ValueError, match="JWT_SECRET"):
        Settings(environment="production", jwt_secret="")


def test_token_issuer_refuses_empty_secret():
    settings = make_settings("production")
    settings.jwt_secret = ""

    with pytest.raises(RuntimeError):
        TokenIssuer(settings)


def test_load_settings_development_defaults(clean_env):
    settings = load_settings()

    assert settings.is_development
    assert settings.jwt_secret == DEV_JWT_SECRET
    assert settings.create_tables is True
    assert settings.cors_origins_list == ["http://localhost:3000"]
    assert settings.feature_flags == {}
