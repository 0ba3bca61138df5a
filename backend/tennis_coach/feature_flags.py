"""
Feature flags

Explicit overrides come from FEATURE_* settings. Without one, new
features are on in development and staging and off everywhere else.
"""
import logging
from typing import Optional

from tennis_coach.config import Settings

logger = logging.getLogger(__name__)

TRAINING_SESSION_MANAGEMENT = "training_session_management"

ENABLED_BY_DEFAULT_IN = ("development", "staging")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(value: str) -> Optional[bool]:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return None


class FeatureFlagService:
    """Answers whether a named feature is on; re-reads settings on every call"""

    def __init__(self, settings: Settings):
        self._settings = settings

    def is_enabled(self, feature_name: str) -> bool:
        override = self._settings.feature_flags.get(feature_name.lower())
        if override is not None:
            parsed = parse_bool(override)
            if parsed is not None:
                return parsed
            logger.warning(
                "Ignoring unparseable override %r for feature %s", override, feature_name
            )

        return self._settings.environment.lower() in ENABLED_BY_DEFAULT_IN
