"""Config — Validator profiles and settings."""

from edval.config.loader import (
    ConfigError,
    clear_cache,
    get_settings,
    list_profiles,
    load_settings,
    load_settings_from_path,
)
from edval.config.models import ImageRuleSettings, RuleToggle, ValidatorSettings

__all__ = [
    "ConfigError",
    "ImageRuleSettings",
    "RuleToggle",
    "ValidatorSettings",
    "clear_cache",
    "get_settings",
    "list_profiles",
    "load_settings",
    "load_settings_from_path",
]
