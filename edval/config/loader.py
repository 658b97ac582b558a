"""
Config Loader — Load and parse validator profiles from YAML files.

Profiles live in ``profiles/`` next to this module. A profile only needs
to list what it changes; everything else keeps its dataclass default.
"""

from pathlib import Path
from typing import Any, Optional

import yaml

from edval.config.models import ImageRuleSettings, RuleToggle, ValidatorSettings
from edval.core.logging import LogChannel, get_logger

PROFILES_DIR = Path(__file__).parent / "profiles"

log = get_logger(LogChannel.SYSTEM)


class ConfigError(ValueError):
    """A profile exists but cannot be turned into settings."""


def load_settings(name: str = "default") -> ValidatorSettings:
    """
    Load a bundled profile by name.

    Args:
        name: Profile name (without .yaml extension)

    Returns:
        Parsed ValidatorSettings

    Raises:
        FileNotFoundError: If the profile file doesn't exist
        ConfigError: If the profile is malformed
    """
    path = PROFILES_DIR / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Profile not found: {path}")
    return load_settings_from_path(path)


def load_settings_from_path(path: Path) -> ValidatorSettings:
    """Load settings from an arbitrary YAML file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Profile {path} must be a mapping, got {type(data).__name__}")

    try:
        return parse_settings(data, default_name=path.stem)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid profile {path}: {e}") from e


def parse_settings(data: dict, default_name: str = "default") -> ValidatorSettings:
    """Parse settings from a dictionary."""
    profile_info = _section(data, "profile")
    documents = _section(data, "documents")
    defaults = ValidatorSettings()

    rules = []
    for rule_data in data.get("rules") or []:
        toggle = parse_rule_toggle(rule_data)
        if toggle:
            rules.append(toggle)

    return ValidatorSettings(
        name=profile_info.get("name", default_name),
        description=profile_info.get("description", ""),
        source=str(data.get("source", defaults.source)),
        html_extensions=_string_list(documents.get("extensions", defaults.html_extensions)),
        html_language_ids=_string_list(documents.get("language_ids", defaults.html_language_ids)),
        rules=rules,
        images=parse_image_settings(_section(data, "images")),
    )


def parse_image_settings(data: dict) -> ImageRuleSettings:
    """Parse the ``images:`` block; unknown keys are rejected."""
    defaults = ImageRuleSettings()
    known = set(defaults.__dataclass_fields__)
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown image settings: {', '.join(sorted(unknown))}")

    settings = ImageRuleSettings(
        typo_window=int(data.get("typo_window", defaults.typo_window)),
        stray_path_padding=int(data.get("stray_path_padding", defaults.stray_path_padding)),
        folder_suffix=str(data.get("folder_suffix", defaults.folder_suffix)),
        number_width=int(data.get("number_width", defaults.number_width)),
        first_number=int(data.get("first_number", defaults.first_number)),
    )
    if settings.typo_window < 0 or settings.stray_path_padding < 0:
        raise ValueError("Window sizes must not be negative")
    return settings


def parse_rule_toggle(data: Any) -> Optional[RuleToggle]:
    """Parse a single rule entry, skipping it if malformed."""
    try:
        return RuleToggle(
            id=data["id"],
            enabled=bool(data.get("enabled", True)),
            description=data.get("description", ""),
        )
    except (KeyError, TypeError, AttributeError) as e:
        log.warning("invalid_rule_skipped", entry=repr(data)[:80], error=str(e))
        return None


def _section(data: dict, key: str) -> dict:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' must be a mapping, got {type(section).__name__}")
    return section


def _string_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def list_profiles() -> list[str]:
    """List available profile names."""
    if not PROFILES_DIR.exists():
        return []
    return sorted(p.stem for p in PROFILES_DIR.glob("*.yaml"))


# Cache for loaded profiles
_cache: dict[str, ValidatorSettings] = {}


def get_settings(name: str = "default", use_cache: bool = True) -> ValidatorSettings:
    """Get settings for a profile, using cache by default."""
    if use_cache and name in _cache:
        return _cache[name]

    settings = load_settings(name)
    _cache[name] = settings
    return settings


def clear_cache() -> None:
    """Clear the profile cache."""
    _cache.clear()
