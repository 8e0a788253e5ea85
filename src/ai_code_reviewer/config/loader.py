"""Settings loader with YAML parsing and environment variable substitution."""

import os
import re
from pathlib import Path

import structlog
import yaml

from ..models.provider import FALLBACK_ORDER
from .schema import ReviewSettings

log = structlog.get_logger()


def substitute_env_vars(text: str) -> str:
    """
    Replace ${VAR_NAME} patterns with environment variable values.

    Args:
        text: Text containing ${VAR_NAME} patterns

    Returns:
        Text with environment variables substituted

    Raises:
        ValueError: If a referenced environment variable is not found
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ValueError(f"Environment variable {var_name} not found")
        return value

    return re.sub(r"\$\{([^}]+)\}", replacer, text)


def load_settings(path: Path | None = None) -> ReviewSettings:
    """
    Load settings from a YAML file, or from the environment alone.

    Args:
        path: Path to YAML settings file. ``None`` reads only environment
            variables (``AI_CODE_REVIEWER_*``) and ``.env``.

    Returns:
        Validated ReviewSettings instance

    Raises:
        FileNotFoundError: If the settings file doesn't exist
        ValueError: If environment variables are missing or the file is not a mapping
        ValidationError: If settings don't match the schema
    """
    if path is None:
        settings = ReviewSettings()
        validate_settings(settings)
        return settings

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with path.open() as f:
        raw_yaml = f.read()

    yaml_with_env = substitute_env_vars(raw_yaml)
    settings_dict = yaml.safe_load(yaml_with_env) or {}

    if not isinstance(settings_dict, dict):
        raise ValueError(f"Settings file must contain a mapping: {path}")

    # Values from the file win; anything it omits still comes from the environment
    settings = ReviewSettings(**settings_dict)
    validate_settings(settings)

    return settings


def validate_settings(settings: ReviewSettings) -> None:
    """
    Warn about settings that are valid but will not behave as written.

    An explicit provider without a key silently falls back to the next
    configured backend, and disabling every category sends a prompt with
    nothing to check. Neither is an error.

    Args:
        settings: Settings to inspect
    """
    credentials = settings.credentials()
    preferred = settings.provider.provider

    if preferred is not None and not credentials.has_key(preferred):
        log.warning(
            "preferred_provider_missing_key",
            preferred=preferred.value,
            fallback_order=[p.value for p in FALLBACK_ORDER],
        )

    if not settings.enabled_categories():
        log.warning("no_review_categories_enabled")
