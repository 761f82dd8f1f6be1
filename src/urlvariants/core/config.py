"""Configuration loader for urlvariants.

This module loads and validates the YAML configuration file holding the
locale priority list and output preferences.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml

from urlvariants.core.constants import DEFAULT_PRIORITY, DEFAULTS, OutputFormat
from urlvariants.core.exceptions import ConfigError, InvalidConfigError
from urlvariants.core.models import LocaleConfig


logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Paths
# ============================================================================

def get_default_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/urlvariants/config.yaml
    """
    return Path(DEFAULTS["config_path"]).expanduser()


# ============================================================================
# Priority Helpers
# ============================================================================

def resolve_priority(priority: Optional[Iterable[str]]) -> list[str]:
    """Clean a locale priority list.

    Entries are stripped and lowercased, blanks dropped. An empty result
    falls back to English.

    Args:
        priority: Locale codes, most preferred first

    Returns:
        Cleaned priority list, never empty
    """
    resolved = []
    for code in priority or ():
        code = code.strip().lower()
        if code and code not in resolved:
            resolved.append(code)

    return resolved or list(DEFAULT_PRIORITY)


# ============================================================================
# Locale Configuration Loader
# ============================================================================

def load_locale_config(config_file: Path | str | None = None) -> LocaleConfig:
    """Load locale configuration from YAML file.

    Args:
        config_file: Path to config YAML file. If None, the default path is
            used when it exists, otherwise defaults are returned

    Returns:
        LocaleConfig with validated settings

    Raises:
        ConfigError: If an explicit file is missing or YAML parsing fails
        InvalidConfigError: If configuration values are invalid
    """
    if config_file is None:
        config_path = get_default_config_path()
        if not config_path.exists():
            logger.debug(f"No config at {config_path}, using defaults")
            return LocaleConfig()
    else:
        config_path = Path(config_file)

    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with config_path.open("r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config YAML: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {e}") from e

    if not data:
        return LocaleConfig()

    if not isinstance(data, dict):
        raise InvalidConfigError("Config root must be a mapping")

    return _parse_locale_config(data)


def _parse_locale_config(data: dict[str, Any]) -> LocaleConfig:
    locale_data = data.get("locale") or {}
    output_data = data.get("output") or {}

    if not isinstance(locale_data, dict):
        raise InvalidConfigError("'locale' section must be a mapping")
    if not isinstance(output_data, dict):
        raise InvalidConfigError("'output' section must be a mapping")

    priority = locale_data.get("priority", list(DEFAULT_PRIORITY))
    if isinstance(priority, str):
        priority = priority.split(",")
    if not isinstance(priority, list):
        raise InvalidConfigError("'locale.priority' must be a list")
    if not all(isinstance(code, str) for code in priority):
        raise InvalidConfigError("'locale.priority' entries must be strings")

    use_scorer = locale_data.get("use_scorer", DEFAULTS["use_scorer"])
    if not isinstance(use_scorer, bool):
        raise InvalidConfigError("'locale.use_scorer' must be a boolean")

    output_format = output_data.get("format", DEFAULTS["output_format"])
    valid_formats = {fmt.value for fmt in OutputFormat}
    if output_format not in valid_formats:
        raise InvalidConfigError(
            f"Invalid output format '{output_format}'. "
            f"Must be one of: {', '.join(sorted(valid_formats))}"
        )

    return LocaleConfig(
        priority=resolve_priority(priority),
        use_scorer=use_scorer,
        output_format=output_format,
    )
