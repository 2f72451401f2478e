"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration with environment variable and explicit overrides.

Features:
    - Hierarchical YAML configuration loading
    - Environment variable override (APP_URL overrides app.url)
    - Explicit overrides (e.g. from the CLI runner) above everything else
    - Dot notation path access with typed accessors
    - Fail-fast validation of mandatory keys

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import re
from datetime import timedelta
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml
from loguru import logger

from .errors import ConfigurationError


# Default configuration file path (overridable with SWAGLABS_CONFIG)
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "config.yaml"

# Keys that must resolve before any test runs
REQUIRED_KEYS: Tuple[str, ...] = (
    "app.url",
    "users.standard.username",
    "users.standard.password",
)

# Built-in defaults (lowest priority)
DEFAULTS: Dict[str, Any] = {
    "app.timeout": 10000,
    "browser.name": "chromium",
    "browser.headless": True,
    "browser.size": "1920x1080",
    "browser.slow_mo": 0,
    "screenshots.enabled": True,
    "screenshots.path": "reports/screenshots",
    "reports.allure_results": "reports/allure-results",
    "logging.level": "INFO",
}

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")
_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m)?\s*$", re.IGNORECASE)


def _freeze(value: Any) -> Any:
    """Recursively wrap mappings in read-only proxies."""
    if isinstance(value, dict):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


def env_key_for(key: str) -> str:
    """Environment variable name for a dot-notation key (app.url -> APP_URL)."""
    return key.upper().replace(".", "_")


class ConfigLoader:
    """
    Immutable configuration provider.

    Configuration hierarchy (highest to lowest priority):
        1. Explicit overrides passed to the constructor
        2. Environment variables (APP_URL, BROWSER_HEADLESS, ...)
        3. YAML configuration file
        4. Built-in defaults

    The file and the environment are read once, at construction. Afterwards
    the instance is read-only and can be shared by concurrent workers.

    Usage:
        >>> config = ConfigLoader()
        >>> config.validate()
        >>> config.get("app.url")
        'https://www.saucedemo.com'
        >>> config.get_duration("app.timeout")
        datetime.timedelta(seconds=10)
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file. Falls back to
                         $SWAGLABS_CONFIG, then DEFAULT_CONFIG_PATH.
            overrides: Dot-notation key -> value map with highest priority
            environ: Environment mapping (defaults to os.environ)
        """
        environ = os.environ if environ is None else environ
        if config_path is None:
            config_path = Path(environ.get("SWAGLABS_CONFIG") or DEFAULT_CONFIG_PATH)

        self._config_path = Path(config_path)
        self._config = _freeze(self._load_file(self._config_path))
        self._environ = MappingProxyType(dict(environ))
        self._overrides = MappingProxyType(
            {k: v for k, v in (overrides or {}).items() if v is not None}
        )

    @staticmethod
    def _load_file(path: Path) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not path.exists():
            logger.warning(
                f"Configuration file not found: {path}. "
                f"Using defaults and environment variables only."
            )
            return {}

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {path}"
            )
        logger.debug(f"Loaded configuration from: {path}")
        return data

    @property
    def path(self) -> Path:
        return self._config_path

    def _from_file(self, key: str) -> Any:
        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, Mapping):
                value = value.get(part)
            else:
                return None
            if value is None:
                return None
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        Args:
            key: Dot-notation path (e.g., "browser.headless")
            default: Returned when no layer defines the key

        Returns:
            The resolved value. Environment values are returned as strings;
            use the typed accessors to convert.
        """
        if key in self._overrides:
            return self._overrides[key]

        env_value = self._environ.get(env_key_for(key))
        if env_value is not None:
            return env_value

        value = self._from_file(key)
        if value is not None:
            return value

        if default is not None:
            return default
        return DEFAULTS.get(key)

    def require(self, key: str) -> Any:
        """
        Get a configuration value that must be present.

        Raises:
            ConfigurationError: if no layer defines a non-empty value
        """
        value = self.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ConfigurationError(
                f"Required configuration '{key}' is missing "
                f"(set it in {self._config_path.name} or via ${env_key_for(key)})"
            )
        return value

    def validate(self) -> "ConfigLoader":
        """Fail fast unless every mandatory key resolves."""
        missing = []
        for key in REQUIRED_KEYS:
            try:
                self.require(key)
            except ConfigurationError:
                missing.append(key)
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}"
            )
        logger.info("Configuration loaded and validated successfully")
        return self

    # =========================================================================
    # Typed accessors
    # =========================================================================

    def get_str(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self.get(key, default)
        return None if value is None else str(value)

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        value = self.get(key, default)
        if value is None or isinstance(value, int) and not isinstance(value, bool):
            return value
        try:
            return int(str(value).strip())
        except ValueError as e:
            raise ConfigurationError(f"'{key}' must be an integer, got {value!r}") from e

    def get_bool(self, key: str, default: Optional[bool] = None) -> Optional[bool]:
        value = self.get(key, default)
        if value is None or isinstance(value, bool):
            return value
        normalized = str(value).strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        raise ConfigurationError(f"'{key}' must be a boolean, got {value!r}")

    def get_duration(
        self,
        key: str,
        default: Optional[timedelta] = None,
    ) -> Optional[timedelta]:
        """
        Get a duration. Plain numbers are milliseconds; ``ms``, ``s`` and
        ``m`` suffixes are accepted ("500ms", "10s", "2m").
        """
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, timedelta):
            return value
        return parse_duration(value, key)

    def as_dict(self) -> Dict[str, Any]:
        """Snapshot of the file layer (for debugging/reporting)."""
        return _thaw(self._config)


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


def parse_duration(value: Any, key: str = "duration") -> timedelta:
    """Parse ``value`` (int ms, "10s", "500ms", "2m") into a timedelta."""
    if isinstance(value, bool):
        raise ConfigurationError(f"'{key}' must be a duration, got {value!r}")
    if isinstance(value, (int, float)):
        return timedelta(milliseconds=value)

    match = _DURATION_RE.match(str(value))
    if not match:
        raise ConfigurationError(f"'{key}' must be a duration, got {value!r}")

    amount = float(match.group(1))
    unit = (match.group(2) or "ms").lower()
    if unit == "ms":
        return timedelta(milliseconds=amount)
    if unit == "s":
        return timedelta(seconds=amount)
    return timedelta(minutes=amount)


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULTS",
    "REQUIRED_KEYS",
    "env_key_for",
    "parse_duration",
]
