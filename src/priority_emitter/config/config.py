"""
Static configuration for the priority emitter.

Purpose
-------
Provides centralized static configuration loaded from environment variables
(with `.env` support) and sensible defaults. Values are read once at import
and can be re-read with `Config.reload()`.

Responsibilities
----------------
- Load configuration from environment variables with .env support
- Validate values with bounds checking and fall back to defaults
- Track which values came from the environment versus defaults

Non-Responsibilities
--------------------
- Per-emitter settings (passed to `PriorityEventEmitter` directly)
- Logging setup (handled by `priority_emitter.logging`)

Architecture Notes
------------------
- Singleton pattern via class methods (no instantiation)
- Auto-loads on module import via Config.validate()
- Invalid values never raise; they are reported and replaced by defaults

Environment Variables
---------------------
All optional:
- PRIORITY_EMITTER_ENV: Environment type (default: development)
- PRIORITY_EMITTER_LOG_LEVEL: Logging level (default: INFO)
- PRIORITY_EMITTER_LOG_JSON: Force JSON console logs (default: production only)
- PRIORITY_EMITTER_LOG_COLORS: Colored console logs on a tty (default: True)
- PRIORITY_EMITTER_MAX_LISTENERS: Default max-listener ceiling for new
  emitters, 0 meaning unbounded (default: 10)

Dependencies
------------
- python-dotenv: Environment variable loading
"""

import logging
import os
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from priority_emitter.constants import DEFAULT_MAX_LISTENERS

# Load environment variables from .env file
load_dotenv()

ENV_PREFIX = "PRIORITY_EMITTER_"


# ============================================================================
# Enums and Constants
# ============================================================================


class Environment(Enum):
    """Deployment environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"

    @classmethod
    def from_string(cls, value: str) -> "Environment":
        """
        Parse environment string safely with fallback.

        Example
        -------
        >>> Environment.from_string("PRODUCTION") == Environment.PRODUCTION
        True
        >>> Environment.from_string("invalid") == Environment.DEVELOPMENT
        True
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            # Bootstrap logging; the structured logger may not be set up yet.
            logging.warning(
                f"Unknown environment '{value}', defaulting to development"
            )
            return cls.DEVELOPMENT


# ============================================================================
# Configuration Metrics Tracker
# ============================================================================


class _ConfigLoadMetrics:
    """
    Internal metrics tracker for configuration loading.

    Tracks which configuration values came from environment variables
    versus defaults, and any validation errors encountered.
    """

    def __init__(self):
        self.env_vars_loaded: Dict[str, bool] = {}
        self.validation_errors: Dict[str, str] = {}
        self.defaults_used: Dict[str, Any] = {}
        self.last_reload: Optional[str] = None

    def record_env_load(self, key: str, from_env: bool, default: Any):
        """Record whether a config value came from environment."""
        self.env_vars_loaded[key] = from_env
        if from_env:
            self.defaults_used.pop(key, None)
        else:
            self.defaults_used[key] = default

    def record_validation_error(self, key: str, error: str):
        self.validation_errors[key] = error

    def get_summary(self) -> Dict[str, Any]:
        """Get configuration loading summary."""
        return {
            "total_configs": len(self.env_vars_loaded),
            "from_environment": sum(1 for v in self.env_vars_loaded.values() if v),
            "from_defaults": sum(1 for v in self.env_vars_loaded.values() if not v),
            "validation_errors": len(self.validation_errors),
            "defaults_used": list(self.defaults_used.keys()),
            "last_reload": self.last_reload,
        }


# ============================================================================
# Main Configuration Class
# ============================================================================


class Config:
    """
    Centralized static configuration for the priority emitter.

    Usage
    -----
    >>> Config.MAX_LISTENERS
    10
    >>> if Config.is_production():
    ...     logger.info("Running in production mode")
    >>> summary = Config.get_config_summary()
    """

    # =========================================================================
    # Internal State
    # =========================================================================

    _metrics: Optional[_ConfigLoadMetrics] = None
    _validated: bool = False

    # =========================================================================
    # Environment / Logging
    # =========================================================================

    ENVIRONMENT: str = Environment.DEVELOPMENT.value
    LOG_LEVEL: str = "INFO"
    LOG_JSON: Optional[bool] = None
    LOG_COLORS: bool = True

    # =========================================================================
    # Emitter Defaults
    # =========================================================================

    MAX_LISTENERS: int = DEFAULT_MAX_LISTENERS

    # =========================================================================
    # Helper Methods
    # =========================================================================

    @classmethod
    def _init_metrics(cls):
        if cls._metrics is None:
            cls._metrics = _ConfigLoadMetrics()

    @classmethod
    def _safe_int(
        cls,
        key: str,
        default: int,
        min_val: Optional[int] = None,
        max_val: Optional[int] = None,
    ) -> int:
        """
        Safely parse integer from environment with validation.

        Parameters
        ----------
        key:
            Environment variable name (without prefix).
        default:
            Default value if not set or invalid.
        min_val:
            Minimum allowed value (inclusive).
        max_val:
            Maximum allowed value (inclusive).

        Returns
        -------
        int
            Validated integer value.
        """
        cls._init_metrics()
        env_key = ENV_PREFIX + key
        raw_value = os.getenv(env_key)

        if raw_value is None:
            cls._metrics.record_env_load(key, False, default)
            return default

        try:
            value = int(raw_value)
        except ValueError:
            error = f"{env_key}='{raw_value}' is not a valid integer, using default {default}"
            logging.warning(error)
            cls._metrics.record_validation_error(key, error)
            return default

        if min_val is not None and value < min_val:
            error = f"{env_key}={value} is below minimum {min_val}, using default {default}"
            logging.warning(error)
            cls._metrics.record_validation_error(key, error)
            return default

        if max_val is not None and value > max_val:
            error = f"{env_key}={value} exceeds maximum {max_val}, using default {default}"
            logging.warning(error)
            cls._metrics.record_validation_error(key, error)
            return default

        cls._metrics.record_env_load(key, True, default)
        return value

    @classmethod
    def _safe_bool(cls, key: str, default: Optional[bool]) -> Optional[bool]:
        """
        Safely parse boolean from environment.

        Recognizes: true/false, yes/no, 1/0, on/off (case-insensitive).
        """
        cls._init_metrics()
        env_key = ENV_PREFIX + key
        raw_value = os.getenv(env_key)

        if raw_value is None:
            cls._metrics.record_env_load(key, False, default)
            return default

        normalized = raw_value.lower().strip()
        if normalized in {"true", "yes", "1", "on"}:
            value = True
        elif normalized in {"false", "no", "0", "off"}:
            value = False
        else:
            error = f"{env_key}='{raw_value}' is not a valid boolean, using default {default}"
            logging.warning(error)
            cls._metrics.record_validation_error(key, error)
            return default

        cls._metrics.record_env_load(key, True, default)
        return value

    @classmethod
    def _safe_str(cls, key: str, default: str) -> str:
        cls._init_metrics()
        env_key = ENV_PREFIX + key
        value = os.getenv(env_key, default)
        cls._metrics.record_env_load(key, env_key in os.environ, default)
        return value

    # =========================================================================
    # Configuration Loading
    # =========================================================================

    @classmethod
    def load(cls) -> None:
        """
        Load all configuration from environment variables with validation.

        Called automatically on module import; call `reload()` to pick up
        environment changes at runtime.
        """
        cls._init_metrics()

        cls.ENVIRONMENT = Environment.from_string(
            cls._safe_str("ENV", Environment.DEVELOPMENT.value)
        ).value
        cls.LOG_LEVEL = cls._safe_str("LOG_LEVEL", "INFO").upper()
        cls.LOG_JSON = cls._safe_bool("LOG_JSON", None)
        cls.LOG_COLORS = bool(cls._safe_bool("LOG_COLORS", True))

        cls.MAX_LISTENERS = cls._safe_int(
            "MAX_LISTENERS", DEFAULT_MAX_LISTENERS, min_val=0
        )

        cls._metrics.last_reload = datetime.now(timezone.utc).isoformat()

    @classmethod
    def validate(cls) -> None:
        """Load and validate configuration once; later calls are no-ops."""
        if cls._validated:
            return

        cls.load()

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if cls.LOG_LEVEL not in valid_log_levels:
            logging.warning(f"Invalid LOG_LEVEL '{cls.LOG_LEVEL}', using INFO")
            cls._metrics.record_validation_error(
                "LOG_LEVEL", f"invalid level {cls.LOG_LEVEL!r}"
            )
            cls.LOG_LEVEL = "INFO"

        cls._validated = True

    @classmethod
    def reload(cls) -> None:
        """Re-read every value from the environment."""
        cls._validated = False
        cls._metrics = None
        cls.validate()
        logging.getLogger(__name__).debug(
            "Configuration reloaded", extra=cls.get_config_summary()
        )

    # =========================================================================
    # Environment Checks
    # =========================================================================

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT == Environment.PRODUCTION.value

    @classmethod
    def is_development(cls) -> bool:
        return cls.ENVIRONMENT == Environment.DEVELOPMENT.value

    @classmethod
    def is_testing(cls) -> bool:
        return cls.ENVIRONMENT == Environment.TESTING.value

    # =========================================================================
    # Metrics & Summary
    # =========================================================================

    @classmethod
    def get_metrics(cls) -> Optional[_ConfigLoadMetrics]:
        """Get configuration loading metrics."""
        return cls._metrics

    @classmethod
    def get_config_summary(cls) -> Dict[str, Any]:
        """
        Get configuration summary for debugging.

        Example
        -------
        >>> Config.get_config_summary()["max_listeners"]
        10
        """
        return {
            "environment": cls.ENVIRONMENT,
            "log_level": cls.LOG_LEVEL,
            "log_json": cls.LOG_JSON,
            "log_colors": cls.LOG_COLORS,
            "max_listeners": cls.MAX_LISTENERS,
            "defaults_used": list(cls._metrics.defaults_used) if cls._metrics else [],
        }


# Auto-validate on import
Config.validate()
