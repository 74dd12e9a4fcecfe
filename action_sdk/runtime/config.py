# =============================================================================
# SDK Configuration
# =============================================================================
# Settings come from environment variables so they can be set on the Lambda
# function without code changes.
#
#   ACTION_SDK_HTTP_TIMEOUT  - request timeout in seconds (default: none)
#   ACTION_SDK_LOG_LEVEL     - level for the action_sdk logger (default: INFO)
#   ACTION_SDK_VERIFY_SSL    - verify TLS certificates (default: true)
# =============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


def _get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _get_env_bool(key: str, default: bool = False) -> bool:
    return _get_env(key, str(default)).lower() == "true"


def _get_env_float(key: str, default: Optional[float] = None) -> Optional[float]:
    raw = _get_env(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {key}: {raw!r}")
        return default


@dataclass(frozen=True)
class Settings:
    """SDK settings."""
    http_timeout: Optional[float] = None
    log_level: str = "INFO"
    verify_ssl: bool = True
    
    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment."""
        return cls(
            http_timeout=_get_env_float("ACTION_SDK_HTTP_TIMEOUT"),
            log_level=_get_env("ACTION_SDK_LOG_LEVEL", "INFO").upper(),
            verify_ssl=_get_env_bool("ACTION_SDK_VERIFY_SSL", True),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the process default settings."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the environment is read again."""
    global _settings
    _settings = None


def configure_logging(settings: Settings = None) -> logging.Logger:
    """Apply the configured log level to the package logger."""
    settings = settings or get_settings()
    sdk_logger = logging.getLogger("action_sdk")
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        logger.warning(f"Unknown log level {settings.log_level!r}, using INFO")
        level = logging.INFO
    sdk_logger.setLevel(level)
    return sdk_logger
