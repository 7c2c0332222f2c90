"""
Deployment settings loaded from the environment.

Settings are read once at startup into an immutable struct and handed to
the components that need them, rather than read ad hoc inside request code.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_MODEL_NAME = "gemini-2.5-pro-preview-05-06"
DEFAULT_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_PROBE_TIMEOUT = 30.0  # seconds
DEFAULT_PORT = 3000


class ConfigurationError(Exception):
    """Raised when an environment variable holds an unusable value."""

    def __init__(self, variable: str, value: str, reason: str):
        self.variable = variable
        self.value = value
        super().__init__(f"Invalid value for {variable}={value!r}: {reason}")


@dataclass(frozen=True)
class Settings:
    """Deployment constants for the key checker."""

    model_name: str = DEFAULT_MODEL_NAME
    api_base_url: str = DEFAULT_API_BASE_URL
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    static_dir: Path = Path("public")
    environment: str = "development"
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")


def _parse_float(variable: str, default: float) -> float:
    raw = os.getenv(variable)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(variable, raw, "expected a number") from None
    if value <= 0:
        raise ConfigurationError(variable, raw, "must be greater than zero")
    return value


def _parse_port(variable: str, default: int) -> int:
    raw = os.getenv(variable)
    if raw is None or raw == "":
        return default
    if not raw.isdigit():
        raise ConfigurationError(variable, raw, "expected an integer")
    port = int(raw)
    if not 0 < port < 65536:
        raise ConfigurationError(variable, raw, "must be between 1 and 65535")
    return port


def load_settings() -> Settings:
    """
    Build settings from environment variables.

    Raises:
        ConfigurationError: If a numeric variable cannot be parsed.
    """
    return Settings(
        model_name=os.getenv("GEMINI_PRO_MODEL", DEFAULT_MODEL_NAME),
        api_base_url=os.getenv("GEMINI_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
        probe_timeout=_parse_float("PROBE_TIMEOUT", DEFAULT_PROBE_TIMEOUT),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_parse_port("PORT", DEFAULT_PORT),
        static_dir=Path(os.getenv("STATIC_DIR", "public")),
        environment=os.getenv("ENVIRONMENT", "development"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first call."""
    return load_settings()
