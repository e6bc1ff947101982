"""
Configuration management for ContainerGuard.

Centralized configuration with environment variable support. Docker
connection settings (DOCKER_HOST, DOCKER_TLS_VERIFY, DOCKER_CERT_PATH) are
not duplicated here; the Docker SDK reads them directly.
"""

import os
from typing import Optional
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

DEFAULT_VULNERS_URL = "https://vulners.com/api/v3/audit/audit/"
DEFAULT_VULNERS_TIMEOUT = 30.0

LOG_FORMATS = ("text", "json")


@dataclass
class Config:
    """Application configuration."""

    # Vulners API
    vulners_url: str = field(
        default_factory=lambda: os.getenv("VULNERS_URL", DEFAULT_VULNERS_URL)
    )
    vulners_timeout: float = field(
        default_factory=lambda: float(os.getenv("VULNERS_TIMEOUT", str(DEFAULT_VULNERS_TIMEOUT)))
    )
    vulners_api_key: Optional[str] = field(
        default_factory=lambda: os.getenv("VULNERS_API_KEY") or None
    )

    # Scanning
    continue_on_error: bool = field(
        default_factory=lambda: os.getenv("CONTINUE_ON_ERROR", "false").lower() == "true"
    )

    # Logging
    log_level: str = field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO")
    )
    log_format: str = field(
        default_factory=lambda: os.getenv("LOG_FORMAT", "text")  # text, json
    )

    def __post_init__(self):
        """Validate configuration."""
        if self.vulners_timeout <= 0:
            raise ValueError(
                f"VULNERS_TIMEOUT must be positive, got {self.vulners_timeout}"
            )

        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, got {self.log_format!r}"
            )


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Optional[Config]):
    """Set global configuration instance."""
    global _config
    _config = config


def load_config_from_file(path: str) -> Config:
    """Load configuration from .env file."""
    load_dotenv(path, override=True)
    # Reset config to reload from new env vars
    set_config(None)
    return get_config()
