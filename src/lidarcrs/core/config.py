"""
Configuration settings for lidarcrs.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Library settings with environment variable support.

    Attributes:
        environment: Deployment environment, selects logging defaults
        log_level: Log level name; DEBUG in development, INFO otherwise
        json_logs: Whether file logs are written as JSON
        log_file: Optional path of a rotating log file
        header_mismatch_warnings: Whether to warn when the header's WKT flag
            disagrees with the CRS records actually found
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="LIDARCRS_",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"

    # Logging
    log_level: Optional[str] = None
    json_logs: bool = False
    log_file: Optional[Path] = None

    # Diagnostics
    header_mismatch_warnings: bool = True

    @property
    def effective_log_level(self) -> str:
        """Get the configured log level, falling back to the environment default."""
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.environment == "development" else "INFO"


# Global settings instance
settings = Settings()
