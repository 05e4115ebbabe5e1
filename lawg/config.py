"""
Configuration Management for lawg
=================================

This module handles:
- Reading LAWG_* settings from the environment and the nearest .env file
- Validating logger defaults (timezone, timestamp format, encoding)
- Providing centralized configuration access
- Setting up the library's own diagnostic logger

Usage:
    from lawg.config import config
    use_utc = config.USE_UTC
    encoding = config.ENCODING
"""

import logging
from typing import Optional
from dotenv import find_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class LawgSettings(BaseSettings):
    """
    Centralized configuration class using Pydantic for validation
    Loads LAWG_* settings from environment variables with type checking
    """

    model_config = SettingsConfigDict(
        env_prefix="LAWG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =============================================================================
    # APPLICATION SETTINGS
    # =============================================================================

    APP_NAME: str = "lawg"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "WARNING"

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        """Ensure the diagnostic log level is a stdlib level name"""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    # =============================================================================
    # LOGGER DEFAULTS
    # =============================================================================

    USE_UTC: bool = True
    TIMESTAMP_FORMAT: Optional[str] = None  # None means RFC 3339
    ENCODING: str = "utf-8"

    @field_validator('TIMESTAMP_FORMAT')
    @classmethod
    def validate_timestamp_format(cls, v):
        """Treat a blank format as unset"""
        if v is not None and not v.strip():
            return None
        return v

    def setup_logging(self) -> None:
        """Configure the library's diagnostic logger"""
        logger = logging.getLogger("lawg")
        if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
            logger.addHandler(logging.NullHandler())
        logger.setLevel(getattr(logging, self.LOG_LEVEL))

    def validate_configuration(self) -> bool:
        """
        Validate that all critical configuration is properly set
        Returns True if configuration is valid, raises exception otherwise
        """
        try:
            "".encode(self.ENCODING)
        except LookupError as e:
            logging.getLogger(__name__).error(f"Configuration validation failed: {e}")
            raise ValueError(f"Unknown encoding: {self.ENCODING}") from e

        return True


def load_configuration() -> LawgSettings:
    """
    Load and validate configuration from environment
    Sets up the diagnostic logger

    The nearest .env file (searched upward from the working directory) is
    read for LAWG_* values only; os.environ is left untouched.
    """
    env_file = find_dotenv(usecwd=True)

    settings = LawgSettings(_env_file=env_file or None)
    settings.setup_logging()
    settings.validate_configuration()

    logging.getLogger(__name__).debug(
        f"Configuration loaded for {settings.APP_NAME} v{settings.APP_VERSION}"
    )
    return settings


# =============================================================================
# GLOBAL CONFIGURATION INSTANCE
# =============================================================================

config = load_configuration()
