"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from decimal import Decimal
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "UAE Bookkeeping API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "postgresql+psycopg2://localhost:5432/bookkeeping"
    )

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Bookkeeping defaults
    DEFAULT_CURRENCY: str = os.getenv("DEFAULT_CURRENCY", "AED")
    DEFAULT_VAT_RATE: Decimal = Decimal(os.getenv("DEFAULT_VAT_RATE", "0.05"))


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
