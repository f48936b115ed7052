# -*- coding: utf-8 -*-


from pathlib import Path
from dataclasses import dataclass
from typing import Optional
import os

from dotenv import load_dotenv

# ============================================================================
# Load .env file for local environment configuration
# ============================================================================
load_dotenv()  # Load from .env file in project root

# ============================================================================
# Read settings from environment variables (from .env or system)
# ============================================================================
# API Settings
_API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8080/api")
_API_TIMEOUT = int(os.getenv("API_TIMEOUT", "30"))
_API_TOKEN = os.getenv("API_TOKEN", None)
_API_VERIFY_SSL = os.getenv("API_VERIFY_SSL", "true").lower() in ("true", "1", "yes")

# Links to records created by the backend (shown on the terminal steps)
_RECORD_URL_BASE = os.getenv("RECORD_URL_BASE", "")

# Logging
_LOGS_DIR = os.getenv("LOGS_DIR", None)


@dataclass
class Config:
    """Application configuration."""

    # Application Info
    APP_NAME: str = "Registration Change"
    APP_TITLE: str = "Registration Change Wizard"
    VERSION: str = "1.0.0"

    # HTTP API Backend Settings
    # If .env not found, uses default (http://localhost:8080/api)
    API_BASE_URL: str = _API_BASE_URL
    API_VERSION: str = "v1"
    API_TIMEOUT: int = _API_TIMEOUT
    API_TOKEN: Optional[str] = _API_TOKEN
    API_VERIFY_SSL: bool = _API_VERIFY_SSL

    RECORD_URL_BASE: str = _RECORD_URL_BASE

    # Wizard rules
    MIN_REGISTRANT_ID_LENGTH: int = 15
    SEARCH_MIN_CHARS: int = 2
    CURRENCY_SYMBOL: str = "$"

    # Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    LOGS_DIR: Path = Path(_LOGS_DIR) if _LOGS_DIR else PROJECT_ROOT / "logs"

    # Logging
    LOG_FILE: str = "app.log"
    LOG_PATH: Path = LOGS_DIR / LOG_FILE
    LOG_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT: int = 3

    # Date/Time Formats
    DATE_FORMAT: str = "%Y-%m-%d"
    DATE_FORMAT_DISPLAY: str = "%b %d, %Y"
