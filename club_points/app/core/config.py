"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with no configuration at all; override them via
environment variables when deploying.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Music Club Points")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None
    # Rotation for ``LOG_FILE``: size in bytes before rolling over, and
    # how many rolled files to keep.
    log_max_bytes: int = int(os.getenv("LOG_MAX_BYTES", "1000000"))
    log_backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "3"))

    # Path to the SQLite file holding the key-value store.  A relative
    # path is resolved against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "club_points.db")

    # File name used for the ranking export.  The file is always written
    # into a fresh temporary directory, so only the base name matters.
    export_filename: str = os.getenv("EXPORT_FILENAME", "Kulup_Siralama.csv")

    # ``tr`` keeps the header of the original club spreadsheet
    # (``Sira,Isim,Toplam Puan``); ``en`` switches to ``Rank,Name,TotalPoints``.
    export_header_locale: str = os.getenv("EXPORT_HEADER_LOCALE", "tr")

    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
