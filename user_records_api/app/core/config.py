"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with an in-memory store and no further setup.  In a
production deployment you should override these via environment
variables.
"""

import os
from dataclasses import dataclass


STORAGE_BACKENDS = ("memory", "sqlite")


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "User Records API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Bind address used by ``run.py``.
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))

    # Which record store backs the service: ``memory`` keeps an ordered
    # list in the process, ``sqlite`` persists to ``database_url``.
    storage_backend: str = os.getenv("STORAGE_BACKEND", "memory")

    # Path to the SQLite database file.  If a relative path is provided,
    # it will be resolved relative to the project root by the ``db``
    # module.
    database_url: str = os.getenv("DATABASE_URL", "user_records.db")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class creation time, environment variables should
# be set before importing this module.
settings = Settings()
