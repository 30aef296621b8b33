"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  In a
production deployment you should override these via environment
variables.
"""

import os
from dataclasses import dataclass, field


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Bug Tracker API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Name used as the prefix of alert headers, e.g. ``X-bugTrackerApp-alert``.
    application_name: str = os.getenv("APPLICATION_NAME", "bugTrackerApp")

    # Page size used when a paginated endpoint is called without ``size``,
    # and the upper bound accepted from clients.
    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
    max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "1000"))

    # Path or connection string for the SQLite database.  If a relative
    # path is provided, it will be resolved relative to the project root
    # by the ``db`` module.  Read lazily so tests can point it at a
    # temporary file after import.
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "bug_tracker.db"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
