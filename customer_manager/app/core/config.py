"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  A ``.env`` file in the working directory is
loaded first (existing environment variables win), so local setups can
keep the MongoDB connection string out of the shell profile.  Defaults
are provided for every field except the optional log file.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env(name: str, default: str) -> str:
    return os.getenv(name, default)


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: _env("PROJECT_NAME", "Customer Manager"))
    api_version: str = field(default_factory=lambda: _env("API_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE") or None)

    # Connection string for the MongoDB server.  The database is taken
    # from the path component of the URI; see ``core.db``.
    mongodb_uri: str = field(default_factory=lambda: _env("MONGODB_URI", "mongodb://localhost:27017"))

    # Address the HTTP listener binds to.  ``PORT`` mirrors the variable
    # most hosting platforms inject.
    host: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(_env("PORT", "3001")))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Tests construct their own
# ``Settings()`` after patching the environment.
settings = Settings()
