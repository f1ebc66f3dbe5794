"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields, so the
service starts in JSON file mode with no configuration at all.  Call
``Settings.from_env()`` once at startup and hand the resulting object
to the components that need it; the object is frozen so nothing can
change the storage selection after the application has been built.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple


# Directory that contains the ``subject_links_api`` package.  Relative
# paths in the settings are resolved against it.
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent

SQLITE_PREFIX = "sqlite:///"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


def _split_origins(value: str) -> Tuple[str, ...]:
    return tuple(origin.strip() for origin in value.split(",") if origin.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = "Subject Links API"
    api_version: str = "1.0.0"
    log_level: str = "INFO"
    log_file: str = ""

    # Connection string for the database backend.  When empty the
    # service falls back to the JSON file named by ``data_file``.
    database_url: str = ""
    data_file: str = "data.json"

    # Directory holding the front-end (``index.html`` and assets).  An
    # empty value or a missing directory disables static serving.
    static_dir: str = ""
    cors_origins: Tuple[str, ...] = ("*",)

    host: str = "0.0.0.0"
    port: int = 8000

    def __post_init__(self) -> None:
        # Unknown or misspelt levels fall back to INFO so that the root
        # logger and uvicorn always agree on a level they both accept.
        level = self.log_level.strip().upper()
        level = LOG_LEVEL_ALIASES.get(level, level)
        object.__setattr__(self, "log_level", level if level in LOG_LEVELS else "INFO")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current process environment."""
        return cls(
            project_name=os.getenv("PROJECT_NAME", cls.project_name),
            api_version=os.getenv("API_VERSION", cls.api_version),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            log_file=os.getenv("LOG_FILE", cls.log_file),
            database_url=os.getenv("DATABASE_URL", cls.database_url).strip(),
            data_file=os.getenv("DATA_FILE", cls.data_file),
            static_dir=os.getenv("STATIC_DIR", cls.static_dir),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", str(cls.port))),
        )

    @property
    def use_database(self) -> bool:
        """True when a database connection string is configured."""
        return bool(self.database_url)

    def resolve_path(self, value: str) -> Path:
        """Resolve ``value`` against the project root unless it is absolute."""
        path = Path(value)
        if path.is_absolute():
            return path
        return (PROJECT_ROOT / path).resolve()

    @property
    def database_path(self) -> Path:
        """Database file path; a ``sqlite:///`` prefix is accepted and stripped."""
        url = self.database_url
        if url.startswith(SQLITE_PREFIX):
            url = url[len(SQLITE_PREFIX):]
        return self.resolve_path(url)

    @property
    def log_path(self) -> Optional[Path]:
        """Resolved log file path, or ``None`` when file logging is off."""
        if not self.log_file.strip():
            return None
        return self.resolve_path(self.log_file.strip())
