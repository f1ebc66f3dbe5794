"""
Storage backends for subject links.

``create_backend`` picks the implementation once, from the settings:
a configured ``database_url`` selects the database, anything else the
JSON file.
"""

from ..core.config import Settings
from ..core.subjects import SUBJECTS, SubjectRegistry
from .base import LinkBackend
from .database import DatabaseLinkBackend
from .json_file import JsonFileLinkBackend


def create_backend(settings: Settings, subjects: SubjectRegistry = SUBJECTS) -> LinkBackend:
    """Return the storage backend selected by ``settings``."""
    if settings.use_database:
        return DatabaseLinkBackend(subjects, settings.database_path)
    return JsonFileLinkBackend(subjects, settings.resolve_path(settings.data_file))


__all__ = [
    "LinkBackend",
    "DatabaseLinkBackend",
    "JsonFileLinkBackend",
    "create_backend",
]
