"""
Storage backend interface.

Defines the ``LinkBackend`` abstract class the link service talks to.
Two implementations exist: ``DatabaseLinkBackend`` (SQLite) and
``JsonFileLinkBackend`` (a single JSON document on disk).  Exactly one
is selected at startup by ``create_backend``.

Backends do not validate input and do not check subject keys beyond
what they need to stay consistent; that is the service's job.  Storage
errors are raised as-is and translated by the service.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..core.subjects import SubjectRegistry
from ..schemas.link import LinkRead


class LinkBackend(ABC):
    """Abstract persistence for subject links."""

    #: Short name reported by the health endpoint.
    kind: str = ""

    def __init__(self, subjects: SubjectRegistry) -> None:
        self.subjects = subjects

    async def initialise(self) -> None:
        """Prepare the store once at application startup."""

    @abstractmethod
    async def list_all(self) -> Dict[str, List[LinkRead]]:
        """Return links for every known subject, oldest first.

        Every subject in the registry is present in the result, with an
        empty list when it has no links.
        """

    @abstractmethod
    async def list_by_subject(self, subject_key: str) -> List[LinkRead]:
        """Return the links filed under ``subject_key``, oldest first."""

    @abstractmethod
    async def add(
        self,
        subject_key: str,
        title: str,
        url: str,
        added_by: Optional[str] = None,
    ) -> LinkRead:
        """Persist a new link and return it with its id and timestamp."""

    @abstractmethod
    async def remove(self, subject_key: str, link_id: str) -> Optional[LinkRead]:
        """Delete the link matching both ``subject_key`` and ``link_id``.

        Returns the removed link, or ``None`` when nothing matched (in
        which case nothing is changed).
        """
