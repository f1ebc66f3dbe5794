"""
Service layer for subject links.

``LinkService`` validates requests, checks subject keys against the
registry and delegates persistence to the storage backend chosen at
startup.  It is the only place that decides which error a client sees:
validation problems become ``BadRequestError``, unknown subjects or
links become ``NotFoundError`` and anything raised by the backend is
logged and replaced by an ``InternalServiceError`` with a generic
message.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional
from urllib.parse import urlsplit

from subject_links_api.app.core.errors import (
    BadRequestError,
    InternalServiceError,
    LinkServiceError,
    NotFoundError,
)
from subject_links_api.app.core.subjects import SubjectRegistry
from subject_links_api.app.schemas.link import DEFAULT_ADDED_BY, LinkRead, SubjectLinks
from subject_links_api.app.storage.base import LinkBackend


logger = logging.getLogger(__name__)


_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")

# Schemes that are meaningless without a host.
_HOST_SCHEMES = {"http", "https", "ftp", "ws", "wss"}


def is_valid_url(value: str) -> bool:
    """Return ``True`` if ``value`` parses as an absolute URL.

    Only syntax is checked: a scheme followed by a non-empty remainder,
    and a host for the web schemes.  Reachability is not tested.
    """
    if not value:
        return False
    try:
        parts = urlsplit(value)
        # Accessing ``port`` validates the port number.
        parts.port
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return False
    if parts.scheme.lower() in _HOST_SCHEMES:
        return bool(parts.hostname)
    return bool(parts.netloc or parts.path)


class LinkService:
    """Link operations, one per REST endpoint."""

    def __init__(self, backend: LinkBackend, subjects: SubjectRegistry) -> None:
        self.backend = backend
        self.subjects = subjects

    async def get_all_subjects(self) -> Dict[str, SubjectLinks]:
        """Return every subject with its display name and links."""
        with self._storage_errors("Failed to read subjects"):
            links_by_subject = await self.backend.list_all()
        return {
            subject.key: SubjectLinks(name=subject.name, links=links_by_subject.get(subject.key, []))
            for subject in self.subjects
        }

    async def get_subject_links(self, subject_key: str) -> List[LinkRead]:
        """Return the links of one subject, oldest first."""
        self.subjects.resolve(subject_key)
        with self._storage_errors("Failed to read links"):
            return await self.backend.list_by_subject(subject_key)

    async def add_link(
        self,
        subject_key: str,
        title: Optional[str],
        url: Optional[str],
        added_by: Optional[str] = None,
    ) -> LinkRead:
        """Validate and store a new link.

        Checks run in this order: title and url present, subject
        known, url well formed.  Nothing is written unless all pass.
        """
        title = (title or "").strip()
        url = (url or "").strip()
        if not title or not url:
            raise BadRequestError("Missing title or url")
        self.subjects.resolve(subject_key)
        if not is_valid_url(url):
            raise BadRequestError("Invalid URL")
        added_by = (added_by or "").strip() or DEFAULT_ADDED_BY

        with self._storage_errors("Failed to add link"):
            link = await self.backend.add(subject_key, title, url, added_by)
        logger.info("Added link %s to subject %s", link.id, subject_key)
        return link

    async def delete_link(self, subject_key: str, link_id: str) -> LinkRead:
        """Delete a link identified by subject key and id together."""
        self.subjects.resolve(subject_key)
        with self._storage_errors("Failed to delete link"):
            removed = await self.backend.remove(subject_key, link_id)
        if removed is None:
            raise NotFoundError("Link not found")
        logger.info("Deleted link %s from subject %s", link_id, subject_key)
        return removed

    @contextmanager
    def _storage_errors(self, message: str) -> Iterator[None]:
        """Replace backend exceptions with ``InternalServiceError(message)``."""
        try:
            yield
        except LinkServiceError:
            raise
        except Exception as exc:
            logger.exception("%s (%s storage)", message, self.backend.kind)
            raise InternalServiceError(message) from exc
