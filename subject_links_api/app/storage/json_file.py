"""
JSON file link storage, used when no database is configured.

The whole dataset is one JSON document mapping each subject key to
``{"name": ..., "links": [...]}``.  The file is the only source of
truth: every operation makes sure it exists, reads and parses it, and
mutating operations rewrite it completely.  Nothing is cached between
calls.

File reads and writes are blocking calls made from the event loop, so
within one process each operation already runs to completion before
the next starts.  The ``asyncio.Lock`` keeps operations serialised if
the file I/O is ever moved off the loop.  Other processes writing the
same file are not coordinated with, so two of them can still overwrite
each other's additions (last write wins).

Rewrites go to a temporary file next to the data file which then
replaces it, so a failed write leaves the previous contents intact.

New link ids are the creation time in microseconds, base-36 encoded.
Two links added within the same microsecond would share an id; with a
single administrator adding links by hand this is accepted.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core.subjects import SubjectRegistry
from ..schemas.link import DEFAULT_ADDED_BY, LinkRead
from .base import LinkBackend


logger = logging.getLogger(__name__)


_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_link_id() -> str:
    """Return a compact id derived from the current time."""
    return _to_base36(time.time_ns() // 1000)


def utc_timestamp() -> str:
    """Current UTC time as ISO 8601 with milliseconds and a ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class JsonFileLinkBackend(LinkBackend):
    """Link storage in a single pretty-printed JSON file."""

    kind = "file"

    def __init__(self, subjects: SubjectRegistry, data_file: Union[str, Path]) -> None:
        super().__init__(subjects)
        self.data_file = Path(data_file)
        self._lock = asyncio.Lock()

    async def initialise(self) -> None:
        async with self._lock:
            self._ensure_data_file()
        logger.info("No database configured. Using local JSON storage at %s", self.data_file)

    async def list_all(self) -> Dict[str, List[LinkRead]]:
        async with self._lock:
            data = self._read()
        return {key: self._links_of(data, key) for key in self.subjects.keys()}

    async def list_by_subject(self, subject_key: str) -> List[LinkRead]:
        async with self._lock:
            data = self._read()
        return self._links_of(data, subject_key)

    async def add(
        self,
        subject_key: str,
        title: str,
        url: str,
        added_by: Optional[str] = None,
    ) -> LinkRead:
        link = LinkRead(
            id=generate_link_id(),
            subject_key=subject_key,
            title=title,
            url=url,
            added_by=added_by or DEFAULT_ADDED_BY,
            added_at=utc_timestamp(),
        )
        async with self._lock:
            data = self._read()
            entry = data.setdefault(
                subject_key,
                {"name": self.subjects.resolve(subject_key).name, "links": []},
            )
            entry.setdefault("links", []).append(link.to_document())
            self._write(data)
        return link

    async def remove(self, subject_key: str, link_id: str) -> Optional[LinkRead]:
        async with self._lock:
            data = self._read()
            links = data.get(subject_key, {}).get("links", [])
            for index, document in enumerate(links):
                if (document.get("_id") or "") == link_id:
                    break
            else:
                return None
            removed = LinkRead.model_validate(links.pop(index))
            self._write(data)
        return removed

    # -- file helpers --------------------------------------------------

    def default_data(self) -> Dict[str, Any]:
        """Empty dataset with an entry for every known subject."""
        return {subject.key: {"name": subject.name, "links": []} for subject in self.subjects}

    def _ensure_data_file(self) -> None:
        if not self.data_file.exists():
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            self._write(self.default_data())

    def _read(self) -> Dict[str, Any]:
        self._ensure_data_file()
        with self.data_file.open("r", encoding="utf-8") as fh:
            return json.load(fh)

    def _write(self, data: Dict[str, Any]) -> None:
        tmp_file = self.data_file.with_suffix(".tmp")
        try:
            with tmp_file.open("w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, ensure_ascii=False)
                fh.write("\n")
            os.replace(tmp_file, self.data_file)
        except Exception:
            tmp_file.unlink(missing_ok=True)
            raise

    @staticmethod
    def _links_of(data: Dict[str, Any], subject_key: str) -> List[LinkRead]:
        entry = data.get(subject_key) or {}
        return [LinkRead.model_validate(document) for document in entry.get("links") or []]
