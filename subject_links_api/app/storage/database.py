"""
Database-backed link storage.

Links live in the ``links`` table created by ``core.db.init_db``.
Filtering by subject and ordering by ``added_at`` are done in SQL, and
ids and timestamps are assigned by SQLite.  Every write is a single
statement, so concurrent requests cannot lose each other's updates.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..core.db import get_connection, get_cursor, init_db
from ..core.subjects import SubjectRegistry
from ..schemas.link import DEFAULT_ADDED_BY, LinkRead
from .base import LinkBackend


logger = logging.getLogger(__name__)


_SELECT = "SELECT id, subject_key, title, url, added_by, added_at FROM links"


def _is_canonical_id(link_id: str) -> bool:
    """True for plain ASCII decimal ids without sign, padding or separators."""
    return (
        isinstance(link_id, str)
        and link_id.isascii()
        and link_id.isdigit()
        and str(int(link_id)) == link_id
    )


class DatabaseLinkBackend(LinkBackend):
    """Link storage in a SQLite database."""

    kind = "database"

    def __init__(self, subjects: SubjectRegistry, db_path: Union[str, Path]) -> None:
        super().__init__(subjects)
        self.db_path = Path(db_path)

    async def initialise(self) -> None:
        init_db(self.db_path)
        logger.info("Connected to database at %s", self.db_path)

    async def list_all(self) -> Dict[str, List[LinkRead]]:
        result: Dict[str, List[LinkRead]] = {key: [] for key in self.subjects.keys()}
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(f"{_SELECT} ORDER BY added_at ASC, id ASC").fetchall()
        finally:
            conn.close()
        for row in rows:
            # Rows for subjects that were dropped from the registry are skipped.
            if row["subject_key"] in result:
                result[row["subject_key"]].append(self._row_to_link(row))
        return result

    async def list_by_subject(self, subject_key: str) -> List[LinkRead]:
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(
                f"{_SELECT} WHERE subject_key = ? ORDER BY added_at ASC, id ASC",
                (subject_key,),
            ).fetchall()
        finally:
            conn.close()
        return [self._row_to_link(row) for row in rows]

    async def add(
        self,
        subject_key: str,
        title: str,
        url: str,
        added_by: Optional[str] = None,
    ) -> LinkRead:
        with get_cursor(self.db_path) as cursor:
            cursor.execute(
                "INSERT INTO links (subject_key, title, url, added_by) VALUES (?, ?, ?, ?)",
                (subject_key, title, url, added_by or DEFAULT_ADDED_BY),
            )
            row = cursor.execute(f"{_SELECT} WHERE id = ?", (cursor.lastrowid,)).fetchone()
        return self._row_to_link(row)

    async def remove(self, subject_key: str, link_id: str) -> Optional[LinkRead]:
        # Only the exact spelling handed out by ``_row_to_link`` matches.
        if not _is_canonical_id(link_id):
            return None
        numeric_id = int(link_id)
        with get_cursor(self.db_path) as cursor:
            row = cursor.execute(
                f"{_SELECT} WHERE id = ? AND subject_key = ?",
                (numeric_id, subject_key),
            ).fetchone()
            if row is None:
                return None
            cursor.execute(
                "DELETE FROM links WHERE id = ? AND subject_key = ?",
                (numeric_id, subject_key),
            )
        return self._row_to_link(row)

    @staticmethod
    def _row_to_link(row: sqlite3.Row) -> LinkRead:
        """Convert a database row to a ``LinkRead`` instance."""
        return LinkRead(
            id=str(row["id"]),
            subject_key=row["subject_key"],
            title=row["title"],
            url=row["url"],
            added_by=row["added_by"],
            added_at=row["added_at"],
        )
