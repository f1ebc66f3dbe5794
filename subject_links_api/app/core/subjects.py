"""
Registry of the subjects links can be filed under.

The set of subjects is fixed at import time.  Each entry has a display
name and a ``container_id``, the handle the front-end uses for the
block that renders the subject's links.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List

from .errors import NotFoundError


@dataclass(frozen=True)
class Subject:
    key: str
    name: str
    container_id: str


class SubjectRegistry:
    """Read-only lookup of subjects by key, in declaration order."""

    def __init__(self, subjects: List[Subject]) -> None:
        self._subjects: Dict[str, Subject] = {subject.key: subject for subject in subjects}

    def resolve(self, key: str) -> Subject:
        """Return the subject for ``key`` or raise ``NotFoundError``."""
        subject = self._subjects.get(key)
        if subject is None:
            raise NotFoundError("Subject not found")
        return subject

    def keys(self) -> List[str]:
        return list(self._subjects)

    def __contains__(self, key: object) -> bool:
        return key in self._subjects

    def __iter__(self) -> Iterator[Subject]:
        return iter(self._subjects.values())

    def __len__(self) -> int:
        return len(self._subjects)


SUBJECTS = SubjectRegistry(
    [
        Subject("toc", "Theory of Computation", "tocLinks"),
        Subject("ai", "Artificial Intelligence", "aiLinks"),
        Subject("sepm", "Software Engineering Project Management", "sepmLinks"),
        Subject("cn", "Computer Networks", "cnLinks"),
        Subject("rm", "Research Methodology", "rmLinks"),
    ]
)
