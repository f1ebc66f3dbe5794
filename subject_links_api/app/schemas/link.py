"""
Pydantic schemas for subject links.

Field names on the wire are camelCase (``subjectKey``, ``addedBy``,
``addedAt``) and the identifier is exposed as ``_id``, which is also
how links are stored in the JSON data file.  Both storage backends
return ``LinkRead`` instances so clients see the same shape whichever
backend is active.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_ADDED_BY = "admin"


class LinkCreate(BaseModel):
    """Request body for adding a link.

    ``title`` and ``url`` are optional here so that a missing value is
    reported by the service as a 400 with a readable message rather
    than as a schema validation error.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, description="Display title of the link")
    url: Optional[str] = Field(None, description="Absolute URL of the resource")
    added_by: Optional[str] = Field(
        None,
        alias="addedBy",
        description="Free-text attribution; defaults to 'admin'",
    )


class LinkRead(BaseModel):
    """A stored link as returned to clients."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    subject_key: str = Field(..., alias="subjectKey")
    title: str
    url: str
    added_by: str = Field(DEFAULT_ADDED_BY, alias="addedBy")
    added_at: str = Field(..., alias="addedAt")

    def to_document(self) -> Dict[str, str]:
        """Serialise using the wire field names, as stored in the data file."""
        return self.model_dump(by_alias=True)


class SubjectLinks(BaseModel):
    """A subject's display name together with its links."""

    name: str
    links: List[LinkRead] = Field(default_factory=list)
