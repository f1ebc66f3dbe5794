"""
Subject and link endpoints for API v1.

These routes list the subjects with their links and add or delete
links of a single subject.  Errors raised by ``LinkService`` are turned
into JSON responses by the exception handlers registered in
``create_app``; the handlers here only pass data through.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Body, Depends, status

from subject_links_api.app.api.deps import get_link_service
from subject_links_api.app.schemas.link import LinkCreate, LinkRead, SubjectLinks
from subject_links_api.app.services.link_service import LinkService

router = APIRouter()


@router.get("", response_model=Dict[str, SubjectLinks])
async def list_subjects(
    service: LinkService = Depends(get_link_service),
) -> Dict[str, SubjectLinks]:
    """Return every subject keyed by subject key, each with its name and links."""
    return await service.get_all_subjects()


@router.get("/{subject_key}/links", response_model=List[LinkRead])
async def list_subject_links(
    subject_key: str,
    service: LinkService = Depends(get_link_service),
) -> List[LinkRead]:
    """Return the links of one subject, oldest first.

    Returns HTTP 404 if the subject key is unknown.
    """
    return await service.get_subject_links(subject_key)


@router.post("/{subject_key}/links", response_model=LinkRead, status_code=status.HTTP_201_CREATED)
async def add_subject_link(
    subject_key: str,
    link_in: Optional[LinkCreate] = Body(None),
    service: LinkService = Depends(get_link_service),
) -> LinkRead:
    """Add a link to a subject.

    ``title`` and ``url`` are required and ``url`` must be an absolute
    URL (HTTP 400 otherwise).  ``addedBy`` defaults to ``admin``.
    Returns HTTP 404 if the subject key is unknown.
    """
    link_in = link_in or LinkCreate()
    return await service.add_link(subject_key, link_in.title, link_in.url, link_in.added_by)


@router.delete("/{subject_key}/links/{link_id}", response_model=LinkRead)
async def delete_subject_link(
    subject_key: str,
    link_id: str,
    service: LinkService = Depends(get_link_service),
) -> LinkRead:
    """Delete a link and return it.

    The link must belong to ``subject_key``; HTTP 404 is returned for an
    unknown subject or when no link of that subject has ``link_id``.
    """
    return await service.delete_link(subject_key, link_id)
