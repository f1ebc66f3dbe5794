"""Health check endpoint."""

from typing import Dict

from fastapi import APIRouter, Depends

from subject_links_api.app.api.deps import get_link_service
from subject_links_api.app.services.link_service import LinkService

router = APIRouter()


@router.get("", response_model=Dict[str, str])
async def health_check(service: LinkService = Depends(get_link_service)) -> Dict[str, str]:
    """Report that the API is up and which storage backend it uses."""
    return {"status": "ok", "storage": service.backend.kind}
