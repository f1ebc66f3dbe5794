"""
FastAPI dependencies shared by the endpoint modules.

The link service is built once by ``create_app`` and stored on
``app.state``; routes obtain it through ``get_link_service``.
"""

from fastapi import Request

from subject_links_api.app.services.link_service import LinkService


def get_link_service(request: Request) -> LinkService:
    """Return the application's ``LinkService``."""
    return request.app.state.link_service
