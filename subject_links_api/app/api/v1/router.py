"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import health, subjects

router = APIRouter()

router.include_router(subjects.router, prefix="/subjects", tags=["subjects"])
router.include_router(health.router, prefix="/health", tags=["health"])
