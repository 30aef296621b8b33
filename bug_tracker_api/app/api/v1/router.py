"""
Top‑level router for version 1 of the API.

Aggregates the entity routers under their collection prefixes.
"""

from fastapi import APIRouter

from .endpoints import labels, projects, tickets, users

router = APIRouter()

router.include_router(projects.router, prefix="/projects", tags=["projects"])
router.include_router(tickets.router, prefix="/tickets", tags=["tickets"])
router.include_router(labels.router, prefix="/labels", tags=["labels"])
router.include_router(users.router, prefix="/users", tags=["users"])
