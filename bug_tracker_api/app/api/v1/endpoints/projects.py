"""
Project endpoints for API v1.

CRUD over projects; the collection is paginated with ``page``, ``size``
and ``sort`` (e.g. ``sort=name,asc``).
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from bug_tracker_api.app.core.config import settings
from bug_tracker_api.app.core.headers import (
    create_entity_creation_alert,
    create_entity_deletion_alert,
    create_entity_update_alert,
    generate_pagination_headers,
)
from bug_tracker_api.app.core.security import get_current_user
from bug_tracker_api.app.schemas.project import ProjectPatch, ProjectRead, ProjectWrite
from bug_tracker_api.app.services.project_service import ENTITY_NAME, ProjectService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_in: ProjectWrite,
    request: Request,
    response: Response,
    current_user: dict = Depends(get_current_user),
) -> ProjectRead:
    logger.debug("REST request to save Project : %s", project_in)
    project = await ProjectService.create_project(project_in)
    response.headers["Location"] = f"{request.url.path}/{project.id}"
    response.headers.update(create_entity_creation_alert(ENTITY_NAME, project.id))
    return ProjectRead.model_validate(project)


@router.put("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: str,
    project_in: ProjectWrite,
    response: Response,
    current_user: dict = Depends(get_current_user),
) -> ProjectRead:
    logger.debug("REST request to update Project : %s, %s", project_id, project_in)
    project = await ProjectService.update_project(project_id, project_in)
    response.headers.update(create_entity_update_alert(ENTITY_NAME, project.id))
    return ProjectRead.model_validate(project)


@router.patch("/{project_id}", response_model=ProjectRead)
async def partial_update_project(
    project_id: str,
    project_in: ProjectPatch,
    response: Response,
    current_user: dict = Depends(get_current_user),
) -> ProjectRead:
    logger.debug("REST request to partial update Project partially : %s, %s", project_id, project_in)
    project = await ProjectService.partial_update_project(project_id, project_in)
    response.headers.update(create_entity_update_alert(ENTITY_NAME, project.id))
    return ProjectRead.model_validate(project)


@router.get("", response_model=List[ProjectRead])
async def list_projects(
    request: Request,
    response: Response,
    page: int = Query(0, ge=0),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    sort: Optional[List[str]] = Query(None),
    current_user: dict = Depends(get_current_user),
) -> List[ProjectRead]:
    logger.debug("REST request to get a page of Projects")
    projects, total = await ProjectService.list_projects(page, size, sort)
    response.headers.update(generate_pagination_headers(request.url, page, size, total))
    return [ProjectRead.model_validate(project) for project in projects]


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(project_id: str, current_user: dict = Depends(get_current_user)) -> ProjectRead:
    logger.debug("REST request to get Project : %s", project_id)
    project = await ProjectService.get_project(project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return ProjectRead.model_validate(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(project_id: str, current_user: dict = Depends(get_current_user)) -> Response:
    """Delete a project; its tickets are kept without a project."""
    logger.debug("REST request to delete Project : %s", project_id)
    await ProjectService.delete_project(project_id)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=create_entity_deletion_alert(ENTITY_NAME, project_id),
    )
