"""
Business logic for projects.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from bug_tracker_api.app.core.errors import EntityNotFound
from bug_tracker_api.app.domain.entities import Project
from bug_tracker_api.app.domain.merge import merge_patch
from bug_tracker_api.app.repositories import ProjectRepository
from bug_tracker_api.app.schemas.project import ProjectPatch, ProjectWrite

from .validation import check_new, check_update, ensure_exists

logger = logging.getLogger(__name__)

ENTITY_NAME = Project.entity_name


class ProjectService:
    """Service for managing projects.

    Deleting a project keeps its tickets; their ``project`` reference is
    cleared by the database.
    """

    @classmethod
    async def create_project(cls, data: ProjectWrite) -> Project:
        check_new(ENTITY_NAME, data.id)
        project = await ProjectRepository.save(Project(name=data.name, description=data.description))
        logger.info("Created project %s '%s'", project.id, project.name)
        return project

    @classmethod
    async def update_project(cls, project_id: str, data: ProjectWrite) -> Project:
        check_update(ENTITY_NAME, project_id, data.id)
        await ensure_exists(ProjectRepository, ENTITY_NAME, project_id)
        project = await ProjectRepository.save(
            Project(id=project_id, name=data.name, description=data.description)
        )
        logger.info("Updated project %s", project_id)
        return project

    @classmethod
    async def partial_update_project(cls, project_id: str, patch: ProjectPatch) -> Project:
        check_update(ENTITY_NAME, project_id, patch.id)
        await ensure_exists(ProjectRepository, ENTITY_NAME, project_id)
        project = await ProjectRepository.find_by_id(project_id)
        if project is None:
            raise EntityNotFound(ENTITY_NAME, project_id)
        merge_patch(project, patch)
        await ProjectRepository.save(project)
        logger.info("Partially updated project %s", project_id)
        return project

    @classmethod
    async def get_project(cls, project_id: str) -> Optional[Project]:
        return await ProjectRepository.find_by_id(project_id)

    @classmethod
    async def list_projects(
        cls, page: int, size: int, sort: Optional[Sequence[str]] = None
    ) -> Tuple[List[Project], int]:
        total = await ProjectRepository.count()
        projects = await ProjectRepository.find_all_by(page, size, sort)
        return projects, total

    @classmethod
    async def delete_project(cls, project_id: str) -> None:
        await ProjectRepository.delete_by_id(project_id)
