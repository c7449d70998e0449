"""Projects API endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from devboard.database import get_db
from devboard.repositories import ProjectRepository
from devboard.schemas.project import (
    ERROR_RESPONSES,
    ProjectCreate,
    ProjectCreateResponse,
    ProjectDetail,
    ProjectDetailResponse,
    ProjectListResponse,
    ProjectLogResponse,
    ProjectResponse,
    ProjectUpdate,
    SuccessResponse,
)
from devboard.utils.exceptions import StorageError, handle_database_error, not_found_error
from devboard.utils.logger import logger

router = APIRouter(prefix="/api/projects", tags=["projects"], responses=ERROR_RESPONSES)


def get_project_repo(db: Session = Depends(get_db)) -> ProjectRepository:
    return ProjectRepository(db)


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    repo: ProjectRepository = Depends(get_project_repo),
) -> ProjectListResponse:
    """
    Get all projects, most recently updated first.

    Returns:
        Envelope with the list of projects
    """
    try:
        projects = repo.list_projects()
        return ProjectListResponse(data=[ProjectResponse.from_orm(p) for p in projects])
    except StorageError as e:
        logger.error(f"Failed to list projects: {e}", exc_info=True)
        raise handle_database_error(e, "list_projects")


@router.post("", response_model=ProjectCreateResponse)
async def create_project(
    project: ProjectCreate,
    repo: ProjectRepository = Depends(get_project_repo),
) -> ProjectCreateResponse:
    """
    Create a new project.

    Args:
        project: Project creation data
        repo: Project repository

    Returns:
        Envelope with the new project id
    """
    try:
        project_id = repo.create(project.model_dump())
        return ProjectCreateResponse(id=project_id)
    except StorageError as e:
        logger.error(f"Failed to create project {project.slug}: {e}", exc_info=True)
        raise handle_database_error(e, "create_project")


@router.get("/{slug}", response_model=ProjectDetailResponse)
async def get_project(
    slug: str,
    repo: ProjectRepository = Depends(get_project_repo),
) -> ProjectDetailResponse:
    """
    Get a project and its activity log by slug.

    Args:
        slug: The project slug
        repo: Project repository

    Returns:
        Envelope with the project and its most recent logs
    """
    try:
        project = repo.get_by_slug(slug)
        if not project:
            raise not_found_error("Project")

        logs = repo.get_logs(project.id)
        return ProjectDetailResponse(
            data=ProjectDetail(
                project=ProjectResponse.from_orm(project),
                logs=[ProjectLogResponse.from_orm(log) for log in logs],
            )
        )
    except HTTPException:
        raise
    except StorageError as e:
        logger.error(f"Failed to get project {slug}: {e}", exc_info=True)
        raise handle_database_error(e, "get_project")


@router.patch("/{slug}", response_model=SuccessResponse)
async def update_project(
    slug: str,
    project_update: ProjectUpdate,
    repo: ProjectRepository = Depends(get_project_repo),
) -> SuccessResponse:
    """
    Partially update a project; only supplied fields change.

    Args:
        slug: The project slug to update
        project_update: Fields to change
        repo: Project repository
    """
    try:
        project = repo.get_by_slug(slug)
        if not project:
            raise not_found_error("Project")

        repo.update(project.id, project_update.model_dump(exclude_unset=True))
        return SuccessResponse()
    except HTTPException:
        raise
    except StorageError as e:
        logger.error(f"Failed to update project {slug}: {e}", exc_info=True)
        raise handle_database_error(e, "update_project")


@router.delete("/{slug}", response_model=SuccessResponse)
async def delete_project(
    slug: str,
    repo: ProjectRepository = Depends(get_project_repo),
) -> SuccessResponse:
    """
    Delete a project; its activity log goes with it.

    Args:
        slug: The project slug to delete
        repo: Project repository
    """
    try:
        project = repo.get_by_slug(slug)
        if not project:
            raise not_found_error("Project")

        repo.delete(project.id)
        return SuccessResponse()
    except HTTPException:
        raise
    except StorageError as e:
        logger.error(f"Failed to delete project {slug}: {e}", exc_info=True)
        raise handle_database_error(e, "delete_project")
