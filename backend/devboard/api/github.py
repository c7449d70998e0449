"""GitHub enrichment endpoints."""
from fastapi import APIRouter, Depends

from devboard.api.projects import get_project_repo
from devboard.repositories import ProjectRepository
from devboard.schemas.github import (
    RepositorySnapshot,
    RepositorySnapshotResponse,
    UserRepositoryListResponse,
)
from devboard.schemas.project import ERROR_RESPONSES
from devboard.services.github import GitHubService, get_github_service
from devboard.utils.exceptions import StorageError, handle_database_error, not_found_error, validation_error
from devboard.utils.logger import logger

router = APIRouter(prefix="/api/github", tags=["github"], responses=ERROR_RESPONSES)


# Registered before /{slug} so "repos" is not captured as a slug
@router.get("/repos", response_model=UserRepositoryListResponse)
async def list_repositories(
    github: GitHubService = Depends(get_github_service),
) -> UserRepositoryListResponse:
    """Repositories owned by the authenticated account, for the import picker."""
    repos = await github.list_owned_repositories()
    return UserRepositoryListResponse(data=repos)


@router.get("/{slug}", response_model=RepositorySnapshotResponse)
async def get_repository_snapshot(
    slug: str,
    repo: ProjectRepository = Depends(get_project_repo),
    github: GitHubService = Depends(get_github_service),
) -> RepositorySnapshotResponse:
    """
    Fetch live GitHub data for a project's repository.

    Args:
        slug: The project slug
        repo: Project repository
        github: GitHub service

    Returns:
        Envelope with repository summary, recent commits and README
    """
    try:
        project = repo.get_by_slug(slug)
    except StorageError as e:
        logger.error(f"Failed to get project {slug}: {e}", exc_info=True)
        raise handle_database_error(e, "get_github_data")

    if not project:
        raise not_found_error("Project")

    if not project.github_url:
        raise validation_error("No GitHub URL found for this project")

    stats = await github.get_repository_stats(project.github_url)
    readme = await github.get_readme(project.github_url)

    return RepositorySnapshotResponse(
        data=RepositorySnapshot(repo=stats.repo, commits=stats.commits, readme=readme)
    )
