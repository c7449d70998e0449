"""Dashboard statistics endpoint."""
from fastapi import APIRouter, Depends

from devboard.api.projects import get_project_repo
from devboard.repositories import ProjectRepository
from devboard.schemas.project import ERROR_RESPONSES, ProjectStatsResponse, stats_from_dict
from devboard.utils.exceptions import StorageError, handle_database_error
from devboard.utils.logger import logger

router = APIRouter(prefix="/api/stats", tags=["stats"], responses=ERROR_RESPONSES)


@router.get("", response_model=ProjectStatsResponse)
async def get_stats(
    repo: ProjectRepository = Depends(get_project_repo),
) -> ProjectStatsResponse:
    """Project totals, counts per status and the latest activity."""
    try:
        return ProjectStatsResponse(data=stats_from_dict(repo.get_stats()))
    except StorageError as e:
        logger.error(f"Failed to get project stats: {e}", exc_info=True)
        raise handle_database_error(e, "get_stats")
