"""Repository layer package."""

from devboard.repositories.project_repo import ProjectRepository

__all__ = ["ProjectRepository"]
