"""Pydantic schemas for request/response validation."""
from devboard.schemas.github import (
    CommitSummary,
    ReadmeContent,
    RepositoryRef,
    RepositorySnapshot,
    RepositorySummary,
    UserRepository,
)
from devboard.schemas.project import (
    ProjectCreate,
    ProjectResponse,
    ProjectStats,
    ProjectUpdate,
)

__all__ = [
    "CommitSummary",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectStats",
    "ProjectUpdate",
    "ReadmeContent",
    "RepositoryRef",
    "RepositorySnapshot",
    "RepositorySummary",
    "UserRepository",
]
