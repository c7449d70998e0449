"""Schemas for GitHub repository data."""
from pydantic import BaseModel, Field
from typing import List, Optional


class RepositoryRef(BaseModel):
    """Owner/name pair parsed from a repository URL."""
    owner: str
    repo: str


class RepositorySummary(BaseModel):
    name: str
    description: str = ""
    stars: int = 0
    forks: int = 0
    language: str = "Unknown"
    updatedAt: Optional[str] = None
    defaultBranch: Optional[str] = None


class CommitSummary(BaseModel):
    sha: str
    message: str
    author: str
    date: str = ""
    url: str = ""


class ReadmeContent(BaseModel):
    content: str
    html: str


class RepositoryStats(BaseModel):
    repo: Optional[RepositorySummary] = None
    commits: List[CommitSummary] = Field(default_factory=list)


class RepositorySnapshot(RepositoryStats):
    """Summary, recent commits and README fetched for one detail view."""
    readme: Optional[ReadmeContent] = None


class UserRepository(BaseModel):
    id: int
    name: str
    full_name: str
    description: Optional[str] = None
    html_url: str
    language: Optional[str] = None
    stargazers_count: int = 0
    updated_at: str = ""
    private: bool = False


class RepositorySnapshotResponse(BaseModel):
    success: bool = True
    data: RepositorySnapshot


class UserRepositoryListResponse(BaseModel):
    success: bool = True
    data: List[UserRepository] = Field(default_factory=list)
