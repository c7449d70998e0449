"""Schemas for project resources."""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from devboard.models import Project, ProjectLog
from devboard.utils.serialization import serialize_datetime

StatusValue = Literal["active", "development", "maintenance", "archived"]


class ProjectCreate(BaseModel):
    """Request schema for POST /api/projects."""
    name: str = Field(..., min_length=1, description="Project name")
    slug: str = Field(..., min_length=1, description="Unique URL-safe identifier")
    description: str = Field(..., description="Free-text description")
    status: StatusValue = Field(..., description="Lifecycle status")
    tech_stack: List[str] = Field(default_factory=list)
    github_url: Optional[str] = None
    vercel_url: Optional[str] = None
    local_path: Optional[str] = None


class ProjectUpdate(BaseModel):
    """Request schema for PATCH /api/projects/{slug}; only supplied fields change."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    status: Optional[StatusValue] = None
    tech_stack: Optional[List[str]] = None
    github_url: Optional[str] = None
    vercel_url: Optional[str] = None
    local_path: Optional[str] = None


class ProjectResponse(BaseModel):
    id: int
    name: str
    slug: str
    description: str
    status: str
    tech_stack: List[str]
    github_url: Optional[str] = None
    vercel_url: Optional[str] = None
    local_path: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_orm(cls, obj: Project) -> "ProjectResponse":
        """Convert SQLAlchemy model to response model."""
        return cls(
            id=obj.id,
            name=obj.name,
            slug=obj.slug,
            description=obj.description or "",
            status=obj.status,
            tech_stack=list(obj.tech_stack or []),
            github_url=obj.github_url,
            vercel_url=obj.vercel_url,
            local_path=obj.local_path,
            created_at=serialize_datetime(obj.created_at),
            updated_at=serialize_datetime(obj.updated_at),
        )


class ProjectLogResponse(BaseModel):
    id: int
    project_id: int
    action: str
    details: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_orm(cls, obj: ProjectLog) -> "ProjectLogResponse":
        """Convert SQLAlchemy model to response model."""
        return cls(
            id=obj.id,
            project_id=obj.project_id,
            action=obj.action,
            details=obj.details,
            created_at=serialize_datetime(obj.created_at),
        )


class RecentActivity(BaseModel):
    """Log entry joined with its project's name."""
    id: int
    project_id: int
    project_name: str
    action: str
    details: Optional[str] = None
    created_at: Optional[str] = None


class ProjectStats(BaseModel):
    total: int
    byStatus: Dict[str, int] = Field(default_factory=dict)
    recentActivity: List[RecentActivity] = Field(default_factory=list)


class ProjectDetail(BaseModel):
    project: ProjectResponse
    logs: List[ProjectLogResponse] = Field(default_factory=list)


class ProjectListResponse(BaseModel):
    success: bool = True
    data: List[ProjectResponse] = Field(default_factory=list)


class ProjectDetailResponse(BaseModel):
    success: bool = True
    data: ProjectDetail


class ProjectCreateResponse(BaseModel):
    success: bool = True
    id: int


class ProjectStatsResponse(BaseModel):
    success: bool = True
    data: ProjectStats


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


def stats_from_dict(stats: Dict[str, Any]) -> ProjectStats:
    """Build the stats schema from the repository aggregate."""
    return ProjectStats(
        total=stats["total"],
        byStatus=stats["byStatus"],
        recentActivity=[RecentActivity(**entry) for entry in stats["recentActivity"]],
    )


# Error envelopes documented on every router
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    404: {"model": ErrorResponse, "description": "Project not found"},
    500: {"model": ErrorResponse, "description": "Storage failure"},
}
