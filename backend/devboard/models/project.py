"""Project model for tracked software projects."""
from datetime import datetime, timezone

from sqlalchemy import JSON, CheckConstraint, Column, Index, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from devboard.constants import ProjectStatus
from devboard.database import Base, UTCDateTime


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


_status_values = ", ".join(f"'{value}'" for value in ProjectStatus.ALL)


class Project(Base):
    """Tracked project model."""
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default=ProjectStatus.DEVELOPMENT,
                    server_default=ProjectStatus.DEVELOPMENT)
    tech_stack = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list)
    github_url = Column(String(500), nullable=True)
    vercel_url = Column(String(500), nullable=True)
    local_path = Column(String(500), nullable=True)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow, server_default=func.now())

    # Relationships
    logs = relationship(
        "ProjectLog",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint(f"status IN ({_status_values})", name="ck_projects_status"),
        Index("idx_projects_status", "status"),
    )
