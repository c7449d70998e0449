"""Project activity log model."""
from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import relationship

from devboard.database import Base, UTCDateTime
from devboard.models.project import utcnow


class ProjectLog(Base):
    """Append-only audit entry for a project."""
    __tablename__ = "project_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    action = Column(String(50), nullable=False)  # e.g. "project_created"
    details = Column(Text, nullable=True)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow, server_default=func.now())

    # Relationships
    project = relationship("Project", back_populates="logs")

    __table_args__ = (
        Index("idx_project_logs_project_created", "project_id", "created_at"),
    )
