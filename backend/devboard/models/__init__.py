"""Models package."""
from devboard.models.project import Project
from devboard.models.project_log import ProjectLog

__all__ = ["Project", "ProjectLog"]
