"""Data access for projects and their activity logs."""
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from devboard.constants import DEFAULT_LOG_LIMIT, RECENT_ACTIVITY_LIMIT, LogAction
from devboard.models import Project, ProjectLog
from devboard.models.project import utcnow
from devboard.utils.exceptions import StorageError
from devboard.utils.logger import logger
from devboard.utils.serialization import serialize_model_to_dict

# Fields that ignore None, matching the non-nullable columns
REQUIRED_FIELDS = ("name", "description", "status", "tech_stack")
# Link fields may be cleared by passing None
LINK_FIELDS = ("github_url", "vercel_url", "local_path")


class ProjectRepository:
    """CRUD helper for Project entities and their append-only logs.

    Every storage failure is rolled back and re-raised as ``StorageError``.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def _fail(self, error: SQLAlchemyError, operation: str) -> StorageError:
        self.session.rollback()
        logger.debug(f"Rolled back after storage failure during {operation}: {error}")
        return StorageError(str(error))

    def list_projects(self) -> List[Project]:
        try:
            result = self.session.execute(
                select(Project).order_by(Project.updated_at.desc(), Project.id.desc())
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._fail(e, "list_projects")

    def get_by_slug(self, slug: str) -> Optional[Project]:
        try:
            result = self.session.execute(select(Project).where(Project.slug == slug))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._fail(e, "get_by_slug")

    def get_by_id(self, project_id: int) -> Optional[Project]:
        try:
            return self.session.get(Project, project_id)
        except SQLAlchemyError as e:
            raise self._fail(e, "get_by_id")

    def create(self, data: Dict[str, Any]) -> int:
        """
        Insert a project and append a creation log entry.

        Args:
            data: Project fields (name, slug, description, status, tech_stack, links)

        Returns:
            The new project id

        Raises:
            StorageError: On duplicate slug or connectivity failure
        """
        project = Project(
            name=data["name"],
            slug=data["slug"],
            description=data.get("description", ""),
            tech_stack=list(data.get("tech_stack") or []),
            github_url=data.get("github_url"),
            vercel_url=data.get("vercel_url"),
            local_path=data.get("local_path"),
        )
        if data.get("status"):
            project.status = data["status"]

        try:
            self.session.add(project)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail(e, "create_project")

        logger.info(f"Created project {project.id} ({project.slug})")
        self.add_log(project.id, LogAction.PROJECT_CREATED, f"Project {project.name} was created.")
        return project.id

    def update(self, project_id: int, fields: Dict[str, Any]) -> bool:
        """
        Apply a partial update to a project.

        Only recognized fields present in ``fields`` are written; ``updated_at``
        is always refreshed and a log entry appended. Nothing happens when no
        recognized field is supplied.

        Returns:
            True if an update was written
        """
        values: Dict[str, Any] = {}
        for name in REQUIRED_FIELDS:
            if fields.get(name) is not None:
                values[name] = fields[name]
        for name in LINK_FIELDS:
            if name in fields:
                values[name] = fields[name]

        if not values:
            return False

        if "tech_stack" in values:
            values["tech_stack"] = list(values["tech_stack"])
        values["updated_at"] = utcnow()

        try:
            project = self.session.get(Project, project_id)
            if project is None:
                return False
            for name, value in values.items():
                setattr(project, name, value)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail(e, "update_project")

        logger.info(f"Updated project {project_id}: {sorted(values)}")
        self.add_log(project_id, LogAction.PROJECT_UPDATED, "Project details were updated.")
        return True

    def delete(self, project_id: int) -> None:
        """Delete a project; its logs are removed by the foreign key cascade."""
        try:
            self.session.execute(delete(Project).where(Project.id == project_id))
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail(e, "delete_project")
        logger.info(f"Deleted project {project_id}")

    def add_log(self, project_id: int, action: str, details: Optional[str] = None) -> ProjectLog:
        log = ProjectLog(project_id=project_id, action=action, details=details)
        try:
            self.session.add(log)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail(e, "add_project_log")
        return log

    def get_logs(self, project_id: int, limit: int = DEFAULT_LOG_LIMIT) -> List[ProjectLog]:
        try:
            result = self.session.execute(
                select(ProjectLog)
                .where(ProjectLog.project_id == project_id)
                .order_by(ProjectLog.created_at.desc(), ProjectLog.id.desc())
                .limit(limit)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._fail(e, "get_project_logs")

    def get_stats(self) -> Dict[str, Any]:
        """
        Aggregate dashboard statistics.

        Returns:
            Dictionary with ``total``, ``byStatus`` and ``recentActivity``
        """
        try:
            total = self.session.execute(select(func.count()).select_from(Project)).scalar_one()

            status_rows = self.session.execute(
                select(Project.status, func.count()).group_by(Project.status)
            ).all()

            recent_rows = self.session.execute(
                select(ProjectLog, Project.name)
                .join(Project, ProjectLog.project_id == Project.id)
                .order_by(ProjectLog.created_at.desc(), ProjectLog.id.desc())
                .limit(RECENT_ACTIVITY_LIMIT)
            ).all()
        except SQLAlchemyError as e:
            raise self._fail(e, "get_project_stats")

        recent_activity = []
        for log, project_name in recent_rows:
            entry = serialize_model_to_dict(log, datetime_fields=["created_at"])
            entry["project_name"] = project_name
            recent_activity.append(entry)

        return {
            "total": int(total or 0),
            "byStatus": {status: int(count) for status, count in status_rows},
            "recentActivity": recent_activity,
        }
