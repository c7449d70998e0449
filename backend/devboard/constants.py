"""Application-wide constants."""

# Project status values
class ProjectStatus:
    """Project status constants."""
    ACTIVE = "active"
    DEVELOPMENT = "development"
    MAINTENANCE = "maintenance"
    ARCHIVED = "archived"

    ALL = (ACTIVE, DEVELOPMENT, MAINTENANCE, ARCHIVED)


# Activity log action codes
class LogAction:
    """Project log action constants."""
    PROJECT_CREATED = "project_created"
    PROJECT_UPDATED = "project_updated"


DEFAULT_LOG_LIMIT = 50
RECENT_ACTIVITY_LIMIT = 10

# GitHub
RECENT_COMMIT_COUNT = 3
OWNED_REPOSITORY_LIMIT = 100
COMMIT_SHA_LENGTH = 7
UNKNOWN_LANGUAGE = "Unknown"
UNKNOWN_AUTHOR = "Unknown"
