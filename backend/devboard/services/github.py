"""GitHub REST API service for repository metadata."""
import base64
import re
from typing import List, Optional

import httpx
from fastapi import Request

from devboard.config import Settings
from devboard.constants import (
    COMMIT_SHA_LENGTH,
    OWNED_REPOSITORY_LIMIT,
    RECENT_COMMIT_COUNT,
    UNKNOWN_AUTHOR,
    UNKNOWN_LANGUAGE,
)
from devboard.schemas.github import (
    CommitSummary,
    ReadmeContent,
    RepositoryRef,
    RepositoryStats,
    RepositorySummary,
    UserRepository,
)
from devboard.utils.logger import logger

GITHUB_URL_PATTERN = re.compile(r"github\.com/([^/]+)/([^/]+)")

JSON_MEDIA_TYPE = "application/vnd.github+json"
HTML_MEDIA_TYPE = "application/vnd.github.html+json"


def parse_repository_url(url: Optional[str]) -> Optional[RepositoryRef]:
    """
    Extract the owner and repository name from a GitHub URL.

    Args:
        url: Repository URL such as https://github.com/owner/repo(.git)

    Returns:
        RepositoryRef, or None when the URL does not point at a repository
    """
    if not url:
        return None

    match = GITHUB_URL_PATTERN.search(url)
    if not match:
        return None

    repo = re.sub(r"\.git$", "", match.group(2))
    if not repo:
        return None
    return RepositoryRef(owner=match.group(1), repo=repo)


def create_github_client(settings: Settings) -> httpx.AsyncClient:
    """Build the shared HTTP client used for GitHub API calls."""
    headers = {
        "Accept": JSON_MEDIA_TYPE,
        "X-GitHub-Api-Version": "2022-11-28",
    }
    if settings.github_token:
        headers["Authorization"] = f"Bearer {settings.github_token}"

    return httpx.AsyncClient(
        base_url=settings.github_api_url.rstrip("/"),
        headers=headers,
        timeout=settings.github_timeout_seconds,
    )


class GitHubService:
    """Read-through access to the GitHub REST API.

    Upstream failures are logged and reported as an empty result (``None`` or
    ``[]``) so callers can render a project without GitHub data.
    """

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def _get_json(self, path: str, **kwargs):
        response = await self.client.get(path, **kwargs)
        response.raise_for_status()
        return response.json()

    async def get_repository_summary(self, url: str) -> Optional[RepositorySummary]:
        """Fetch repository metadata (stars, forks, language, ...)."""
        ref = parse_repository_url(url)
        if not ref:
            return None

        try:
            data = await self._get_json(f"/repos/{ref.owner}/{ref.repo}")
            return RepositorySummary(
                name=data["name"],
                description=data.get("description") or "",
                stars=data.get("stargazers_count", 0),
                forks=data.get("forks_count", 0),
                language=data.get("language") or UNKNOWN_LANGUAGE,
                updatedAt=data.get("updated_at"),
                defaultBranch=data.get("default_branch"),
            )
        except Exception as e:
            logger.error(f"Error fetching repo info for {ref.owner}/{ref.repo}: {e}", exc_info=True)
            return None

    async def get_recent_commits(self, url: str, count: int = RECENT_COMMIT_COUNT) -> List[CommitSummary]:
        """Fetch the most recent commits on the default branch."""
        ref = parse_repository_url(url)
        if not ref:
            return []

        try:
            data = await self._get_json(
                f"/repos/{ref.owner}/{ref.repo}/commits",
                params={"per_page": count},
            )
            commits = []
            for item in data:
                commit = item.get("commit") or {}
                author = commit.get("author") or {}
                message = commit.get("message") or ""
                commits.append(
                    CommitSummary(
                        sha=item["sha"][:COMMIT_SHA_LENGTH],
                        message=message.split("\n")[0],
                        author=author.get("name") or UNKNOWN_AUTHOR,
                        date=author.get("date") or "",
                        url=item.get("html_url") or "",
                    )
                )
            return commits
        except Exception as e:
            logger.error(f"Error fetching commits for {ref.owner}/{ref.repo}: {e}", exc_info=True)
            return []

    async def get_readme(self, url: str) -> Optional[ReadmeContent]:
        """Fetch the README as raw text and as GitHub-rendered HTML."""
        ref = parse_repository_url(url)
        if not ref:
            return None

        path = f"/repos/{ref.owner}/{ref.repo}/readme"
        try:
            data = await self._get_json(path)
            content = base64.b64decode(data.get("content") or "").decode("utf-8")

            response = await self.client.get(path, headers={"Accept": HTML_MEDIA_TYPE})
            response.raise_for_status()

            return ReadmeContent(content=content, html=response.text)
        except Exception as e:
            logger.error(f"Error fetching README for {ref.owner}/{ref.repo}: {e}", exc_info=True)
            return None

    async def get_repository_stats(self, url: str) -> RepositoryStats:
        """Repository summary plus the latest commits for a detail view."""
        repo = await self.get_repository_summary(url)
        commits = await self.get_recent_commits(url, RECENT_COMMIT_COUNT)
        return RepositoryStats(repo=repo, commits=commits)

    async def list_owned_repositories(self) -> List[UserRepository]:
        """List repositories owned by the authenticated account, newest first."""
        try:
            data = await self._get_json(
                "/user/repos",
                params={
                    "sort": "updated",
                    "per_page": OWNED_REPOSITORY_LIMIT,
                    "affiliation": "owner",
                },
            )
            return [
                UserRepository(
                    id=repo["id"],
                    name=repo["name"],
                    full_name=repo["full_name"],
                    description=repo.get("description"),
                    html_url=repo["html_url"],
                    language=repo.get("language"),
                    stargazers_count=repo.get("stargazers_count", 0),
                    updated_at=repo.get("updated_at") or "",
                    private=repo.get("private", False),
                )
                for repo in data
            ]
        except Exception as e:
            logger.error(f"Error fetching user repositories: {e}", exc_info=True)
            return []

    async def close(self) -> None:
        await self.client.aclose()


def get_github_service(request: Request) -> GitHubService:
    """Dependency returning the application's GitHub service."""
    return request.app.state.github
