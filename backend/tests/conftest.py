"""Shared test fixtures."""
import asyncio
import os

# Settings are read at import time; point them at an in-memory database
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient

from devboard.database import create_db_engine, create_session_factory, get_db, init_db
from devboard.main import create_application
from devboard.repositories import ProjectRepository
from devboard.services.github import HTML_MEDIA_TYPE, GitHubService, get_github_service

GITHUB_API = "https://api.github.com"


class FakeGitHubAPI:
    """In-memory stand-in for the GitHub REST API, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Dict[str, Any]] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        path: str,
        json: Any = None,
        status_code: int = 200,
        text: Optional[str] = None,
        media: str = "json",
    ) -> None:
        body = {"text": text} if text is not None else {"json": json}
        self.routes[(path, media)] = {"status_code": status_code, **body}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        media = "html" if request.headers.get("accept") == HTML_MEDIA_TYPE else "json"
        route = self.routes.get((request.url.path, media))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(**route)


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://", environment="test")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repo(db_session):
    return ProjectRepository(db_session)


@pytest.fixture
def fake_github():
    return FakeGitHubAPI()


@pytest.fixture
def github_service(fake_github):
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(fake_github.handler),
        base_url=GITHUB_API,
    )
    service = GitHubService(client)
    yield service
    # Close on a private loop; the test loop may already be gone
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(service.close())
    finally:
        loop.close()


@pytest.fixture
def client(session_factory, github_service):
    """FastAPI test client backed by the in-memory database and fake GitHub API."""
    app = create_application()

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_github_service] = lambda: github_service

    with TestClient(app) as test_client:
        yield test_client


def _project_data(**overrides) -> Dict[str, Any]:
    data = {
        "name": "Widget",
        "slug": "widget",
        "description": "A small widget service",
        "status": "development",
        "tech_stack": ["Go", "Postgres"],
        "github_url": "https://github.com/acme/widget",
        "vercel_url": None,
        "local_path": "~/code/widget",
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_project():
    """Factory for valid project payloads; keyword overrides replace fields."""
    return _project_data
