"""End-to-end tests for the projects and stats endpoints."""


def _create(client, payload):
    response = client.post("/api/projects", json=payload)
    assert response.status_code == 200, response.text
    return response.json()


def test_list_projects_empty(client):
    response = client.get("/api/projects")
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": []}


def test_create_and_get_project(client, make_project):
    body = _create(client, make_project())
    assert body["success"] is True
    assert isinstance(body["id"], int)

    response = client.get("/api/projects/widget")
    assert response.status_code == 200
    data = response.json()["data"]
    project = data["project"]
    assert project["id"] == body["id"]
    assert project["name"] == "Widget"
    assert project["tech_stack"] == ["Go", "Postgres"]
    assert project["github_url"] == "https://github.com/acme/widget"
    assert project["vercel_url"] is None
    assert [log["action"] for log in data["logs"]] == ["project_created"]


def test_create_project_missing_required_field_returns_400(client, make_project):
    payload = make_project()
    del payload["slug"]

    response = client.post("/api/projects", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "slug" in body["error"]


def test_create_project_rejects_unknown_status(client, make_project):
    response = client.post("/api/projects", json=make_project(status="abandoned"))
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_create_duplicate_slug_returns_500(client, make_project):
    _create(client, make_project())

    response = client.post("/api/projects", json=make_project(name="Other"))

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert client.get("/api/projects/widget").json()["data"]["project"]["name"] == "Widget"


def test_get_unknown_project_returns_404(client):
    response = client.get("/api/projects/missing")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Project not found"}


def test_patch_project_updates_supplied_fields_only(client, make_project):
    _create(client, make_project())

    response = client.patch("/api/projects/widget", json={"status": "archived"})
    assert response.status_code == 200
    assert response.json() == {"success": True}

    data = client.get("/api/projects/widget").json()["data"]
    assert data["project"]["status"] == "archived"
    assert data["project"]["description"] == "A small widget service"
    assert data["project"]["tech_stack"] == ["Go", "Postgres"]
    assert [log["action"] for log in data["logs"]] == ["project_updated", "project_created"]


def test_patch_unknown_project_returns_404(client):
    response = client.patch("/api/projects/missing", json={"status": "active"})
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_delete_project(client, make_project):
    _create(client, make_project())

    response = client.delete("/api/projects/widget")
    assert response.status_code == 200
    assert response.json() == {"success": True}

    assert client.get("/api/projects/widget").status_code == 404
    assert client.get("/api/stats").json()["data"]["recentActivity"] == []


def test_delete_unknown_project_returns_404(client):
    response = client.delete("/api/projects/missing")
    assert response.status_code == 404


def test_stats_count_new_development_project(client, make_project):
    _create(client, make_project(slug="existing", status="active"))
    before = client.get("/api/stats").json()["data"]

    _create(client, make_project(slug="fresh", name="Fresh", status="development", tech_stack=[]))
    after = client.get("/api/stats").json()["data"]

    assert after["total"] == before["total"] + 1
    assert after["byStatus"].get("development", 0) == before["byStatus"].get("development", 0) + 1
    assert after["recentActivity"][0]["project_name"] == "Fresh"
    assert after["recentActivity"][0]["action"] == "project_created"


def test_list_projects_returns_all(client, make_project):
    _create(client, make_project(slug="one", name="One"))
    _create(client, make_project(slug="two", name="Two"))

    data = client.get("/api/projects").json()["data"]

    assert sorted(p["slug"] for p in data) == ["one", "two"]


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "Devboard API"

    health = client.get("/health").json()
    assert health["status"] == "healthy"
    assert health["database"] in ("ok", "unavailable")


def test_timestamps_are_serialized_with_utc_offset(client, make_project):
    _create(client, make_project())

    data = client.get("/api/projects/widget").json()["data"]
    assert data["project"]["created_at"].endswith("+00:00")
    assert data["project"]["updated_at"].endswith("+00:00")
    assert data["logs"][0]["created_at"].endswith("+00:00")

    listed = client.get("/api/projects").json()["data"]
    assert listed[0]["updated_at"].endswith("+00:00")

    activity = client.get("/api/stats").json()["data"]["recentActivity"]
    assert activity[0]["created_at"].endswith("+00:00")


def test_openapi_documents_error_envelope(client):
    schema = client.get("/openapi.json").json()
    assert "ErrorResponse" in schema["components"]["schemas"]

    responses = schema["paths"]["/api/projects/{slug}"]["get"]["responses"]
    assert responses["404"]["content"]["application/json"]["schema"] == {
        "$ref": "#/components/schemas/ErrorResponse"
    }
    assert "500" in schema["paths"]["/api/stats"]["get"]["responses"]
