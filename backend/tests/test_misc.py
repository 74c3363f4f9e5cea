"""Seed data, velocity, health checks and request ids."""


async def test_seed_creates_demo_board(client):
    response = await client.post("/api/seed")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Seed data created successfully"

    projects = (await client.get(f"/api/workspaces/{body['workspaceId']}/projects")).json()
    assert [(p["name"], p["key"]) for p in projects] == [("Website Redesign", "WEB")]

    board = (await client.get(f"/api/projects/{projects[0]['id']}/board")).json()
    todo = board["columns"][0]
    assert todo["name"] == "Todo"
    assert [(t["title"], t["priority"], t["position"]) for t in todo["tasks"]] == [
        ("Design Homepage", "high", 0),
        ("Implement Auth", "urgent", 1),
    ]


async def test_seed_twice_uses_a_fresh_slug(client):
    await client.post("/api/seed")
    await client.post("/api/seed")

    slugs = [w["slug"] for w in (await client.get("/api/workspaces")).json()]
    assert slugs == ["demo-workspace", "demo-workspace-2"]


async def test_velocity_is_not_computed(client, project):
    response = await client.get(f"/api/projects/{project['id']}/analytics/velocity")

    assert response.status_code == 200
    assert response.json() == []
    assert response.headers["X-Velocity-Status"] == "not-computed"


async def test_health(anon_client):
    response = await anon_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_readiness_checks_database(anon_client):
    response = await anon_client.get("/api/health/ready")

    assert response.status_code == 200
    assert response.json()["checks"] == {"database": "healthy"}


async def test_request_id_is_echoed(anon_client):
    response = await anon_client.get("/health", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"


async def test_malformed_request_id_is_replaced(anon_client):
    response = await anon_client.get("/health", headers={"X-Request-ID": "bad id with spaces"})

    request_id = response.headers["X-Request-ID"]
    assert request_id != "bad id with spaces"
    assert len(request_id) == 32


async def test_request_id_is_generated(anon_client):
    first = await anon_client.get("/health")
    second = await anon_client.get("/health")

    assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]
