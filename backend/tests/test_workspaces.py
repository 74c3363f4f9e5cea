"""Workspace and project creation."""


async def test_create_workspace_is_owned_by_caller(client):
    response = await client.post("/api/workspaces", json={"name": "Acme", "slug": "acme"})

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Acme"
    assert body["slug"] == "acme"
    assert body["ownerId"] == "user-1"

    listing = await client.get("/api/workspaces")
    assert [w["id"] for w in listing.json()] == [body["id"]]


async def test_duplicate_slug_is_rejected(client, workspace):
    response = await client.post("/api/workspaces", json={"name": "Other", "slug": "acme"})

    assert response.status_code == 400
    assert response.json() == {"message": "Slug is already in use", "field": "slug"}


async def test_malformed_slug_is_rejected(client):
    response = await client.post("/api/workspaces", json={"name": "Acme", "slug": "Not A Slug"})

    assert response.status_code == 400
    assert response.json()["field"] == "slug"


async def test_get_workspace(client, workspace):
    response = await client.get(f"/api/workspaces/{workspace['id']}")

    assert response.status_code == 200
    assert response.json()["slug"] == "acme"


async def test_missing_workspace_is_404(client):
    response = await client.get("/api/workspaces/999")

    assert response.status_code == 404
    assert response.json() == {"message": "Workspace not found"}


async def test_new_project_gets_default_columns(client, workspace):
    response = await client.post(
        f"/api/workspaces/{workspace['id']}/projects",
        json={"name": "Redesign", "key": "RD", "description": "Site refresh"},
    )
    assert response.status_code == 201
    project = response.json()
    assert project["workspaceId"] == workspace["id"]
    assert project["description"] == "Site refresh"

    board = (await client.get(f"/api/projects/{project['id']}/board")).json()
    assert [(c["name"], c["order"]) for c in board["columns"]] == [
        ("Todo", 0),
        ("In Progress", 1),
        ("Done", 2),
    ]
    assert all(c["tasks"] == [] for c in board["columns"])


async def test_list_projects(client, workspace, project):
    response = await client.get(f"/api/workspaces/{workspace['id']}/projects")

    assert response.status_code == 200
    assert [p["key"] for p in response.json()] == ["RD"]


async def test_project_in_missing_workspace_is_404(client):
    response = await client.post(
        "/api/workspaces/999/projects",
        json={"name": "Orphan", "key": "OR"},
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Workspace not found"


async def test_project_key_length_is_limited(client, workspace):
    response = await client.post(
        f"/api/workspaces/{workspace['id']}/projects",
        json={"name": "Redesign", "key": "WAYTOOLONGKEY"},
    )

    assert response.status_code == 400
    assert response.json()["field"] == "key"
