"""Board assembly and column ranking."""


async def _board(client, project_id):
    response = await client.get(f"/api/projects/{project_id}/board")
    assert response.status_code == 200
    return response.json()


async def test_board_groups_tasks_by_column(client, project, columns, create_task):
    todo, doing, done = columns
    await create_task("Wireframes", todo["id"])
    await create_task("Copy", todo["id"])
    await create_task("Logo", doing["id"])

    board = await _board(client, project["id"])

    assert board["id"] == project["id"]
    assert board["key"] == "RD"
    assert [c["name"] for c in board["columns"]] == ["Todo", "In Progress", "Done"]
    tasks = {c["name"]: [t["title"] for t in c["tasks"]] for c in board["columns"]}
    assert tasks == {"Todo": ["Wireframes", "Copy"], "In Progress": ["Logo"], "Done": []}


async def test_backlog_tasks_are_not_on_the_board(client, project, columns, create_task):
    backlog = await create_task("Someday")
    assert backlog["columnId"] is None

    board = await _board(client, project["id"])

    assert sum(len(c["tasks"]) for c in board["columns"]) == 0


async def test_missing_project_board_is_404(client):
    response = await client.get("/api/projects/999/board")

    assert response.status_code == 404
    assert response.json() == {"message": "Project not found"}


async def test_equal_column_order_falls_back_to_id(client, project, columns):
    response = await client.post(
        f"/api/projects/{project['id']}/columns",
        json={"name": "Review", "order": 1},
    )
    assert response.status_code == 201
    assert response.json()["projectId"] == project["id"]

    board = await _board(client, project["id"])

    assert [c["name"] for c in board["columns"]] == ["Todo", "In Progress", "Review", "Done"]


async def test_column_in_missing_project_is_404(client):
    response = await client.post("/api/projects/999/columns", json={"name": "Review", "order": 0})

    assert response.status_code == 404


async def test_reorder_columns(client, project, columns):
    c1, c2, c3 = (c["id"] for c in columns)

    response = await client.patch(
        f"/api/projects/{project['id']}/columns/order",
        json={"columnIds": [c3, c1, c2]},
    )
    assert response.status_code == 200

    board = await _board(client, project["id"])
    assert [(c["id"], c["order"]) for c in board["columns"]] == [(c3, 0), (c1, 1), (c2, 2)]


async def test_reorder_with_foreign_column_changes_nothing(client, workspace, project, columns):
    other = await client.post(
        f"/api/workspaces/{workspace['id']}/projects",
        json={"name": "Other", "key": "OT"},
    )
    other_board = await _board(client, other.json()["id"])
    foreign_id = other_board["columns"][0]["id"]
    c1, c2, c3 = (c["id"] for c in columns)

    response = await client.patch(
        f"/api/projects/{project['id']}/columns/order",
        json={"columnIds": [c3, foreign_id, c1, c2]},
    )

    assert response.status_code == 400
    assert response.json()["field"] == "columnIds"
    board = await _board(client, project["id"])
    assert [c["id"] for c in board["columns"]] == [c1, c2, c3]


async def test_reorder_with_repeated_column_is_rejected(client, project, columns):
    c1, c2, _ = (c["id"] for c in columns)

    response = await client.patch(
        f"/api/projects/{project['id']}/columns/order",
        json={"columnIds": [c2, c2, c1]},
    )

    assert response.status_code == 400
    assert response.json()["field"] == "columnIds"
