"""Multi-write operations commit all of their rows or none."""

import pytest
from sqlalchemy import func, select

from kanbanhub.exceptions import ValidationError
from kanbanhub.models.project import Column, Project
from kanbanhub.services.activity import ActivityLogService


@pytest.fixture()
def failing_log(monkeypatch):
    """Make the activity log raise for one (entity_type, action) pair.

    The log entry is written after the rows it describes, so the failure
    lands in the middle of the operation.
    """
    def install(entity_type: str, action: str) -> None:
        original = ActivityLogService.log

        def log(self, kind, entity_id, verb, user_id, metadata=None):
            if (kind, verb) == (entity_type, action):
                raise ValidationError("Activity log unavailable")
            return original(self, kind, entity_id, verb, user_id, metadata)

        monkeypatch.setattr(ActivityLogService, "log", log)

    return install


async def test_failed_project_creation_leaves_no_rows(client, workspace, failing_log, session_factory):
    failing_log("project", "create")

    response = await client.post(
        f"/api/workspaces/{workspace['id']}/projects",
        json={"name": "Half built", "key": "HB"},
    )

    assert response.status_code == 400
    async with session_factory() as session:
        projects = (await session.execute(select(func.count(Project.id)))).scalar_one()
        columns = (await session.execute(select(func.count(Column.id)))).scalar_one()
    assert projects == 0
    assert columns == 0


async def test_failed_reorder_keeps_previous_ranks(client, project, columns, failing_log):
    c1, c2, c3 = (c["id"] for c in columns)
    failing_log("project", "reorder")

    response = await client.patch(
        f"/api/projects/{project['id']}/columns/order",
        json={"columnIds": [c3, c1, c2]},
    )

    assert response.status_code == 400
    board = (await client.get(f"/api/projects/{project['id']}/board")).json()
    assert [(c["id"], c["order"]) for c in board["columns"]] == [(c1, 0), (c2, 1), (c3, 2)]


async def test_failed_move_keeps_positions(client, project, columns, create_task, failing_log):
    todo, _, done = columns
    a = await create_task("A", todo["id"])
    await create_task("B", todo["id"])
    failing_log("task", "move")

    response = await client.patch(f"/api/tasks/{a['id']}/move", json={"columnId": done["id"]})

    assert response.status_code == 400
    board = (await client.get(f"/api/projects/{project['id']}/board")).json()
    tasks = {c["id"]: [(t["title"], t["position"]) for t in c["tasks"]] for c in board["columns"]}
    assert tasks[todo["id"]] == [("A", 0), ("B", 1)]
    assert tasks[done["id"]] == []
