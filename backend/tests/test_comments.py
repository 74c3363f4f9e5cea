"""Task comments."""


async def test_add_and_list_comments(client, create_task):
    task = await create_task("Discuss")

    first = await client.post(f"/api/tasks/{task['id']}/comments", json={"content": "First"})
    await client.post(f"/api/tasks/{task['id']}/comments", json={"content": "Second"})

    assert first.status_code == 201
    assert first.json()["userId"] == "user-1"
    assert first.json()["taskId"] == task["id"]

    listing = await client.get(f"/api/tasks/{task['id']}/comments")
    assert [c["content"] for c in listing.json()] == ["First", "Second"]

    detail = await client.get(f"/api/tasks/{task['id']}")
    assert [c["content"] for c in detail.json()["comments"]] == ["First", "Second"]


async def test_comment_on_missing_task_is_404(client):
    response = await client.post("/api/tasks/999/comments", json={"content": "Hello?"})

    assert response.status_code == 404
    assert response.json() == {"message": "Task not found"}


async def test_list_comments_of_missing_task_is_404(client):
    response = await client.get("/api/tasks/999/comments")

    assert response.status_code == 404


async def test_empty_comment_is_rejected(client, create_task):
    task = await create_task("Quiet")

    response = await client.post(f"/api/tasks/{task['id']}/comments", json={"content": ""})

    assert response.status_code == 400
    assert response.json()["field"] == "content"
