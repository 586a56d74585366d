"""
HTTP contract tests for the /tasks endpoints.
"""

from __future__ import annotations

import pytest
from httpx import AsyncClient


async def _create(client: AsyncClient, title: str, description: str | None = None) -> dict:
    body = {"title": title}
    if description is not None:
        body["description"] = description
    response = await client.post("/tasks", json=body)
    assert response.status_code == 201
    return response.json()["task"]


# ---------------------------------------------------------------------------
# GET
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_empty(client: AsyncClient):
    response = await client.get("/tasks")
    assert response.status_code == 200
    assert response.json() == {"tasks": []}


@pytest.mark.asyncio
async def test_list_returns_all_tasks(client: AsyncClient):
    a = await _create(client, "A")
    await _create(client, "B")
    await client.patch(f"/tasks/{a['id']}/move", json={"status": "in_progress", "order": 0})

    response = await client.get("/tasks")
    assert response.status_code == 200
    tasks = response.json()["tasks"]
    assert [(t["status"], t["order"], t["title"]) for t in tasks] == [
        ("in_progress", 0, "A"),
        ("todo", 0, "B"),
    ]


@pytest.mark.asyncio
async def test_get_task(client: AsyncClient):
    created = await _create(client, "Detail", "Some text")
    response = await client.get(f"/tasks/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"task": created}


@pytest.mark.asyncio
async def test_get_unknown_task(client: AsyncClient):
    response = await client.get("/tasks/non-existent")
    assert response.status_code == 404
    assert response.json() == {"message": "Task not found"}


# ---------------------------------------------------------------------------
# POST
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_returns_camel_case_task(client: AsyncClient):
    task = await _create(client, "  New task  ")
    assert set(task) == {"id", "title", "description", "status", "order", "createdAt", "updatedAt"}
    assert task["title"] == "New task"
    assert task["description"] == ""
    assert task["status"] == "todo"
    assert task["order"] == 0
    assert task["createdAt"].endswith(("Z", "+00:00"))
    assert task["updatedAt"].endswith(("Z", "+00:00"))


@pytest.mark.asyncio
async def test_create_appends(client: AsyncClient):
    await _create(client, "First")
    second = await _create(client, "Second")
    assert second["order"] == 1


@pytest.mark.asyncio
async def test_create_missing_title(client: AsyncClient):
    response = await client.post("/tasks", json={"description": "no title"})
    assert response.status_code == 400
    assert response.json() == {"message": "Title is required"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body, message",
    [
        ({"title": "   "}, "Title must not be empty"),
        ({"title": "t" * 101}, "Title must be 100 characters or less"),
        ({"title": "ok", "description": "d" * 501}, "Description must be 500 characters or less"),
    ],
)
async def test_create_validation(client: AsyncClient, body, message):
    response = await client.post("/tasks", json=body)
    assert response.status_code == 400
    assert response.json() == {"message": message}


@pytest.mark.asyncio
async def test_create_malformed_body(client: AsyncClient):
    response = await client.post(
        "/tasks", content="not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid request body"}


@pytest.mark.asyncio
async def test_create_wrong_title_type(client: AsyncClient):
    response = await client.post("/tasks", json={"title": 12})
    assert response.status_code == 400
    assert "message" in response.json()


# ---------------------------------------------------------------------------
# PUT
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_update_task(client: AsyncClient):
    created = await _create(client, "Old", "desc")
    response = await client.put(f"/tasks/{created['id']}", json={"title": "New"})
    assert response.status_code == 200
    task = response.json()["task"]
    assert task["title"] == "New"
    assert task["description"] == "desc"
    assert task["order"] == created["order"]


@pytest.mark.asyncio
async def test_update_empty_body_is_noop(client: AsyncClient):
    created = await _create(client, "Same")
    response = await client.put(f"/tasks/{created['id']}", json={})
    assert response.status_code == 200
    assert response.json() == {"task": created}


@pytest.mark.asyncio
async def test_update_unknown(client: AsyncClient):
    response = await client.put("/tasks/missing", json={"title": "x"})
    assert response.status_code == 404
    assert response.json() == {"message": "Task not found"}


@pytest.mark.asyncio
async def test_update_validation(client: AsyncClient):
    created = await _create(client, "Title")
    response = await client.put(f"/tasks/{created['id']}", json={"title": ""})
    assert response.status_code == 400
    assert response.json() == {"message": "Title must not be empty"}


# ---------------------------------------------------------------------------
# DELETE
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_delete_task(client: AsyncClient):
    a = await _create(client, "A")
    b = await _create(client, "B")
    c = await _create(client, "C")

    response = await client.delete(f"/tasks/{b['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Task deleted successfully"}

    assert (await client.get(f"/tasks/{b['id']}")).status_code == 404
    assert (await client.get(f"/tasks/{a['id']}")).json()["task"]["order"] == 0
    assert (await client.get(f"/tasks/{c['id']}")).json()["task"]["order"] == 1


@pytest.mark.asyncio
async def test_delete_unknown(client: AsyncClient):
    response = await client.delete("/tasks/missing")
    assert response.status_code == 404
    assert response.json() == {"message": "Task not found"}


# ---------------------------------------------------------------------------
# PATCH move
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_move_within_column(client: AsyncClient):
    await _create(client, "A")
    b = await _create(client, "B")

    response = await client.patch(f"/tasks/{b['id']}/move", json={"status": "todo", "order": 0})
    assert response.status_code == 200
    assert response.json()["task"]["order"] == 0

    titles = [t["title"] for t in (await client.get("/tasks")).json()["tasks"]]
    assert titles == ["B", "A"]


@pytest.mark.asyncio
async def test_move_across_columns_clamps(client: AsyncClient):
    a = await _create(client, "A")
    response = await client.patch(f"/tasks/{a['id']}/move", json={"status": "done", "order": 9})
    assert response.status_code == 200
    task = response.json()["task"]
    assert task["status"] == "done"
    assert task["order"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body, message",
    [
        ({"order": 0}, "Status is required"),
        ({"status": "todo"}, "Order is required"),
        ({"status": "archived", "order": 0}, "Invalid status"),
        ({"status": 5, "order": 0}, "Invalid status"),
        ({"status": "todo", "order": -1}, "Order must be a non-negative integer"),
        ({"status": "todo", "order": 1.5}, "Order must be a non-negative integer"),
        ({"status": "todo", "order": "first"}, "Order must be a non-negative integer"),
    ],
)
async def test_move_validation(client: AsyncClient, body, message):
    a = await _create(client, "A")
    response = await client.patch(f"/tasks/{a['id']}/move", json=body)
    assert response.status_code == 400
    assert response.json() == {"message": message}


@pytest.mark.asyncio
async def test_move_unknown(client: AsyncClient):
    response = await client.patch("/tasks/missing/move", json={"status": "todo", "order": 0})
    assert response.status_code == 404
    assert response.json() == {"message": "Task not found"}


@pytest.mark.asyncio
async def test_request_id_echoed(client: AsyncClient):
    response = await client.get("/tasks", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
