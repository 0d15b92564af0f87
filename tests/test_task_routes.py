# tests/test_task_routes.py

from datetime import datetime, timedelta, timezone

import pytest

from .helpers import bearer, register


def _future(days=7) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def _create(client, headers, **fields):
    payload = {"title": "Test Task"}
    payload.update(fields)
    response = client.post("/api/tasks", json=payload, headers=headers)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


@pytest.fixture()
def three_tasks(client, auth_headers):
    return [
        _create(client, auth_headers, title="Test Task 1", status="PENDING"),
        _create(client, auth_headers, title="Test Task 2", status="IN_PROGRESS"),
        _create(client, auth_headers, title="Test Task 3", status="COMPLETED"),
    ]


def test_create_task(client, auth_headers):
    due = _future()
    response = client.post(
        "/api/tasks",
        json={"title": "  New Task  ", "description": "Task description", "dueDate": due},
        headers=auth_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    task = body["data"]
    assert task["title"] == "New Task"
    assert task["description"] == "Task description"
    assert task["status"] == "PENDING"
    assert task["dueDate"] is not None
    assert set(task) == {"id", "title", "description", "status", "dueDate", "userId", "createdAt", "updatedAt"}


def test_task_timestamps_carry_utc_offset(client, auth_headers):
    due = datetime(2099, 1, 2, 12, 30, tzinfo=timezone(timedelta(hours=2)))
    task = _create(client, auth_headers, dueDate=due.isoformat())

    assert task["dueDate"] == "2099-01-02T10:30:00+00:00"
    for key in ("createdAt", "updatedAt"):
        assert task[key].endswith("+00:00")
        assert datetime.fromisoformat(task[key]).tzinfo is not None


def test_numeric_due_date_message(client, auth_headers):
    response = client.post("/api/tasks", json={"title": "Task", "dueDate": 4102444800}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"]["details"] == [
        {"field": "dueDate", "message": "Due date must be a valid ISO 8601 date"},
    ]


def test_create_task_requires_auth(client):
    response = client.post("/api/tasks", json={"title": "New Task"})
    assert response.status_code == 401
    assert response.json()["success"] is False


@pytest.mark.parametrize("payload, field", [
    ({}, "title"),
    ({"title": ""}, "title"),
    ({"title": "   "}, "title"),
    ({"title": "x" * 256}, "title"),
    ({"title": "ok", "description": "x" * 1001}, "description"),
    ({"title": "ok", "status": "DONE"}, "status"),
    ({"title": "ok", "dueDate": "next tuesday"}, "dueDate"),
    ({"title": "ok", "dueDate": 4102444800}, "dueDate"),
    ({"title": "ok", "dueDate": "4102444800"}, "dueDate"),
])
def test_create_task_validation(client, auth_headers, payload, field):
    response = client.post("/api/tasks", json=payload, headers=auth_headers)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"]["message"] == "Validation failed"
    assert field in [d["field"] for d in body["error"]["details"]]


def test_create_task_with_past_due_date(client, auth_headers):
    past = (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()
    response = client.post("/api/tasks", json={"title": "Late", "dueDate": past}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"]["details"] == [
        {"field": "dueDate", "message": "Due date must be in the future"},
    ]


def test_list_tasks_with_pagination(client, auth_headers, three_tasks):
    response = client.get("/api/tasks", params={"page": 1, "limit": 2}, headers=auth_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["tasks"]) == 2
    assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}


def test_list_defaults(client, auth_headers, three_tasks):
    data = client.get("/api/tasks", headers=auth_headers).json()["data"]

    assert data["pagination"] == {"page": 1, "limit": 10, "total": 3, "pages": 1}
    assert [t["title"] for t in data["tasks"]] == ["Test Task 3", "Test Task 2", "Test Task 1"]


def test_list_filter_by_status(client, auth_headers, three_tasks):
    data = client.get("/api/tasks", params={"status": "IN_PROGRESS"}, headers=auth_headers).json()["data"]

    assert [t["title"] for t in data["tasks"]] == ["Test Task 2"]
    assert data["pagination"]["total"] == 1


@pytest.mark.parametrize("params", [
    {"page": 0},
    {"page": -1},
    {"limit": 0},
    {"limit": 101},
    {"page": "abc"},
    {"status": "DONE"},
])
def test_list_rejects_bad_query(client, auth_headers, params):
    response = client.get("/api/tasks", params=params, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_list_page_zero_never_reaches_service(client, auth_headers, app):
    from casetasks.utils.dependencies import get_task_service

    class ExplodingService:
        def get_all_tasks(self, *args, **kwargs):
            raise AssertionError("service should not be called")

    app.dependency_overrides[get_task_service] = lambda: ExplodingService()
    response = client.get("/api/tasks", params={"page": 0}, headers=auth_headers)

    assert response.status_code == 400
    assert "Invalid pagination parameters" in response.json()["error"]["message"]


def test_list_past_last_page(client, auth_headers, three_tasks):
    data = client.get("/api/tasks", params={"page": 9, "limit": 2}, headers=auth_headers).json()["data"]
    assert data["tasks"] == []
    assert data["pagination"]["pages"] == 2


def test_list_with_enormous_page_number(client, auth_headers, three_tasks):
    response = client.get("/api/tasks", params={"page": 10**19, "limit": 10}, headers=auth_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["tasks"] == []
    assert data["pagination"]["total"] == 3
    assert data["pagination"]["pages"] == 1


def test_list_requires_auth(client):
    assert client.get("/api/tasks").status_code == 401


def test_stats_scenario(client, auth_headers, three_tasks):
    response = client.get("/api/tasks/stats", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"] == {
        "total": 3,
        "pending": 1,
        "inProgress": 1,
        "completed": 1,
        "cancelled": 0,
    }


def test_get_task(client, auth_headers, three_tasks):
    task_id = three_tasks[0]["id"]
    response = client.get(f"/api/tasks/{task_id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Test Task 1"


def test_get_missing_task(client, auth_headers):
    response = client.get("/api/tasks/99999", headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": {"message": "Task not found"}}


@pytest.mark.parametrize("task_id", [10**20, 2**63, 0, -1])
def test_out_of_range_task_id_is_not_found(client, auth_headers, task_id):
    assert client.get(f"/api/tasks/{task_id}", headers=auth_headers).status_code == 404
    assert client.put(f"/api/tasks/{task_id}", json={"title": "x"}, headers=auth_headers).status_code == 404
    assert client.delete(f"/api/tasks/{task_id}", headers=auth_headers).status_code == 404


def test_non_numeric_task_id(client, auth_headers):
    response = client.get("/api/tasks/abc", headers=auth_headers)
    assert response.status_code == 400


def test_update_task(client, auth_headers, three_tasks):
    task = three_tasks[0]
    response = client.put(f"/api/tasks/{task['id']}", json={"status": "COMPLETED"}, headers=auth_headers)

    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["status"] == "COMPLETED"
    assert updated["title"] == task["title"]


def test_update_with_empty_body(client, auth_headers, three_tasks):
    task = three_tasks[0]
    response = client.put(f"/api/tasks/{task['id']}", json={}, headers=auth_headers)

    assert response.status_code == 200
    updated = response.json()["data"]
    for key in ("id", "title", "description", "status", "dueDate", "userId", "createdAt"):
        assert updated[key] == task[key]


def test_update_allows_past_due_date(client, auth_headers, three_tasks):
    past = (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()
    response = client.put(f"/api/tasks/{three_tasks[0]['id']}", json={"dueDate": past}, headers=auth_headers)
    assert response.status_code == 200


@pytest.mark.parametrize("payload", [
    {"title": ""},
    {"title": None},
    {"status": "ARCHIVED"},
    {"status": None},
    {"description": "x" * 1001},
    {"dueDate": "not-a-date"},
    {"dueDate": 4102444800},
])
def test_update_validation(client, auth_headers, three_tasks, payload):
    response = client.put(f"/api/tasks/{three_tasks[0]['id']}", json=payload, headers=auth_headers)
    assert response.status_code == 400


def test_delete_task(client, auth_headers, three_tasks):
    task_id = three_tasks[0]["id"]
    response = client.delete(f"/api/tasks/{task_id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"message": "Task deleted successfully"}}
    assert client.get(f"/api/tasks/{task_id}", headers=auth_headers).status_code == 404


def test_tasks_are_private_to_their_owner(client, auth_headers, three_tasks):
    other_token, _ = register(client, email="other@example.com", name="Other")
    other = bearer(other_token)
    task_id = three_tasks[0]["id"]

    assert client.get(f"/api/tasks/{task_id}", headers=other).status_code == 404
    assert client.put(f"/api/tasks/{task_id}", json={"title": "Mine now"}, headers=other).status_code == 404
    assert client.delete(f"/api/tasks/{task_id}", headers=other).status_code == 404

    other_list = client.get("/api/tasks", headers=other).json()["data"]
    assert other_list["tasks"] == []
    assert client.get("/api/tasks/stats", headers=other).json()["data"]["total"] == 0

    # owner still sees the untouched task
    task = client.get(f"/api/tasks/{task_id}", headers=auth_headers).json()["data"]
    assert task["title"] == "Test Task 1"
