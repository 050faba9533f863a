from __future__ import annotations

import pytest


def test_create_task_defaults_status_to_todo(client):
    response = client.post("/api/tasks", json={
        "title": "Test Task",
        "description": "Test Description",
        "priority": "Medium",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["id"] > 0
    assert body["title"] == "Test Task"
    assert body["description"] == "Test Description"
    assert body["priority"] == "Medium"
    assert body["status"] == "To Do"
    assert body["taskTypeId"] is None
    assert body["assignedToUserId"] is None
    assert body["dueDate"] is None
    assert body["createdAt"] and body["updatedAt"]


def test_create_task_rejects_invalid_payload(client):
    response = client.post("/api/tasks", json={"title": "", "priority": "Invalid"})

    assert response.status_code == 400
    body = response.json()
    assert "error" in body
    fields = {detail["field"] for detail in body["details"]}
    assert {"title", "description", "priority"} <= fields


def test_create_task_rejects_too_long_title(client):
    response = client.post("/api/tasks", json={
        "title": "x" * 201, "description": "d", "priority": "Low"})

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "title"


def test_get_after_create_returns_submitted_fields(client, make_task_type, make_user):
    task_type = make_task_type("Feature", color="#00ff00")
    user = make_user("petrov")
    payload = {
        "title": "Write docs",
        "description": "README and API",
        "status": "In Progress",
        "priority": "High",
        "taskTypeId": task_type["id"],
        "assignedToUserId": user["id"],
        "dueDate": "2024-03-01",
    }
    created = client.post("/api/tasks", json=payload).json()

    response = client.get(f"/api/tasks/{created['id']}")

    assert response.status_code == 200
    fetched = response.json()
    for key, value in payload.items():
        assert fetched[key] == value
    assert fetched == created


def test_due_date_empty_string_normalizes_to_null(client, make_task):
    task = make_task(dueDate="")

    assert task["dueDate"] is None


def test_due_date_must_be_iso(client):
    response = client.post("/api/tasks", json={
        "title": "t", "description": "d", "priority": "Low", "dueDate": "tomorrow"})

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "dueDate"


def test_list_tasks_returns_empty_array(client):
    response = client.get("/api/tasks")

    assert response.status_code == 200
    assert response.json() == []


def test_list_tasks_newest_first(client, make_task):
    first = make_task(title="first")
    second = make_task(title="second")

    ids = [task["id"] for task in client.get("/api/tasks").json()]

    assert ids == [second["id"], first["id"]]


def test_filter_by_status(client, make_task):
    make_task(title="a")
    done = make_task(title="b", status="Done")

    response = client.get("/api/tasks", params={"status": "Done"})

    assert response.status_code == 200
    assert [task["id"] for task in response.json()] == [done["id"]]
    assert client.get("/api/tasks", params={"status": "Review"}).json() == []


def test_filters_are_combined(client, make_task):
    make_task(title="a", priority="High")
    make_task(title="b", priority="High", status="Review")
    target = make_task(title="c", priority="Low", status="Review")

    response = client.get("/api/tasks", params={"status": "Review", "priority": "Low"})

    assert [task["id"] for task in response.json()] == [target["id"]]


def test_filter_by_due_date_matches_calendar_day(client, make_task):
    morning = make_task(title="morning", dueDate="2024-05-10T08:30:00.000Z")
    make_task(title="other day", dueDate="2024-05-11")
    make_task(title="no date")

    response = client.get("/api/tasks", params={"date": "2024-05-10"})

    assert [task["id"] for task in response.json()] == [morning["id"]]


def test_invalid_filter_value_is_rejected(client):
    response = client.get("/api/tasks", params={"status": "Blocked"})

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "status"


@pytest.mark.parametrize("bad_id", [
    "abc", "0", "-1", "1.5", "²", "٣",
    "9223372036854775808", "99999999999999999999", "1" * 5000,
])
def test_malformed_id_returns_400(client, bad_id):
    for method in ("get", "delete"):
        response = getattr(client, method)(f"/api/tasks/{bad_id}")
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid task ID"}

    response = client.put(f"/api/tasks/{bad_id}", json={"title": "x"})
    assert response.status_code == 400


def test_largest_sqlite_id_is_looked_up(client):
    response = client.get("/api/tasks/9223372036854775807")

    assert response.status_code == 404
    assert response.json() == {"error": "Task not found"}


def test_get_missing_task_returns_404(client):
    response = client.get("/api/tasks/999")

    assert response.status_code == 404
    assert response.json() == {"error": "Task not found"}


def test_partial_update_keeps_other_fields(client, make_task):
    task = make_task(dueDate="2024-01-15")

    response = client.put(f"/api/tasks/{task['id']}", json={"status": "Review"})

    assert response.status_code == 200
    updated = response.json()
    assert updated["status"] == "Review"
    for key in ("title", "description", "priority", "dueDate", "createdAt"):
        assert updated[key] == task[key]
    assert updated["updatedAt"] >= updated["createdAt"]


def test_update_can_clear_nullable_fields(client, make_task, make_task_type):
    task_type = make_task_type()
    task = make_task(taskTypeId=task_type["id"], dueDate="2024-01-15")

    updated = client.put(f"/api/tasks/{task['id']}",
                         json={"taskTypeId": None, "dueDate": ""}).json()

    assert updated["taskTypeId"] is None
    assert updated["dueDate"] is None


def test_update_rejects_null_title(client, make_task):
    task = make_task()

    response = client.put(f"/api/tasks/{task['id']}", json={"title": None})

    assert response.status_code == 400
    assert response.json()["details"][0]["message"] == "Title cannot be null"


def test_empty_update_returns_task_unchanged(client, make_task):
    task = make_task()

    response = client.put(f"/api/tasks/{task['id']}", json={})

    assert response.status_code == 200
    assert response.json() == task


def test_update_missing_task_returns_404(client):
    response = client.put("/api/tasks/42", json={"status": "Done"})

    assert response.status_code == 404


def test_delete_then_get_returns_404(client, make_task):
    task = make_task()

    response = client.delete(f"/api/tasks/{task['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Task deleted successfully"}

    assert client.get(f"/api/tasks/{task['id']}").status_code == 404
    assert client.delete(f"/api/tasks/{task['id']}").status_code == 404


def test_unknown_task_type_reference_is_rejected(client):
    response = client.post("/api/tasks", json={
        "title": "t", "description": "d", "priority": "Low", "taskTypeId": 77})

    assert response.status_code == 400
    assert response.json()["details"] == [
        {"field": "taskTypeId", "message": "Task type not found"}]


def test_unknown_assignee_reference_is_rejected_on_update(client, make_task):
    task = make_task()

    response = client.put(f"/api/tasks/{task['id']}", json={"assignedToUserId": 77})

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "assignedToUserId"
    assert client.get(f"/api/tasks/{task['id']}").json() == task


def test_non_positive_reference_is_a_validation_error(client):
    response = client.post("/api/tasks", json={
        "title": "t", "description": "d", "priority": "Low", "assignedToUserId": 0})

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "assignedToUserId"


def test_reference_beyond_integer_range_is_a_validation_error(client):
    response = client.post("/api/tasks", json={
        "title": "t", "description": "d", "priority": "Low",
        "taskTypeId": 99999999999999999999})

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "taskTypeId"
