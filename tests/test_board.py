from __future__ import annotations

import pytest

from taskboard.client import ApiError, KanbanBoard, TaskboardClient
from taskboard.client.board import MOVE_FAILED_ALERT


@pytest.fixture
def board(client) -> KanbanBoard:
    return KanbanBoard(TaskboardClient(http=client))


class RecordingClient(TaskboardClient):
    """Запоминает тела PUT-запросов и умеет имитировать отказ сервера."""

    def __init__(self, http, fail_updates: bool = False):
        super().__init__(http=http)
        self.updates = []
        self.fail_updates = fail_updates

    def request(self, method, path, **kwargs):
        if method == "PUT":
            self.updates.append((path, kwargs.get("json")))
            if self.fail_updates:
                raise ApiError(500, {"error": "Internal server error"})
        return super().request(method, path, **kwargs)


def test_load_groups_tasks_by_column(board, make_task, make_task_type, make_user):
    make_task_type("Bug")
    make_user("ivanov")
    todo = make_task(title="a")
    done = make_task(title="b", status="Done")

    board.load()

    columns = board.columns()
    assert list(columns) == ["To Do", "In Progress", "Review", "Done"]
    assert [t["id"] for t in columns["To Do"]] == [todo["id"]]
    assert [t["id"] for t in columns["Done"]] == [done["id"]]
    assert columns["Review"] == []
    assert [t["name"] for t in board.task_types] == ["Bug"]
    assert [u["username"] for u in board.users] == ["ivanov"]


def test_move_sends_only_status(client, make_task):
    task = make_task(dueDate="2024-01-15")
    recording = RecordingClient(client)
    board = KanbanBoard(recording)
    board.load()

    assert board.move_task(task["id"], "In Progress") is True

    assert recording.updates == [(f"/tasks/{task['id']}", {"status": "In Progress"})]
    moved = board.find_task(task["id"])
    assert moved["status"] == "In Progress"
    assert moved["dueDate"] == "2024-01-15"
    assert board.alert is None


def test_move_to_same_column_or_bad_status_does_nothing(client, make_task):
    task = make_task()
    recording = RecordingClient(client)
    board = KanbanBoard(recording)
    board.load()

    assert board.move_task(task["id"], "To Do") is False
    assert board.move_task(task["id"], "Blocked") is False
    assert board.move_task(12345, "Done") is False
    assert recording.updates == []


def test_failed_move_alerts_and_reloads_server_state(client, make_task):
    task = make_task()
    board = KanbanBoard(RecordingClient(client, fail_updates=True))
    board.load()
    # локальная правка, которой нет на сервере, должна исчезнуть после перезагрузки
    board.tasks[0]["title"] = "stale"

    assert board.move_task(task["id"], "Done") is False

    assert board.alert == MOVE_FAILED_ALERT
    reloaded = board.find_task(task["id"])
    assert reloaded["status"] == "To Do"
    assert reloaded["title"] == task["title"]


def test_move_of_task_deleted_elsewhere_reloads(board, client, make_task):
    task = make_task()
    board.load()
    client.delete(f"/api/tasks/{task['id']}")

    assert board.move_task(task["id"], "Review") is False

    assert board.alert == MOVE_FAILED_ALERT
    assert board.tasks == []


def test_create_update_delete_reload(board, make_task_type, make_user):
    bug = make_task_type("Bug")
    user = make_user("ivanov")
    board.load()

    created = board.create_task({
        "title": "Fix login", "description": "500 on submit", "priority": "High",
        "taskTypeId": bug["id"], "assignedToUserId": user["id"]})
    assert [t["id"] for t in board.tasks] == [created["id"]]
    assert board.task_type_for(board.tasks[0])["name"] == "Bug"
    assert board.assignee_for(board.tasks[0])["username"] == "ivanov"

    board.update_task(created["id"], {"priority": "Low"})
    assert board.tasks[0]["priority"] == "Low"

    assert board.delete_task(created["id"]) is True
    assert board.tasks == []
    assert board.delete_task(created["id"]) is False


def test_create_validation_error_is_raised_to_form(board):
    with pytest.raises(ApiError) as excinfo:
        board.create_task({"title": "", "priority": "Invalid"})

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Validation failed"
    assert {d["field"] for d in excinfo.value.details} >= {"title", "priority"}


def test_filters_are_sent_as_query(board, make_task):
    make_task(title="a", priority="High")
    low = make_task(title="b", priority="Low")

    board.set_filters(priority="Low")

    assert [t["id"] for t in board.tasks] == [low["id"]]
