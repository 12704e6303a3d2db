"""
Tests for the taskboard terminal commands, run against the Flask app.
"""
import pytest
from click.testing import CliRunner

import board_cli
from api_client import TaskApi
from board import Board
from conftest import FlaskSession, ImmediateExecutor, StaticIdentity

USER_ID = "cli-user"


@pytest.fixture
def run(client, tmp_path, monkeypatch):
    """Invoke taskboard with its API calls routed to the test client."""
    monkeypatch.setattr(board_cli, "TaskApi", lambda identity, base_url=None: TaskApi(
        StaticIdentity(USER_ID), base_url=base_url, session=FlaskSession(client)))
    monkeypatch.setattr(board_cli, "Board", lambda api: Board(api, executor=ImmediateExecutor()))
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(board_cli.main, ["--cookie-file", str(tmp_path / "cookies.txt"), *args])
    return _run


def _seed(client, task_id, column_id="todo", created_at="2024-01-01T00:00:00Z"):
    client.post("/api/tasks", headers={"x-user-id": USER_ID}, json={
        "id": task_id, "columnId": column_id, "content": task_id, "createdAt": created_at,
    })


def _server_tasks(client):
    return client.get("/api/tasks", headers={"x-user-id": USER_ID}).get_json()


def test_show_lists_columns(client, run):
    _seed(client, "alpha")
    _seed(client, "gamma", "done")

    result = run("show")
    assert result.exit_code == 0
    assert "TASKS (1)" in result.output
    assert "IN PROGRESS (0)" in result.output
    assert "DONE (1)" in result.output
    assert "alpha" in result.output
    assert "[2024-01-01]" in result.output


def test_add_prepends_to_tasks(client, run):
    _seed(client, "older")

    result = run("add", "Buy", "milk")
    assert result.exit_code == 0
    assert "TASKS (2)" in result.output
    assert result.output.index("Buy milk") < result.output.index("older")

    stored = [t for t in _server_tasks(client) if t["content"] == "Buy milk"]
    assert len(stored) == 1
    assert stored[0]["columnId"] == "todo"


def test_add_blank_text_is_usage_error(client, run):
    result = run("add", "   ")
    assert result.exit_code == 2
    assert "Task text cannot be empty." in result.output
    assert _server_tasks(client) == []


def test_move_onto_column_appends(client, run):
    _seed(client, "alpha")
    _seed(client, "beta")
    _seed(client, "gamma", "done")

    result = run("move", "alpha", "done")
    assert result.exit_code == 0

    done_part = result.output.split("DONE (2)")[1]
    assert done_part.index("gamma") < done_part.index("alpha")
    columns = {t["id"]: t["columnId"] for t in _server_tasks(client)}
    assert columns == {"alpha": "done", "beta": "todo", "gamma": "done"}


def test_move_unknown_task(client, run):
    _seed(client, "alpha")

    result = run("move", "nope", "done")
    assert result.exit_code == 1
    assert "Task nope not found." in result.output
    assert _server_tasks(client)[0]["columnId"] == "todo"


def test_delete_then_show(client, run):
    _seed(client, "alpha")
    _seed(client, "beta", created_at="2024-01-02T00:00:00Z")

    result = run("delete", "alpha")
    assert result.exit_code == 0

    result = run("show")
    assert result.exit_code == 0
    assert "alpha" not in result.output
    assert "beta" in result.output
    assert [t["id"] for t in _server_tasks(client)] == ["beta"]
