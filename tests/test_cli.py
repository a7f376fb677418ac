"""Tests for the CLI shell."""

import json
from datetime import date, timedelta

import pytest
from click.testing import CliRunner

from studyflow.cli import main
from studyflow.config import Config


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    monkeypatch.setattr("studyflow.cli.load_config", lambda: Config())


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(main, ["--data-dir", str(tmp_path), *args])

    return invoke


class TestTodo:
    def test_add_and_list(self, run):
        result = run("todo", "add", "Read ch.3", "-p", "high", "--due", "2025-01-16")
        assert result.exit_code == 0, result.output
        assert "Read ch.3" in result.output

        result = run("todo", "list", "--json")
        tasks = json.loads(result.output)
        assert len(tasks) == 1
        assert tasks[0]["text"] == "Read ch.3"
        assert tasks[0]["priority"] == "high"
        assert tasks[0]["due"] == "2025-01-16"
        assert tasks[0]["done"] is False

    def test_list_empty(self, run):
        result = run("todo", "list")
        assert "No tasks" in result.output

    def test_done_toggles(self, run):
        run("todo", "add", "Read")
        task_id = json.loads(run("todo", "list", "--json").output)[0]["id"]

        assert "done" in run("todo", "done", task_id).output
        assert "[x]" in run("todo", "list").output
        assert "not done" in run("todo", "done", task_id).output

    def test_edit_and_delete(self, run):
        run("todo", "add", "Read")
        task_id = json.loads(run("todo", "list", "--json").output)[0]["id"]

        assert run("todo", "edit", task_id, "Read more").exit_code == 0
        assert "Read more" in run("todo", "list").output
        assert run("todo", "delete", task_id).exit_code == 0
        assert json.loads(run("todo", "list", "--json").output) == []

    def test_validation_error_exits_nonzero(self, run):
        result = run("todo", "add", "Read", "--due", "someday")
        assert result.exit_code == 1
        assert "Error: due" in result.output

    def test_unknown_id(self, run):
        result = run("todo", "done", "t_missing")
        assert result.exit_code == 1
        assert "No task with id t_missing" in result.output

    def test_search_filter(self, run):
        run("todo", "add", "Read chapter 3")
        run("todo", "add", "Laundry")
        output = run("todo", "list", "--search", "chapter").output
        assert "Read chapter 3" in output
        assert "Laundry" not in output


class TestSchedule:
    def test_show_day_sorted(self, run):
        run("schedule", "add", "Physics", "--day", "Mon", "--start", "09:00", "--end", "10:00")
        run("schedule", "add", "Chemistry", "--day", "mon", "--start", "8:30", "--end", "9:15")

        result = run("schedule", "show", "--day", "Mon", "--json")
        entries = json.loads(result.output)["Mon"]
        assert [e["start"] for e in entries] == ["08:30", "09:00"]

    def test_show_week(self, run):
        output = run("schedule", "show").output
        assert "### Mon" in output
        assert "### Sun" in output
        assert "No classes" in output

    def test_invalid_time(self, run):
        result = run("schedule", "add", "Physics", "--day", "Mon", "--start", "25:00", "--end", "10:00")
        assert result.exit_code == 1


class TestAssignments:
    def test_add_list_toggle(self, run):
        assert run("assignments", "add", "Essay", "--subject", "History", "--due", "2025-02-01").exit_code == 0
        run("assignments", "add", "Lab", "--subject", "Biology", "--due", "2025-01-20", "--notes", "graphs")

        items = json.loads(run("assignments", "list", "--json").output)
        assert [a["title"] for a in items] == ["Lab", "Essay"]

        toggled = run("assignments", "toggle", items[0]["id"])
        assert toggled.exit_code == 0
        assert json.loads(run("assignments", "list", "--json").output)[0]["done"] is True

    def test_missing_subject(self, run):
        result = run("assignments", "add", "Essay", "--subject", " ", "--due", "2025-02-01")
        assert result.exit_code == 1


class TestDashboard:
    def test_empty(self, run):
        result = run("dashboard")
        assert result.exit_code == 0
        assert "0% complete" in result.output
        assert "No upcoming items" in result.output

    def test_json(self, run):
        tomorrow = (date.today() + timedelta(days=1)).isoformat()
        run("todo", "add", "Read ch.3", "-p", "high", "--due", tomorrow)
        run("assignments", "add", "Essay", "--subject", "History", "--due", tomorrow)

        summary = json.loads(run("dashboard", "--json").output)
        assert summary["pending"] == 1
        assert summary["due_soon"] == 1
        assert summary["completion_percent"] == 0
        assert [item["type"] for item in summary["upcoming"]] == ["Task", "Assignment"]

    def test_stats(self, run):
        result = run("stats", "--json")
        assert json.loads(result.output) == {"studyMinutes": 0, "sessions": 0, "count": 0}
