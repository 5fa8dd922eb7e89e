import io

import pytest

from todocli.cli import build_parser, main, run
from todocli.database import open_database
from todocli.repository import get_all_tasks


@pytest.fixture
def factory(tmp_path):
    return open_database(f"sqlite:///{tmp_path / 'tasks.db'}")


def _run(argv, factory):
    out = io.StringIO()
    code = run(argv, factory, out)
    return code, out.getvalue()


def _tasks(factory):
    with factory() as session:
        return get_all_tasks(session)


def test_add_stores_task(factory):
    code, text = _run(["add", "--title", "Buy groceries", "--desc", "Milk, eggs, bread"], factory)
    assert code == 0
    assert text == "Task Added Successfully\n"
    tasks = _tasks(factory)
    assert [(t.title, t.description, t.completed) for t in tasks] == [
        ("Buy groceries", "Milk, eggs, bread", False)
    ]


def test_add_requires_title(factory):
    code, _ = _run(["add", "--desc", "nothing"], factory)
    assert code == 1
    assert _tasks(factory) == []


def test_list_shows_tasks(factory):
    _run(["add", "-t", "Write report"], factory)
    code, text = _run(["list"], factory)
    assert code == 0
    assert text.startswith("ID")
    assert "Write report" in text
    assert "❌" in text


def test_list_empty(factory):
    code, text = _run(["list"], factory)
    assert code == 0
    assert text == "No tasks found.\n"


def test_markcompleted_and_pending(factory):
    _run(["add", "-t", "first"], factory)
    _run(["add", "-t", "second"], factory)
    first_id = _tasks(factory)[0].id
    code, text = _run(["markcompleted", "--id", str(first_id)], factory)
    assert code == 0
    assert text == "Task Completed\n"
    _, pending = _run(["list", "--pending"], factory)
    assert "second" in pending
    assert "first" not in pending
    _, everything = _run(["list"], factory)
    assert "✅" in everything


def test_delete_removes_task(factory):
    _run(["add", "-t", "temporary"], factory)
    task_id = _tasks(factory)[0].id
    code, text = _run(["delete", "-i", str(task_id)], factory)
    assert code == 0
    assert text == "Deleted the task Successfully\n"
    assert _tasks(factory) == []


def test_delete_without_id_fails(factory, capsys):
    code, text = _run(["delete"], factory)
    assert code == 1
    assert text == ""
    assert "failed to delete the task: id doesn't exist" in capsys.readouterr().err


def test_negative_id_rejected(factory):
    code, _ = _run(["delete", "--id", "-3"], factory)
    assert code == 1


def test_update_needs_a_field(factory):
    code, text = _run(["update", "--id", "1"], factory)
    assert code == 0
    assert text == "Please provide at least one field to update: --title or --desc\n"


def test_update_changes_title(factory):
    _run(["add", "-t", "old", "-d", "kept"], factory)
    task_id = _tasks(factory)[0].id
    code, text = _run(["update", "--id", str(task_id), "--title", "new"], factory)
    assert code == 0
    assert text == "Updated the task successfully\n"
    task = _tasks(factory)[0]
    assert (task.title, task.description) == ("new", "kept")
    assert task.updated_at is not None and task.updated_at >= task.created_at


def test_update_without_id_fails(factory, capsys):
    code, _ = _run(["update", "--title", "new"], factory)
    assert code == 1
    assert "Failed to update the task: id cannot be zero" in capsys.readouterr().err


def test_no_command_prints_help(factory):
    code, text = _run([], factory)
    assert code == 0
    assert "usage: todo" in text


def test_parser_reads_flags():
    args = build_parser().parse_args(["list", "-p"])
    assert args.command == "list"
    assert args.pending is True
    args = build_parser().parse_args(["update", "-i", "7", "-d", "text"])
    assert (args.id, args.title, args.desc) == (7, "", "text")


def test_main_without_config_fails(monkeypatch, capsys):
    monkeypatch.delenv("ConfigPath", raising=False)
    assert main(["list"]) == 1
    assert "failed to load the config" in capsys.readouterr().err


def test_main_with_missing_config_file_fails(monkeypatch, tmp_path):
    monkeypatch.setenv("ConfigPath", str(tmp_path / "absent.yaml"))
    assert main(["list"]) == 1