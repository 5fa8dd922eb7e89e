"""Command-line interface for managing the to-do list."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import TextIO

from sqlalchemy.orm import Session

from todocli.config import ConfigError, find_config_path, load_config
from todocli.database import connect
from todocli.display import print_tasks
from todocli.models import Task
from todocli.repository import (
    RepositoryError,
    add_task,
    delete_task,
    get_all_tasks,
    mark_complete,
    pending_tasks,
    update_task,
)

SessionFactory = Callable[[], Session]

_ROOT_DESCRIPTION = """\
A simple CLI ToDo application to manage tasks efficiently.

It allows you to add, delete, update, and complete tasks directly from your
terminal. You can also view pending or completed tasks in a clean and
organized format.

Example usage:

  todo add --title "Buy groceries" --desc "Milk, eggs, bread"
  todo markcompleted --id 3
  todo list            # Show all tasks
  todo list --pending  # Show only pending tasks
  todo delete --id 3"""

_ADD_DESCRIPTION = """\
Adds a new task to your ToDo list with a title and optional description.

Example:
  todo add --title "Buy groceries" --desc "Milk, eggs, bread"

You can later view your tasks using:
  todo list            - to view all tasks
  todo list --pending  - to view only pending tasks"""

_DELETE_DESCRIPTION = """\
Deletes a task from your to-do list using its unique ID.

For example:
  todo delete --id 3

This action is permanent and cannot be undone."""

_LIST_DESCRIPTION = """\
Shows all tasks, displaying both completed and pending tasks.

Example:
  todo list            # Show all tasks
  todo list --pending  # Show only pending tasks"""

_MARK_DESCRIPTION = """\
Marks a task as completed by its ID. Once marked, the task appears as
completed when listed.

Example:
  todo markcompleted --id 3"""

_UPDATE_DESCRIPTION = """\
Modifies the title or description of a task using its ID.

Examples:
  todo update --id 3 --title "New Title"
  todo update --id 3 --desc "Updated description"
  todo update --id 3 --title "New Title" --desc "Updated description"

Note: If neither flag is provided, nothing will be updated."""


def _uint(text: str) -> int:
    try:
        value = int(text, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid unsigned integer: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"invalid unsigned integer: {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with every subcommand."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config", default=argparse.SUPPRESS, help="path to the configuration"
    )

    parser = argparse.ArgumentParser(
        prog="todo",
        description=_ROOT_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        parents=[common],
    )
    parser.add_argument("-t", "--toggle", action="store_true", help="Help message for toggle")
    commands = parser.add_subparsers(dest="command", metavar="command")

    def subcommand(name: str, short: str, description: str, handler) -> argparse.ArgumentParser:
        sub = commands.add_parser(
            name,
            help=short,
            description=description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            parents=[common],
        )
        sub.set_defaults(handler=handler)
        return sub

    add = subcommand("add", "Add a new task to your ToDo list", _ADD_DESCRIPTION, _cmd_add)
    add.add_argument("-t", "--title", required=True, help="Title of the task (required)")
    add.add_argument("-d", "--desc", default="", help="Description of the task")

    delete = subcommand("delete", "Delete a task by its ID", _DELETE_DESCRIPTION, _cmd_delete)
    delete.add_argument("-i", "--id", type=_uint, default=0, help="deletes a task based on id")

    listing = subcommand(
        "list",
        "Display all tasks, including completed and pending.",
        _LIST_DESCRIPTION,
        _cmd_list,
    )
    listing.add_argument("-p", "--pending", action="store_true", help="gets all pending tasks")

    mark = subcommand(
        "markcompleted",
        "Mark a task as completed using its ID.",
        _MARK_DESCRIPTION,
        _cmd_markcompleted,
    )
    mark.add_argument(
        "-i", "--id", type=_uint, default=0,
        help="marks the task completed based on id (id required)",
    )

    upd = subcommand(
        "update",
        "Update the title or description of a task by its ID",
        _UPDATE_DESCRIPTION,
        _cmd_update,
    )
    upd.add_argument("-i", "--id", type=_uint, default=0, help="gets the id")
    upd.add_argument("-t", "--title", default="", help="title to be updated")
    upd.add_argument("-d", "--desc", default="", help="description to be updated")

    return parser


def _fail(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def _cmd_add(args: argparse.Namespace, session_factory: SessionFactory, out: TextIO) -> int:
    task = Task(
        title=args.title,
        description=args.desc,
        completed=False,
        created_at=datetime.now(),
        completed_at=None,
        updated_at=None,
    )
    try:
        with session_factory() as session:
            add_task(session, task)
    except RepositoryError as exc:
        return _fail(f"failed to add the task: {exc}")
    print("Task Added Successfully", file=out)
    return 0


def _cmd_delete(args: argparse.Namespace, session_factory: SessionFactory, out: TextIO) -> int:
    try:
        with session_factory() as session:
            delete_task(session, args.id)
    except RepositoryError as exc:
        return _fail(f"failed to delete the task: {exc}")
    print("Deleted the task Successfully", file=out)
    return 0


def _cmd_list(args: argparse.Namespace, session_factory: SessionFactory, out: TextIO) -> int:
    try:
        with session_factory() as session:
            tasks = pending_tasks(session) if args.pending else get_all_tasks(session)
    except RepositoryError as exc:
        return _fail(f"failed to fetch tasks: {exc}")
    print_tasks(tasks, out)
    return 0


def _cmd_markcompleted(
    args: argparse.Namespace, session_factory: SessionFactory, out: TextIO
) -> int:
    try:
        with session_factory() as session:
            mark_complete(session, args.id)
    except RepositoryError as exc:
        return _fail(f"failed to mark the task: {exc}")
    print("Task Completed", file=out)
    return 0


def _cmd_update(args: argparse.Namespace, session_factory: SessionFactory, out: TextIO) -> int:
    if not args.title and not args.desc:
        print("Please provide at least one field to update: --title or --desc", file=out)
        return 0
    try:
        with session_factory() as session:
            update_task(session, args.id, args.title, args.desc)
    except RepositoryError as exc:
        return _fail(f"Failed to update the task: {exc}")
    print("Updated the task successfully", file=out)
    return 0


def run(
    argv: Sequence[str] | None,
    session_factory: SessionFactory,
    out: TextIO | None = None,
) -> int:
    """Run one command against the database behind ``session_factory``; return the exit code."""
    out = sys.stdout if out is None else out
    parser = build_parser()
    try:
        args = parser.parse_args(None if argv is None else list(argv))
    except SystemExit as exc:
        return 0 if exc.code in (0, None) else 1
    if args.command is None:
        parser.print_help(out)
        return 0
    return args.handler(args, session_factory, out)


def main(argv: Sequence[str] | None = None) -> int:
    """Load the configuration, open the database and run the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        config = load_config(find_config_path(args))
    except ConfigError as exc:
        print(exc, file=sys.stderr)
        print("failed to load the config", file=sys.stderr)
        return 1
    try:
        session_factory = connect(config.mysql)
    except ConnectionError:
        return _fail("failed to connect to the database")
    return run(args, session_factory)


if __name__ == "__main__":
    sys.exit(main())