"""Operations on stored tasks."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from todocli.models import Task


class RepositoryError(Exception):
    """Raised when a task operation is rejected or fails."""


@contextmanager
def _transaction(session: Session, message: str) -> Iterator[None]:
    try:
        yield
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise RepositoryError(f"{message}: {exc}") from exc


def _require_id(task_id: int, message: str) -> None:
    if task_id is None or task_id <= 0:
        raise RepositoryError(message)


def _live_tasks():
    return (
        select(Task)
        .where(Task.deleted_at.is_(None))
        .order_by(Task.id)
        .execution_options(populate_existing=True)
    )


def add_task(session: Session, task: Task) -> Task:
    """Store a new task and return it with its assigned id."""
    if task is None:
        raise RepositoryError("cannot add a nil task")
    task.updated_at = None
    with _transaction(session, "error in adding task"):
        session.add(task)
    return task


def delete_task(session: Session, task_id: int) -> None:
    """Mark the task with ``task_id`` as deleted."""
    _require_id(task_id, "id doesn't exist")
    with _transaction(session, f"error in deleting task {task_id}"):
        session.execute(
            update(Task)
            .where(Task.id == task_id, Task.deleted_at.is_(None))
            .values(deleted_at=datetime.now())
        )


def mark_complete(session: Session, task_id: int, now: datetime | None = None) -> None:
    """Set the task as completed, stamping the completion time."""
    _require_id(task_id, "id doesn't exist")
    now = datetime.now() if now is None else now
    with _transaction(session, f"error in task {task_id} marked complete"):
        session.execute(
            update(Task)
            .where(Task.id == task_id, Task.deleted_at.is_(None))
            .values(completed=True, completed_at=now, updated_at=now)
        )


def get_all_tasks(session: Session) -> list[Task]:
    """Return every task that has not been deleted."""
    try:
        return list(session.scalars(_live_tasks()))
    except SQLAlchemyError as exc:
        raise RepositoryError(f"getting tasks: {exc}") from exc


def pending_tasks(session: Session) -> list[Task]:
    """Return the tasks that are not completed."""
    try:
        return list(session.scalars(_live_tasks().where(Task.completed.is_(False))))
    except SQLAlchemyError as exc:
        raise RepositoryError(f"error in getting pending tasks: {exc}") from exc


def update_task(
    session: Session,
    task_id: int,
    title: str = "",
    description: str = "",
    now: datetime | None = None,
) -> None:
    """Change the title and/or description of a task; empty values are left alone."""
    _require_id(task_id, "id cannot be zero")
    changes = {
        field: value
        for field, value in (("title", title), ("description", description))
        if value
    }
    if not changes:
        raise RepositoryError("no updates have been made")
    changes["updated_at"] = datetime.now() if now is None else now
    with _transaction(session, f"update {task_id} failed"):
        session.execute(
            update(Task)
            .where(Task.id == task_id, Task.deleted_at.is_(None))
            .values(**changes)
        )