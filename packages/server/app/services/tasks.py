"""
Task service layer: business logic for the board's tasks.

Handles:
- Task CRUD with input validation
- Appending new tasks to the end of the todo column
- Reindexing a column after a delete so orders stay dense
- Moving tasks within and between columns (drag and drop)

Every read-recompute-write of a column's ordering runs under that column's
lock (see ``app.core.locks``) and is written as a single atomic batch.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import InconsistentStateError, NotFoundError, ValidationError
from app.core.locks import column_locks
from app.models.base import new_id, utcnow
from app.models.task import Task
from kanban_shared.schemas.common import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TaskStatus,
)
from kanban_shared.schemas.tasks import TaskRead

from . import ordering
from .store import TaskStore

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_task_read(task: Task) -> TaskRead:
    """Map a store row to the API model."""
    return TaskRead(
        id=task.id,
        title=task.title,
        description=task.description,
        status=TaskStatus(task.status),
        order=task.order,
        created_at=_as_utc(task.created_at),
        updated_at=_as_utc(task.updated_at),
    )


def validate_title(title: Optional[str]) -> str:
    trimmed = (title or "").strip()
    if not trimmed:
        raise ValidationError("Title must not be empty")
    if len(trimmed) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must be {TITLE_MAX_LENGTH} characters or less")
    return trimmed


def validate_description(description: str) -> str:
    # Length is checked on the raw value; descriptions are stored untrimmed.
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Description must be {DESCRIPTION_MAX_LENGTH} characters or less"
        )
    return description


def validate_status(status: Any) -> TaskStatus:
    try:
        return TaskStatus(status)
    except ValueError:
        raise ValidationError("Invalid status") from None


def validate_order(order: Any) -> int:
    # bool is an int subclass but never a valid position.
    if isinstance(order, bool):
        raise ValidationError("Order must be a non-negative integer")
    if isinstance(order, float) and order.is_integer():
        order = int(order)
    if not isinstance(order, int) or order < 0:
        raise ValidationError("Order must be a non-negative integer")
    return order


async def get_task_or_404(store: TaskStore, task_id: str) -> Task:
    task = await store.get(task_id)
    if not task:
        raise NotFoundError("Task not found")
    return task


@asynccontextmanager
async def _locked_task(
    store: TaskStore, task_id: str, *also: str
) -> AsyncIterator[Task]:
    """Yield the current row of ``task_id`` with its column locked.

    The status has to be read before the right lock can be chosen, and a
    concurrent move may change it in between. In that case the locks are
    released and taken again for the new column.
    """
    status = (await get_task_or_404(store, task_id)).status
    while True:
        async with column_locks.hold(status, *also):
            current = await get_task_or_404(store, task_id)
            if current.status == status:
                yield current
                return
        log.debug("task.column_changed_while_locking", task_id=task_id)
        status = current.status


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


async def list_tasks(session: AsyncSession) -> list[TaskRead]:
    """All tasks, ordered by status then order."""
    rows = await TaskStore(session).all_rows()
    return [to_task_read(row) for row in rows]


async def get_task(session: AsyncSession, task_id: str) -> TaskRead:
    task = await get_task_or_404(TaskStore(session), task_id)
    return to_task_read(task)


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------


async def create_task(
    session: AsyncSession,
    title: Optional[str],
    description: Optional[str] = None,
) -> TaskRead:
    """Create a task at the end of the todo column."""
    clean_title = validate_title(title)
    clean_description = validate_description(description if description is not None else "")

    store = TaskStore(session)
    todo = TaskStatus.TODO.value
    async with column_locks.hold(todo):
        max_order = await store.max_order(todo)
        order = max_order + 1 if max_order is not None else 0

        task = Task(
            id=new_id(),
            title=clean_title,
            description=clean_description,
            status=todo,
            order=order,
        )
        await store.insert(task)

    row = await store.get(task.id)
    if not row:
        raise InconsistentStateError("Failed to retrieve created task")

    log.info("task.created", task_id=row.id, order=row.order)
    return to_task_read(row)


async def update_task(
    session: AsyncSession,
    task_id: str,
    title: Optional[str] = None,
    description: Optional[str] = None,
) -> TaskRead:
    """Change title and/or description. Status and order are left alone."""
    store = TaskStore(session)
    task = await get_task_or_404(store, task_id)

    if title is None and description is None:
        return to_task_read(task)

    values: dict[str, str] = {}
    if title is not None:
        values["title"] = validate_title(title)
    if description is not None:
        values["description"] = validate_description(description)

    await store.batch([store.set_fields(task_id, utcnow(), **values)])

    row = await store.get(task_id)
    if not row:
        raise InconsistentStateError("Failed to retrieve updated task")

    log.info("task.updated", task_id=task_id, fields=sorted(values))
    return to_task_read(row)


async def delete_task(session: AsyncSession, task_id: str) -> None:
    """Delete a task and close the gap it leaves in its column."""
    store = TaskStore(session)
    async with _locked_task(store, task_id) as task:
        status = task.status
        await store.delete(task_id)
        remaining = await store.column_orders(status)
        statements = store.close_gaps(remaining, utcnow())
        await store.batch(statements)

    log.info("task.deleted", task_id=task_id, status=status)
    log.debug("column.reindexed", status=status, size=len(remaining), shifted=len(statements))


# ---------------------------------------------------------------------------
# Moves
# ---------------------------------------------------------------------------


async def move_task(
    session: AsyncSession,
    task_id: str,
    status: Any,
    order: Any,
) -> TaskRead:
    """Move a task to ``order`` in the ``status`` column.

    ``order`` is an insertion index among the other tasks of the target
    column; anything past the end places the task last.
    """
    target = validate_status(status).value
    index = validate_order(order)

    store = TaskStore(session)
    async with _locked_task(store, task_id, target) as task:
        source = task.status
        now = utcnow()

        if source == target:
            ids = ordering.splice(await store.column_ids(source), task_id, index)
            statements = store.renumber_statements(ids, now)
            log.debug("column.reindexed", status=source, size=len(ids))
        else:
            source_ids = ordering.without(await store.column_ids(source), task_id)
            target_ids = ordering.splice(await store.column_ids(target), task_id, index)
            statements = [
                store.set_status(task_id, target, now),
                *store.renumber_statements(source_ids, now),
                *store.renumber_statements(target_ids, now),
            ]
            log.debug("column.reindexed", status=source, size=len(source_ids))
            log.debug("column.reindexed", status=target, size=len(target_ids))

        await store.batch(statements)

    row = await store.get(task_id)
    if not row:
        raise InconsistentStateError("Failed to retrieve moved task")

    log.info(
        "task.moved",
        task_id=task_id,
        from_status=source,
        to_status=row.status,
        order=row.order,
    )
    return to_task_read(row)
