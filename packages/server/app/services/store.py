"""
Row store for tasks: keyed lookups, ordered column scans and atomic batches.

Single-row writes and batches commit the session's transaction, so every
statement handed to ``batch`` becomes visible together or not at all.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy import Update, delete, func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models.task import Task

from .ordering import positions


class TaskStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    # -- reads ---------------------------------------------------------------

    async def get(self, task_id: str) -> Optional[Task]:
        """Point lookup that always reflects the committed row."""
        result = await self.session.execute(
            select(Task)
            .where(Task.id == task_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def column_orders(self, status: str) -> list[tuple[str, int]]:
        """``(id, order)`` pairs of the tasks in ``status``, ascending by order."""
        result = await self.session.execute(
            select(Task.id, Task.order)
            .where(Task.status == status)
            .order_by(Task.order.asc(), Task.created_at.asc(), Task.id.asc())
        )
        return [(row.id, row.order) for row in result.all()]

    async def column_ids(self, status: str) -> list[str]:
        """Ids of the tasks in ``status``, ascending by order."""
        return [task_id for task_id, _ in await self.column_orders(status)]

    async def max_order(self, status: str) -> Optional[int]:
        result = await self.session.execute(
            select(func.max(Task.order)).where(Task.status == status)
        )
        return result.scalar_one_or_none()

    async def all_rows(self) -> list[Task]:
        result = await self.session.execute(
            select(Task)
            .order_by(Task.status.asc(), Task.order.asc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    # -- writes --------------------------------------------------------------

    async def insert(self, task: Task) -> None:
        self.session.add(task)
        await self.session.commit()

    async def delete(self, task_id: str) -> None:
        """Stage a delete; it commits with the next batch."""
        await self.session.execute(delete(Task).where(Task.id == task_id))

    async def batch(self, statements: Sequence[Update]) -> None:
        """Execute ``statements`` in order and commit them as one unit."""
        try:
            for stmt in statements:
                await self.session.execute(stmt)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    # -- statement builders --------------------------------------------------

    @staticmethod
    def set_fields(task_id: str, now: datetime, **values: Any) -> Update:
        return update(Task).where(Task.id == task_id).values(updated_at=now, **values)

    @staticmethod
    def set_status(task_id: str, status: str, now: datetime) -> Update:
        return TaskStore.set_fields(task_id, now, status=status)

    @staticmethod
    def renumber_statements(ids: Sequence[str], now: datetime) -> list[Update]:
        """One positional ``order`` update per id."""
        return [TaskStore.set_fields(tid, now, order=index) for tid, index in positions(ids)]

    @staticmethod
    def close_gaps(entries: Sequence[tuple[str, int]], now: datetime) -> list[Update]:
        """Renumber ``(id, order)`` pairs, skipping rows already at their index."""
        current = dict(entries)
        return [
            TaskStore.set_fields(tid, now, order=index)
            for tid, index in positions([tid for tid, _ in entries])
            if current[tid] != index
        ]
