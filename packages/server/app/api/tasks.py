"""
Task endpoints: CRUD and drag-and-drop moves.

Columns: Todo → In Progress → Done
- New tasks are appended to the end of Todo.
- Deleting a task renumbers the rest of its column.
- PATCH /{task_id}/move repositions a task within or across columns.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_session
from app.core.errors import ValidationError
from app.services.tasks import (
    create_task,
    delete_task,
    get_task,
    list_tasks,
    move_task,
    update_task,
)
from kanban_shared.schemas.common import MessageResponse
from kanban_shared.schemas.tasks import (
    TaskCreate,
    TaskListResponse,
    TaskMove,
    TaskResponse,
    TaskUpdate,
)

router = APIRouter()


@router.get("", response_model=TaskListResponse)
async def list_tasks_endpoint(session: AsyncSession = Depends(get_session)):
    """List every task, ordered by status then position."""
    return TaskListResponse(tasks=await list_tasks(session))


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task_endpoint(
    task_in: TaskCreate,
    session: AsyncSession = Depends(get_session),
):
    """Create a task at the end of the todo column."""
    if task_in.title is None:
        raise ValidationError("Title is required")
    task = await create_task(session, task_in.title, task_in.description)
    return TaskResponse(task=task)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task_endpoint(
    task_id: str,
    session: AsyncSession = Depends(get_session),
):
    """Get a single task."""
    return TaskResponse(task=await get_task(session, task_id))


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task_endpoint(
    task_id: str,
    task_in: TaskUpdate,
    session: AsyncSession = Depends(get_session),
):
    """Update title and/or description. Omitted fields keep their value."""
    task = await update_task(session, task_id, task_in.title, task_in.description)
    return TaskResponse(task=task)


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task_endpoint(
    task_id: str,
    session: AsyncSession = Depends(get_session),
):
    """Delete a task and renumber its column."""
    await delete_task(session, task_id)
    return MessageResponse(message="Task deleted successfully")


@router.patch("/{task_id}/move", response_model=TaskResponse)
async def move_task_endpoint(
    task_id: str,
    body: TaskMove,
    session: AsyncSession = Depends(get_session),
):
    """Move a task to a position in a column. Out-of-range positions go last."""
    if not body.status:
        raise ValidationError("Status is required")
    if body.order is None:
        raise ValidationError("Order is required")
    task = await move_task(session, task_id, body.status, body.order)
    return TaskResponse(task=task)
