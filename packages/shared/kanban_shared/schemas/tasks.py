"""Task-related Pydantic schemas for shared use across server and frontend codegen."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import TaskStatus


# ---------------------------------------------------------------------------
# Task read model
# ---------------------------------------------------------------------------

class TaskRead(BaseModel):
    """A task as exposed over the API. Timestamps use camelCase on the wire."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str = ""
    status: TaskStatus
    order: int
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
# Field constraints are checked by the service layer so that every rejection
# carries the same message regardless of the entry point.

class TaskCreate(BaseModel):
    """Request body for POST /tasks."""
    title: Optional[str] = None
    description: Optional[str] = None


class TaskUpdate(BaseModel):
    """Request body for PUT /tasks/{taskId}."""
    title: Optional[str] = None
    description: Optional[str] = None


class TaskMove(BaseModel):
    """Request body for PATCH /tasks/{taskId}/move.

    ``order`` is the desired insertion index in the target column. Values past
    the end of the column are clamped to the end.
    """
    status: Any = None
    order: Any = None


# ---------------------------------------------------------------------------
# Response envelopes
# ---------------------------------------------------------------------------

class TaskResponse(BaseModel):
    task: TaskRead


class TaskListResponse(BaseModel):
    tasks: List[TaskRead] = Field(default_factory=list)
