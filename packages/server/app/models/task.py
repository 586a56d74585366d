"""Task model."""

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import StringIDMixin, TimestampMixin


class Task(StringIDMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "tasks"
    __table_args__ = (sa.Index("ix_tasks_status_order", "status", "order"),)

    title: str = Field(nullable=False, max_length=100)
    description: str = Field(nullable=False, default="", max_length=500)
    status: str = Field(nullable=False, default="todo")  # todo | in_progress | done
    # Dense 0-based position within the status column. Written only by reindexing.
    order: int = Field(nullable=False, default=0)
