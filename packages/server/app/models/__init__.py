# SQLModel definitions, imported here to ensure metadata is populated for Alembic.
from .base import StringIDMixin, TimestampMixin  # noqa: F401
from .task import Task  # noqa: F401
