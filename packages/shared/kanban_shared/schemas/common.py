from enum import Enum

from pydantic import BaseModel


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


# Board column order, left to right
STATUS_ORDER: list["TaskStatus"] = [
    TaskStatus.TODO,
    TaskStatus.IN_PROGRESS,
    TaskStatus.DONE,
]

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class MessageResponse(BaseModel):
    """Body of DELETE responses and of every error response."""
    message: str
