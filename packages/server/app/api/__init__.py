"""
API Router

Resource routers are mounted at the root, matching the paths the web client
calls (``/tasks``).
"""

from fastapi import APIRouter

from . import tasks

router = APIRouter()

router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
