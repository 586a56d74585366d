"""
Script to fill a local board with sample tasks for manual testing.

Usage:
    python -m app.scripts.seed_board --per-column 4
"""

import argparse
import asyncio

import structlog

from app.core.config import get_settings
from app.core.database import get_session_context, init_db
from app.core.logging import configure_logging
from app.services.tasks import create_task, delete_task, list_tasks, move_task
from kanban_shared.schemas.common import STATUS_ORDER

settings = get_settings()
log = structlog.get_logger()

SAMPLE_TITLES = [
    "Write onboarding guide",
    "Fix login redirect",
    "Design column empty state",
    "Add keyboard shortcuts",
    "Review API error messages",
    "Set up CI cache",
    "Profile board load time",
    "Tidy up task card styles",
]


async def seed(per_column: int, reset: bool) -> None:
    await init_db()

    async with get_session_context() as session:
        if reset:
            for task in await list_tasks(session):
                await delete_task(session, task.id)
            log.info("seed.cleared")

        # Tasks are always created in todo, then moved to the end of their column.
        for status in STATUS_ORDER:
            for i in range(per_column):
                title = f"{SAMPLE_TITLES[i % len(SAMPLE_TITLES)]} ({status.value})"
                task = await create_task(session, title, "Sample task created by seed_board.")
                if status.value != task.status.value:
                    await move_task(session, task.id, status.value, per_column)

        tasks = await list_tasks(session)
        log.info("seed.done", total=len(tasks))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the task board with sample tasks.")
    parser.add_argument("--per-column", type=int, default=3, help="Tasks to create in each column")
    parser.add_argument("--reset", action="store_true", help="Delete existing tasks first")

    args = parser.parse_args()

    configure_logging(settings.log_level, settings.log_format)
    asyncio.run(seed(args.per_column, args.reset))
