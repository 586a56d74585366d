"""Tests for the per-column locks."""

import asyncio

import pytest

from app.core.locks import ColumnLocks


@pytest.mark.asyncio
async def test_same_column_is_exclusive():
    locks = ColumnLocks()
    events: list[str] = []

    async def worker(name: str):
        async with locks.hold("todo"):
            events.append(f"{name}:in")
            await asyncio.sleep(0.01)
            events.append(f"{name}:out")

    await asyncio.gather(worker("a"), worker("b"))
    assert events == ["a:in", "a:out", "b:in", "b:out"]


@pytest.mark.asyncio
async def test_different_columns_run_together():
    locks = ColumnLocks()
    both_inside = asyncio.Event()
    inside = 0

    async def worker(status: str):
        nonlocal inside
        async with locks.hold(status):
            inside += 1
            if inside == 2:
                both_inside.set()
            await asyncio.wait_for(both_inside.wait(), timeout=1)

    await asyncio.gather(worker("todo"), worker("done"))
    assert both_inside.is_set()


@pytest.mark.asyncio
async def test_opposite_moves_do_not_deadlock():
    locks = ColumnLocks()

    async def worker(first: str, second: str):
        async with locks.hold(first, second):
            await asyncio.sleep(0.01)

    await asyncio.wait_for(
        asyncio.gather(worker("todo", "done"), worker("done", "todo")),
        timeout=1,
    )


@pytest.mark.asyncio
async def test_duplicate_status_held_once():
    locks = ColumnLocks()
    async with locks.hold("todo", "todo"):
        pass
    async with locks.hold("todo"):
        pass


@pytest.mark.asyncio
async def test_released_on_error():
    locks = ColumnLocks()
    with pytest.raises(RuntimeError):
        async with locks.hold("todo", "done"):
            raise RuntimeError("boom")
    await asyncio.wait_for(_enter(locks, "todo", "done"), timeout=1)


async def _enter(locks: ColumnLocks, *statuses: str) -> None:
    async with locks.hold(*statuses):
        pass
