"""
Pure list operations behind column reindexing.

A column is represented by the ids of its tasks in ascending ``order``. The
position of an id in the list is its new ``order`` value, so a list is dense
by construction.
"""

from __future__ import annotations

from typing import Sequence


def clamp_index(index: int, length: int) -> int:
    """Cap an insertion index to ``[0, length]``."""
    return max(0, min(index, length))


def without(ids: Sequence[str], task_id: str) -> list[str]:
    return [tid for tid in ids if tid != task_id]


def insert_at(ids: Sequence[str], task_id: str, index: int) -> list[str]:
    """Insert ``task_id`` at ``index`` clamped to the end of ``ids``."""
    result = list(ids)
    result.insert(clamp_index(index, len(result)), task_id)
    return result


def splice(ids: Sequence[str], task_id: str, index: int) -> list[str]:
    """Move ``task_id`` to ``index`` within ``ids``.

    The id is removed first, so ``index`` refers to a position among the
    remaining ids. If ``task_id`` is not in ``ids`` it is simply inserted.

    >>> splice(["a", "b", "c"], "b", 0)
    ['b', 'a', 'c']
    >>> splice(["a", "b", "c"], "a", 99)
    ['b', 'c', 'a']
    """
    return insert_at(without(ids, task_id), task_id, index)


def positions(ids: Sequence[str]) -> list[tuple[str, int]]:
    """Pair each id with its 0-based position."""
    return [(tid, index) for index, tid in enumerate(ids)]
