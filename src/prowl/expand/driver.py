"""Expansion driver — the level-by-level cross-product engine.

Walks route parameters left to right, keeping the set of partial
assignments discovered so far.  Each level issues one fetch per live
assignment (using that assignment as context), all concurrently, and joins
them before the next level starts::

    level 0:  ()                 -> fetch(category, {})
              => ("tech",) ("life",)
    level 1:  ("tech",)          -> fetch(slug, {category: "tech"})
              ("life",)          -> fetch(slug, {category: "life"})
              => ("tech", "a") ("tech", "b") ("life", "c")

Output order is parent order, then child order, whatever order the fetches
finish in.  A parent whose fetch returns no values is pruned.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prowl._types import Context, PartialAssignment, Scalar
    from prowl.routes.split import ParameterDescriptor

type LevelFetch = Callable[[ParameterDescriptor, Context], Awaitable[list[Scalar]]]

# Called after each level: (param, parents, children, duration_ms)
type LevelHook = Callable[[ParameterDescriptor, int, int, float], None]


async def expand(
    params: Sequence[ParameterDescriptor],
    fetch_level: LevelFetch,
    *,
    on_level: LevelHook | None = None,
) -> list[PartialAssignment]:
    """Expand *params* into every value combination the fetches produce.

    Starts from a single empty assignment, so a route without parameters
    expands to exactly one (empty) assignment.

    Raises:
        Exception: The first failed fetch of a level, in parent order, once
            every fetch of that level has settled.

    """
    names = [p.name for p in params]
    assignments: list[PartialAssignment] = [()]

    for param in params:
        t0 = time.perf_counter()
        prefix = names[: param.position]

        batches = await asyncio.gather(
            *(fetch_level(param, dict(zip(prefix, parent))) for parent in assignments),
            return_exceptions=True,
        )
        for batch in batches:
            if isinstance(batch, BaseException):
                raise batch

        next_generation = [
            (*parent, value)
            for parent, values in zip(assignments, batches)
            for value in values
        ]

        if on_level is not None:
            elapsed = (time.perf_counter() - t0) * 1000
            on_level(param, len(assignments), len(next_generation), elapsed)
        assignments = next_generation

    return assignments
