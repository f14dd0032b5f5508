"""Tests for prowl.expand.driver — the level-by-level expansion loop."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import pytest

from prowl.expand.driver import expand
from prowl.routes.split import ParameterDescriptor, route_split


class _Tree:
    """Fake level fetch answering from a context-keyed table.

    Keys are ``(param, tuple(sorted(context.items())))``; unknown keys answer
    no values.  Optional per-key delays let tests scramble completion order.
    """

    def __init__(
        self,
        table: Mapping[tuple[str, tuple[tuple[str, Any], ...]], list[Any]],
        delays: Mapping[tuple[str, tuple[tuple[str, Any], ...]], float] | None = None,
    ) -> None:
        self._table = table
        self._delays = delays or {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.completed: list[tuple[str, dict[str, Any]]] = []

    async def __call__(self, param: ParameterDescriptor, context: Mapping[str, Any]) -> list[Any]:
        key = (param.name, tuple(sorted(context.items())))
        self.calls.append((param.name, dict(context)))
        await asyncio.sleep(self._delays.get(key, 0))
        self.completed.append((param.name, dict(context)))
        return list(self._table.get(key, []))


def _k(name: str, **context: Any) -> tuple[str, tuple[tuple[str, Any], ...]]:
    return (name, tuple(sorted(context.items())))


BLOG = {
    _k("cat"): ["tech", "life"],
    _k("slug", cat="tech"): ["a", "b"],
    _k("slug", cat="life"): ["c"],
}


class TestExpand:
    """expand — ragged cross-product of per-level values."""

    @pytest.mark.asyncio
    async def test_no_params_single_empty_assignment(self) -> None:
        fetch = _Tree({})
        assert await expand((), fetch) == [()]
        assert fetch.calls == []

    @pytest.mark.asyncio
    async def test_single_level(self) -> None:
        fetch = _Tree({_k("id"): ["1", "2", "3"]})
        result = await expand(route_split("/p/:id").params, fetch)
        assert result == [("1",), ("2",), ("3",)]
        assert fetch.calls == [("id", {})]

    @pytest.mark.asyncio
    async def test_blog_example(self) -> None:
        fetch = _Tree(BLOG)
        result = await expand(route_split("/blog/:cat/:slug").params, fetch)
        assert result == [("tech", "a"), ("tech", "b"), ("life", "c")]

    @pytest.mark.asyncio
    async def test_one_fetch_per_parent(self) -> None:
        fetch = _Tree(BLOG)
        await expand(route_split("/blog/:cat/:slug").params, fetch)
        assert fetch.calls == [
            ("cat", {}),
            ("slug", {"cat": "tech"}),
            ("slug", {"cat": "life"}),
        ]

    @pytest.mark.asyncio
    async def test_ragged_count(self) -> None:
        table = {
            _k("a"): [1, 2, 3],
            _k("b", a=1): ["x"],
            _k("b", a=2): ["x", "y", "z", "w"],
            _k("b", a=3): ["x", "y"],
        }
        result = await expand(route_split("/:a/:b").params, _Tree(table))
        assert len(result) == 1 + 4 + 2

    @pytest.mark.asyncio
    async def test_empty_child_prunes_only_that_parent(self) -> None:
        table = {
            _k("cat"): ["tech", "empty", "life"],
            _k("slug", cat="tech"): ["a"],
            _k("slug", cat="life"): ["c"],
        }
        result = await expand(route_split("/blog/:cat/:slug").params, _Tree(table))
        assert result == [("tech", "a"), ("life", "c")]

    @pytest.mark.asyncio
    async def test_dead_branch_not_fetched_deeper(self) -> None:
        table = {
            _k("a"): ["x", "y"],
            _k("b", a="x"): ["1"],
            _k("c", a="x", b="1"): ["z"],
        }
        fetch = _Tree(table)
        result = await expand(route_split("/:a/:b/:c").params, fetch)
        assert result == [("x", "1", "z")]
        assert [name for name, _ in fetch.calls] == ["a", "b", "b", "c"]

    @pytest.mark.asyncio
    async def test_three_levels_context_accumulates(self) -> None:
        table = {
            _k("lang"): ["en"],
            _k("section", lang="en"): ["docs"],
            _k("page", lang="en", section="docs"): ["intro", "api"],
        }
        fetch = _Tree(table)
        result = await expand(route_split("/:lang/:section/:page").params, fetch)
        assert result == [("en", "docs", "intro"), ("en", "docs", "api")]
        assert fetch.calls[-1] == ("page", {"lang": "en", "section": "docs"})

    @pytest.mark.asyncio
    async def test_order_independent_of_completion(self) -> None:
        delays = {_k("slug", cat="tech"): 0.05}
        fetch = _Tree(BLOG, delays)
        result = await expand(route_split("/blog/:cat/:slug").params, fetch)

        assert fetch.completed[-1] == ("slug", {"cat": "tech"})
        assert result == [("tech", "a"), ("tech", "b"), ("life", "c")]

    @pytest.mark.asyncio
    async def test_level_fetches_run_concurrently(self) -> None:
        started: list[str] = []
        release = asyncio.Event()

        async def fetch(param: ParameterDescriptor, context: Mapping[str, Any]) -> list[Any]:
            if param.name == "cat":
                return ["tech", "life", "misc"]
            started.append(context["cat"])
            if len(started) == 3:
                release.set()
            await asyncio.wait_for(release.wait(), timeout=1.0)
            return ["x"]

        result = await expand(route_split("/:cat/:slug").params, fetch)
        assert sorted(started) == ["life", "misc", "tech"]
        assert len(result) == 3

    @pytest.mark.asyncio
    async def test_first_error_in_parent_order_raised(self) -> None:
        async def fetch(param: ParameterDescriptor, context: Mapping[str, Any]) -> list[Any]:
            if param.name == "cat":
                return ["a", "b"]
            if context["cat"] == "a":
                await asyncio.sleep(0.02)
                raise KeyError("first")
            raise ValueError("second")

        with pytest.raises(KeyError, match="first"):
            await expand(route_split("/:cat/:slug").params, fetch)

    @pytest.mark.asyncio
    async def test_level_hook(self) -> None:
        seen: list[tuple[str, int, int]] = []

        def hook(param: ParameterDescriptor, parents: int, children: int, ms: float) -> None:
            assert ms >= 0
            seen.append((param.name, parents, children))

        await expand(route_split("/blog/:cat/:slug").params, _Tree(BLOG), on_level=hook)
        assert seen == [("cat", 1, 2), ("slug", 2, 3)]
