"""Tests for prowl.app — running every configured route."""

from __future__ import annotations

import io
import json
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from prowl._errors import ConfigError
from prowl.app import expand_routes, generate, generate_async, validate, validate_async
from prowl.config import ProwlConfig, RouteConfig
from prowl.expand.materialize import HandledRoute

from .conftest import CMS, FakeCMS, param


@pytest.fixture
def quiet():
    with patch.object(sys, "stderr", io.StringIO()) as buf:
        yield buf


def _config(tmp_path: Path, blog_config: RouteConfig, **kwargs: object) -> ProwlConfig:
    return ProwlConfig(
        root=tmp_path,
        routes=(
            ("/", RouteConfig(type="default")),
            ("/blog/:cat/:slug", blog_config),
            ("/p/:id", RouteConfig(type="strapi", params={"id": param("/ids")})),
        ),
        **kwargs,  # type: ignore[arg-type]
    )


class TestExpandRoutes:
    """expand_routes — every template through its router."""

    @pytest.mark.asyncio
    async def test_configuration_order(
        self, tmp_path: Path, blog_cms: FakeCMS, blog_config: RouteConfig, quiet: io.StringIO,
    ) -> None:
        blog_cms.on(f"{CMS}/ids", ["1"])
        async with blog_cms.client() as client:
            routes = await expand_routes(_config(tmp_path, blog_config), client=client)
        assert [r.route for r in routes] == [
            "/",
            "/blog/tech/a",
            "/blog/tech/b",
            "/blog/life/c",
            "/p/1",
        ]

    @pytest.mark.asyncio
    async def test_one_failure_does_not_affect_others(
        self, tmp_path: Path, blog_cms: FakeCMS, blog_config: RouteConfig, quiet: io.StringIO,
    ) -> None:
        async with blog_cms.client() as client:
            routes = await expand_routes(_config(tmp_path, blog_config), client=client)
        assert routes[-1] == HandledRoute(route="/p/:id", type="strapi")
        assert len(routes) == 5

    @pytest.mark.asyncio
    async def test_unknown_router(self, tmp_path: Path) -> None:
        config = ProwlConfig(root=tmp_path, routes=(("/x", RouteConfig(type="nope")),))
        with pytest.raises(ConfigError, match="No router plugin named 'nope'"):
            await expand_routes(config)

    @pytest.mark.asyncio
    async def test_max_concurrency_forwarded(
        self, tmp_path: Path, cms: FakeCMS, quiet: io.StringIO,
    ) -> None:
        cms.on(f"{CMS}/cats", [str(i) for i in range(6)])
        for i in range(6):
            cms.on(f"{CMS}/slugs/{i}", ["x"], delay=0.01)
        route = RouteConfig(
            type="strapi",
            params={"cat": param("/cats"), "slug": param("/slugs/{{ cat }}")},
        )
        config = ProwlConfig(root=tmp_path, max_concurrency=3, routes=(("/:cat/:slug", route),))
        async with cms.client() as client:
            routes = await expand_routes(config, client=client)
        assert len(routes) == 6
        assert cms.in_flight_peak == 3


class TestGenerateAsync:
    """generate_async — expand and write the route list."""

    @pytest.mark.asyncio
    async def test_writes_route_list(
        self, tmp_path: Path, blog_cms: FakeCMS, blog_config: RouteConfig, quiet: io.StringIO,
    ) -> None:
        blog_cms.on(f"{CMS}/ids", ["1", "2"])
        config = _config(tmp_path, blog_config)
        async with blog_cms.client() as client:
            result = await generate_async(config, client=client)

        assert result.output_path == tmp_path / "routes.json"
        written = json.loads(result.output_path.read_text())
        assert written[1] == {"route": "/blog/tech/a", "type": "strapi"}
        assert len(written) == len(result.routes) == 6
        assert result.fallbacks == ()
        assert result.duration_ms >= 0

    @pytest.mark.asyncio
    async def test_fallbacks_reported(
        self, tmp_path: Path, blog_cms: FakeCMS, blog_config: RouteConfig, quiet: io.StringIO,
    ) -> None:
        async with blog_cms.client() as client:
            result = await generate_async(_config(tmp_path, blog_config), client=client, write=False)
        assert result.output_path is None
        assert [f.route for f in result.fallbacks] == ["/p/:id"]
        assert not (tmp_path / "routes.json").exists()


class TestValidate:
    """validate_async / validate — router warnings per route."""

    @pytest.mark.asyncio
    async def test_warnings_prefixed_by_route(self, tmp_path: Path) -> None:
        config = ProwlConfig(
            root=tmp_path,
            routes=(
                ("/a/", RouteConfig(type="default", params={"id": param("/ids")})),
                ("/p/:id", RouteConfig(type="strapi", params={"id": param("/ids")})),
            ),
        )
        warnings = await validate_async(config)
        assert len(warnings) == 1
        assert warnings[0].startswith("/a/: parameters (id)")

    def test_validate_from_root(self, tmp_path: Path, quiet: io.StringIO) -> None:
        (tmp_path / "prowl.yaml").write_text("routes:\n  /about/:\n")
        assert validate(tmp_path) == []
        assert "validate" in quiet.getvalue()


class TestGenerate:
    """generate — the synchronous entry point."""

    def test_no_params_project(self, tmp_path: Path, quiet: io.StringIO) -> None:
        (tmp_path / "prowl.yaml").write_text(
            "prowl:\n  output: dist/routes.json\n"
            "routes:\n  /:\n  /about/:\n"
        )
        result = generate(tmp_path)

        assert [r.route for r in result.routes] == ["/", "/about/"]
        written = json.loads((tmp_path / "dist" / "routes.json").read_text())
        assert written == [
            {"route": "/", "type": "default"},
            {"route": "/about/", "type": "default"},
        ]
        output = quiet.getvalue()
        assert "2 routes" in output
        assert "2 route templates loaded" in output
