"""Load ProwlConfig from prowl.yaml / prowl.toml.

Merges file config with keyword overrides (CLI flags).  Overrides take
precedence.  A config file looks like::

    prowl:
      output: routes.json
      timeout: 10

    routes:
      /blog/:category/:slug:
        type: strapi
        category:
          url: https://cms.example.com/graphql
          query: '{"query": "{ categories { slug } }"}'
          results_handler: graphql
          property: slug
        slug:
          url: https://cms.example.com/graphql
          query: '{"query": "{ articles(where: {category: \\"{{ category }}\\"}) { slug } }"}'
          results_handler: handlers:articles
          property: slug
"""

from __future__ import annotations

import importlib.util
import sys
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from prowl._errors import ConfigError
from prowl.config import ParameterConfig, ProwlConfig, RouteConfig
from prowl.expand.handlers import BUILTIN_HANDLERS

_SETTINGS_KEYS = frozenset({"output", "timeout", "max_concurrency", "handlers_dir"})

_PARAM_KEYS = frozenset({
    "url",
    "query",
    "headers",
    "results_handler",
    "property",
    "suppress_errors",
})

_DEFAULT_ROUTER = "default"


def load_config(root: Path, **overrides: object) -> ProwlConfig:
    """Load ProwlConfig from *root*, merging prowl.yaml/prowl.toml if present.

    Raises:
        ConfigError: If the config file cannot be parsed or is malformed.

    """
    data = _read_prowl_config(root)
    settings = _extract_settings(data)
    merged: dict[str, Any] = {**settings, **overrides}
    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))

    if "routes" not in merged:
        config = ProwlConfig(root=root, **merged)
        routes = _parse_routes(data.get("routes"), config.handlers_path)
        merged["routes"] = routes
    return ProwlConfig(root=root, **merged)


def _read_prowl_config(root: Path) -> dict[str, Any]:
    """Read prowl config from yaml/toml if present.  Returns empty dict otherwise."""
    for name in ("prowl.yaml", "prowl.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "prowl.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        msg = f"Failed to parse {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path}: expected a mapping at top level, got {type(data).__name__}"
        raise ConfigError(msg)
    return data


def _parse_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as exc:
        msg = f"Failed to parse {path}: {exc}"
        raise ConfigError(msg) from exc


def _extract_settings(data: Mapping[str, Any]) -> dict[str, Any]:
    """Pull ProwlConfig fields from the ``prowl:`` section."""
    section = data.get("prowl") or {}
    if not isinstance(section, Mapping):
        msg = "'prowl' section must be a mapping"
        raise ConfigError(msg)
    unknown = sorted(set(section) - _SETTINGS_KEYS)
    if unknown:
        msg = f"Unknown prowl settings: {', '.join(unknown)}"
        raise ConfigError(msg)
    return dict(section)


def _parse_routes(
    raw: object,
    handlers_path: Path,
) -> tuple[tuple[str, RouteConfig], ...]:
    """Convert the ``routes:`` mapping into RouteConfig records, in file order."""
    if raw is None:
        return ()
    if not isinstance(raw, Mapping):
        msg = "'routes' must be a mapping of route template -> config"
        raise ConfigError(msg)
    return tuple(
        (str(route), parse_route_config(route, entry, handlers_path))
        for route, entry in raw.items()
    )


def parse_route_config(
    route: str,
    entry: object,
    handlers_path: Path,
) -> RouteConfig:
    """Build a RouteConfig from one raw ``routes:`` entry.

    ``type`` names the router plugin (``default`` when omitted); every other
    key is a parameter name mapped to its fetch configuration.
    """
    if entry is None:
        return RouteConfig(type=_DEFAULT_ROUTER)
    if not isinstance(entry, Mapping):
        msg = f"Route {route!r}: config must be a mapping"
        raise ConfigError(msg)

    router = entry.get("type", _DEFAULT_ROUTER)
    if not isinstance(router, str):
        msg = f"Route {route!r}: 'type' must be a str, got {type(router).__name__}"
        raise ConfigError(msg)

    params: dict[str, ParameterConfig] = {}
    for name, raw_param in entry.items():
        if name == "type":
            continue
        params[name] = _parse_param(route, name, raw_param, handlers_path)
    return RouteConfig(type=router, params=params)


def _parse_param(
    route: str,
    name: str,
    raw: object,
    handlers_path: Path,
) -> ParameterConfig:
    where = f"Route {route!r}, parameter {name!r}"
    if not isinstance(raw, Mapping):
        msg = f"{where}: config must be a mapping"
        raise ConfigError(msg)

    unknown = sorted(set(raw) - _PARAM_KEYS)
    if unknown:
        msg = f"{where}: unknown keys {', '.join(unknown)}"
        raise ConfigError(msg)

    url = raw.get("url")
    if not isinstance(url, str) or not url:
        msg = f"{where}: 'url' is required"
        raise ConfigError(msg)

    headers = raw.get("headers") or {}
    if not isinstance(headers, Mapping):
        msg = f"{where}: 'headers' must be a mapping"
        raise ConfigError(msg)

    prop = raw.get("property")
    if prop is not None and not isinstance(prop, str):
        msg = f"{where}: 'property' must be a str"
        raise ConfigError(msg)

    handler = raw.get("results_handler")
    return ParameterConfig(
        url=url,
        query=str(raw.get("query") or ""),
        headers={str(k): str(v) for k, v in headers.items()},
        results_handler=(
            resolve_results_handler(handler, handlers_path) if handler else None
        ),
        property=prop,
        suppress_errors=bool(raw.get("suppress_errors", False)),
    )


def resolve_results_handler(ref: object, handlers_path: Path) -> Any:
    """Resolve a results handler from a built-in name or ``module:attr``.

    ``module`` is a file in *handlers_path* (``handlers:articles`` loads
    ``articles`` from ``handlers/handlers.py``).

    Raises:
        ConfigError: If the handler cannot be found or is not callable.

    """
    if callable(ref):
        return ref
    if not isinstance(ref, str):
        msg = f"results_handler must be a str, got {type(ref).__name__}"
        raise ConfigError(msg)
    if ref in BUILTIN_HANDLERS:
        return BUILTIN_HANDLERS[ref]

    module_part, _, attr = ref.partition(":")
    if not module_part or not attr:
        msg = (
            f"results_handler {ref!r}: expected a built-in "
            f"({', '.join(sorted(BUILTIN_HANDLERS))}) or module:attr"
        )
        raise ConfigError(msg)
    py_file = handlers_path / f"{module_part}.py"
    if not py_file.is_file():
        msg = f"results_handler {ref!r}: {py_file} not found"
        raise ConfigError(msg)

    module_name = f"prowl_handlers_{module_part}"
    module = sys.modules.get(module_name)
    if module is None or getattr(module, "__file__", None) != str(py_file):
        loader_spec = importlib.util.spec_from_file_location(module_name, py_file)
        if loader_spec is None or loader_spec.loader is None:
            msg = f"results_handler {ref!r}: failed to load {py_file}"
            raise ConfigError(msg)
        module = importlib.util.module_from_spec(loader_spec)
        sys.modules[module_name] = module
        try:
            loader_spec.loader.exec_module(module)
        except Exception as exc:
            del sys.modules[module_name]
            msg = f"results_handler {ref!r}: failed to load {py_file}: {exc}"
            raise ConfigError(msg) from exc

    callable_obj = getattr(module, attr, None)
    if not callable(callable_obj):
        msg = f"results_handler {ref!r}: {attr} not callable in {py_file}"
        raise ConfigError(msg)
    return callable_obj
