"""Prowl configuration.

ProwlConfig is the central configuration object, frozen after creation.
ParameterConfig and RouteConfig describe how each route template expands.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from prowl._errors import ConfigError
from prowl._types import ResultsHandler


@dataclass(frozen=True, slots=True)
class ParameterConfig:
    """Fetch configuration for one route parameter.

    Attributes:
        url: Request URL template (``{{ name }}`` placeholders).
        query: Request body template, sent as the POST payload.
        headers: Request headers sent with every fetch for this parameter.
        results_handler: Optional transform applied to the parsed payload
            before values are extracted.
        property: Optional dotted path selecting the value from each row.
        suppress_errors: Resolve transport failures to "no values" instead
            of failing the route.  Status and content-type errors are never
            suppressed.

    """

    url: str
    query: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)
    results_handler: ResultsHandler | None = None
    property: str | None = None
    suppress_errors: bool = False


@dataclass(frozen=True, slots=True)
class RouteConfig:
    """Configuration for one route template.

    Attributes:
        type: Router plugin name; copied unchanged onto every output route.
        params: Parameter name -> fetch configuration.

    """

    type: str
    params: Mapping[str, ParameterConfig] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.params, MappingProxyType):
            object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def missing(self, names: tuple[str, ...]) -> tuple[str, ...]:
        """Return the entries of *names* with no parameter configuration."""
        return tuple(name for name in names if name not in self.params)


@dataclass(frozen=True, slots=True)
class ProwlConfig:
    """Configuration for a prowl run.

    Attributes:
        root: Project root directory (contains prowl.yaml and handlers/).
              Always resolved to an absolute path on construction.
        output: Output file for the generated route list.
        timeout: HTTP timeout in seconds for each fetch.
        max_concurrency: Cap on in-flight fetches per route template
            (``None`` = unbounded fan-out).
        handlers_dir: Directory holding ``module:attr`` results handlers.
        routes: Route templates and their configuration, in file order.

    """

    root: Path = field(default_factory=Path.cwd)
    output: Path = field(default_factory=lambda: Path("routes.json"))
    timeout: float = 30.0
    max_concurrency: int | None = None
    handlers_dir: str = "handlers"
    routes: tuple[tuple[str, RouteConfig], ...] = ()

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        check_max_concurrency(self.max_concurrency)

    @property
    def handlers_path(self) -> Path:
        """Absolute path to the results-handler directory."""
        return self.root / self.handlers_dir

    @property
    def output_path(self) -> Path:
        """Absolute path to the route list output file."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output


def check_max_concurrency(value: object) -> None:
    """Reject a concurrency cap that is not ``None`` or a positive int.

    Raises:
        ConfigError: On zero, negative or non-integer values.

    """
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"max_concurrency must be a positive integer, got {value!r}"
        raise ConfigError(msg)
