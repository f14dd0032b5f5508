"""Route template splitting.

Tokenizes a route template into its ordered parameters and a path builder::

    split = route_split("/blog/:category/:slug")
    [p.name for p in split.params]        -> ["category", "slug"]
    split.create_path("tech", "hello")    -> "/blog/tech/hello"

Only whole segments starting with ``:`` are parameters.  Every other
character of the template (including leading/trailing slashes) is kept, so a
template with no parameters builds back to itself.
"""

from dataclasses import dataclass

from prowl._errors import ConfigError
from prowl._types import Scalar

_PARAM_PREFIX = ":"


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    """One ``:name`` placeholder in a route template.

    Attributes:
        name: Parameter name without the leading colon (context key).
        position: 0-based index among the route's parameters.

    """

    name: str
    position: int


@dataclass(frozen=True, slots=True)
class RouteSplit:
    """A split route template.

    Attributes:
        route: The original template string.
        params: Parameters in left-to-right order.
        segments: The template split on ``/``.
        slots: Index into *segments* for each parameter.

    """

    route: str
    params: tuple[ParameterDescriptor, ...]
    segments: tuple[str, ...]
    slots: tuple[int, ...]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.params)

    def create_path(self, *values: Scalar) -> str:
        """Build a concrete path, one value per parameter in order.

        ``None`` renders as an empty segment.

        Raises:
            ValueError: If the number of values does not match the parameters.

        """
        if len(values) != len(self.slots):
            msg = (
                f"route {self.route!r} takes {len(self.slots)} values, "
                f"got {len(values)}"
            )
            raise ValueError(msg)
        parts = list(self.segments)
        for slot, value in zip(self.slots, values):
            parts[slot] = "" if value is None else str(value)
        return "/".join(parts)


def route_split(route: str) -> RouteSplit:
    """Split *route* into parameter descriptors and a path builder.

    Raises:
        ConfigError: If a parameter name appears more than once.

    """
    segments = tuple(route.split("/"))
    params: list[ParameterDescriptor] = []
    slots: list[int] = []
    seen: set[str] = set()

    for index, segment in enumerate(segments):
        if not segment.startswith(_PARAM_PREFIX) or len(segment) == 1:
            continue
        name = segment[len(_PARAM_PREFIX):]
        if name in seen:
            msg = f"Duplicate parameter {name!r} in route {route!r}"
            raise ConfigError(msg)
        seen.add(name)
        params.append(ParameterDescriptor(name=name, position=len(params)))
        slots.append(index)

    return RouteSplit(
        route=route,
        params=tuple(params),
        segments=segments,
        slots=tuple(slots),
    )
