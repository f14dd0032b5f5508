"""Route materializer — finished assignments to concrete routes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prowl._types import PartialAssignment
    from prowl.routes.split import RouteSplit


@dataclass(frozen=True, slots=True)
class HandledRoute:
    """A concrete route produced by a router plugin.

    Attributes:
        route: Materialized URL path (e.g., ``"/blog/tech/hello"``).
        type: Router plugin name the route was configured with.

    """

    route: str
    type: str

    def to_dict(self) -> dict[str, str]:
        return {"route": self.route, "type": self.type}


def materialize(split: RouteSplit, assignment: PartialAssignment, route_type: str) -> HandledRoute:
    """Build the route for one finished *assignment*."""
    return HandledRoute(route=split.create_path(*assignment), type=route_type)
