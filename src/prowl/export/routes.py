"""Route list export — write generated routes as JSON.

The file is a JSON array of ``{"route": ..., "type": ...}`` objects in
configuration order, ready for a static build step to consume.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from prowl._errors import ExportError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from prowl.expand.materialize import HandledRoute


@dataclass(frozen=True, slots=True)
class ExportedFile:
    """Record of the written route list.

    Attributes:
        output_path: Absolute filesystem path to the written file.
        routes_count: Number of routes written.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to serialize and write.

    """

    output_path: Path
    routes_count: int
    size_bytes: int
    duration_ms: float


def dump_routes(routes: Sequence[HandledRoute]) -> str:
    """Serialize *routes* to the JSON route list format."""
    return json.dumps([r.to_dict() for r in routes], indent=2) + "\n"


def write_routes(routes: Sequence[HandledRoute], output_path: Path) -> ExportedFile:
    """Write *routes* to *output_path*, creating parent dirs as needed.

    Raises:
        ExportError: If the file cannot be written.

    """
    t0 = time.perf_counter()
    data = dump_routes(routes).encode("utf-8")
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
    except OSError as exc:
        msg = f"Failed to write route list to {output_path}: {exc}"
        raise ExportError(msg) from exc
    return ExportedFile(
        output_path=output_path,
        routes_count=len(routes),
        size_bytes=len(data),
        duration_ms=(time.perf_counter() - t0) * 1000,
    )
