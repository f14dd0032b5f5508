"""Scalar extraction — shape a fetched payload into route segment values."""

from collections.abc import Mapping, Sequence
from typing import Any

from prowl._errors import ShapeError
from prowl._types import Scalar
from prowl.config import ParameterConfig
from prowl.routes.lookup import deep_get


def extract(payload: Any, config: ParameterConfig) -> list[Scalar]:
    """Turn a parsed payload into an ordered list of values.

    Applies ``config.results_handler`` first (its exceptions propagate
    unchanged), then either returns the payload as-is or, when
    ``config.property`` is set, picks that dotted path out of every row.
    Missing paths yield ``None``.

    Raises:
        ShapeError: If the (handled) payload is not a sequence.

    """
    if config.results_handler is not None:
        payload = config.results_handler(payload)

    rows = _as_sequence(payload, config)
    if config.property is None:
        return list(rows)
    return [deep_get(config.property, row) for row in rows]


def _as_sequence(payload: Any, config: ParameterConfig) -> Sequence[Any]:
    if isinstance(payload, (str, bytes, Mapping)) or not isinstance(payload, Sequence):
        expected = "rows" if config.property is not None else "values"
        msg = (
            f"Expected a list of {expected} from {config.url}, "
            f"got {type(payload).__name__}"
        )
        raise ShapeError(msg)
    return payload
