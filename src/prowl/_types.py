"""Shared type definitions for prowl."""

from collections.abc import Callable, Mapping
from typing import Any

# One route segment value chosen for a parameter
type Scalar = Any

# Parameter name -> chosen value, for every parameter left of the current level
type Context = Mapping[str, Scalar]

# Values chosen so far, index-aligned with parameter positions
type PartialAssignment = tuple[Scalar, ...]

# Post-processing hook applied to a raw fetched payload
type ResultsHandler = Callable[[Any], Any]
