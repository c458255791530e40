"""Core type definitions for entitymap."""

from collections.abc import Callable, Mapping
from typing import Any

type RawRecord = Mapping[str, Any]
"""Untransformed input for one record, keyed by property name.

Must carry an ``id`` entry for the record to be tracked by an identity map.
"""

type Transform = Callable[[Any], Any]
"""Single-argument conversion between raw and in-memory representations."""
