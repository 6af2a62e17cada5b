"""Type definitions for indexlist."""

from typing import TypeAlias, TypeVar

# Generic type variable for stored values
T = TypeVar("T")

# Offset of a slot inside the backing store
Position: TypeAlias = int

# Per-slot reuse counter stamped into handles
Generation: TypeAlias = int
