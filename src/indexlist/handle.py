"""Handles referencing nodes of an IndexList."""

from dataclasses import dataclass
from typing import Generic

from indexlist.types import Generation, Position, T


@dataclass(frozen=True)
class Handle(Generic[T]):
    """
    Immutable reference to a node stored in an IndexList.

    A handle names a slot position plus the generation the slot had when the
    handle was issued. Once the node is removed the slot's generation moves on,
    so the handle stops resolving even if the position is reused.
    """

    position: Position
    generation: Generation

    def __repr__(self) -> str:
        return f"Handle({self.position}@{self.generation})"
