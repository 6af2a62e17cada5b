"""indexlist - Doubly-linked list backed by a growing slot store with generational handles."""

from indexlist.errors import (
    CapacityExceededError,
    EmptyListError,
    IndexListError,
    InvalidHandleError,
)
from indexlist.handle import Handle
from indexlist.linkedlist import IndexList
from indexlist.store import SlotStore

__version__ = "0.0.1"

__all__ = [
    "IndexList",
    "Handle",
    "SlotStore",
    "IndexListError",
    "InvalidHandleError",
    "EmptyListError",
    "CapacityExceededError",
]
