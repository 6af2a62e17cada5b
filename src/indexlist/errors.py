"""Exception classes for indexlist."""


class IndexListError(Exception):
    """Base exception for all indexlist errors."""


class InvalidHandleError(IndexListError):
    """Raised when a handle is stale, out of range, or refers to a free slot."""


class EmptyListError(IndexListError):
    """Raised when an endpoint is queried or popped on an empty list."""


class CapacityExceededError(IndexListError):
    """Raised when the backing store would grow past its configured max_slots."""
