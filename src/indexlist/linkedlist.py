"""Doubly-linked list stored in a single growing slot store."""

from typing import Generic, Iterable, Iterator

from indexlist.errors import EmptyListError
from indexlist.handle import Handle
from indexlist.store import Free, Occupied, Retired, SlotStore
from indexlist.types import Position, T


class IndexList(Generic[T]):
    """
    Doubly-linked list whose nodes live in a shared, only-growing slot store.

    Insertions return a Handle that stays valid until that node is removed.
    Insert, remove and endpoint operations are O(1). Removing a node recycles
    its slot, and handles to the removed node are rejected with
    InvalidHandleError from then on, even after the slot is reused.

    The list is meant for a single owner: it does no locking, and mutating it
    while a traversal is in progress is unsupported.
    """

    def __init__(
        self,
        iterable: Iterable[T] | None = None,
        *,
        max_slots: int | None = None,
        max_generation: int | None = None,
    ) -> None:
        """
        Initialize the list.

        Args:
            iterable: Optional values to push to the back, in order.
            max_slots: Upper bound on the backing store length. Allocating past
                it raises CapacityExceededError. None means unbounded.
            max_generation: Highest generation a slot may carry. A slot removed
                at this generation is retired rather than reused. None means
                unbounded.
        """
        self._store: SlotStore[T] = SlotStore(
            max_slots=max_slots, max_generation=max_generation
        )
        self._head: Position | None = None
        self._tail: Position | None = None
        self._length = 0
        if iterable is not None:
            for value in iterable:
                self.push_back(value)

    def push_back(self, value: T) -> Handle[T]:
        """Append value to the end of the list. O(1)."""
        handle = self._store.allocate(value, prev=self._tail)
        if self._tail is None:
            self._head = handle.position
        else:
            self._store.occupied(self._tail).next = handle.position
        self._tail = handle.position
        self._length += 1
        return handle

    def push_front(self, value: T) -> Handle[T]:
        """Prepend value to the beginning of the list. O(1)."""
        handle = self._store.allocate(value, next=self._head)
        if self._head is None:
            self._tail = handle.position
        else:
            self._store.occupied(self._head).prev = handle.position
        self._head = handle.position
        self._length += 1
        return handle

    def insert_before(self, handle: Handle[T], value: T) -> Handle[T]:
        """
        Insert value immediately before the node handle refers to. O(1).

        Raises:
            InvalidHandleError: If handle does not refer to a live node
        """
        anchor = self._store.resolve(handle)
        prev = anchor.prev
        new = self._store.allocate(value, prev=prev, next=handle.position)
        anchor.prev = new.position
        if prev is None:
            self._head = new.position
        else:
            self._store.occupied(prev).next = new.position
        self._length += 1
        return new

    def insert_after(self, handle: Handle[T], value: T) -> Handle[T]:
        """
        Insert value immediately after the node handle refers to. O(1).

        Raises:
            InvalidHandleError: If handle does not refer to a live node
        """
        anchor = self._store.resolve(handle)
        following = anchor.next
        new = self._store.allocate(value, prev=handle.position, next=following)
        anchor.next = new.position
        if following is None:
            self._tail = new.position
        else:
            self._store.occupied(following).prev = new.position
        self._length += 1
        return new

    def remove(self, handle: Handle[T]) -> T:
        """
        Remove the node handle refers to and return its value. O(1).

        Raises:
            InvalidHandleError: If handle does not refer to a live node, including
                when the node was already removed
        """
        node = self._store.resolve(handle)
        self._unlink(node)
        self._length -= 1
        return self._store.release(handle.position)

    def _unlink(self, node: Occupied[T]) -> None:
        if node.prev is None:
            self._head = node.next
        else:
            self._store.occupied(node.prev).next = node.next
        if node.next is None:
            self._tail = node.prev
        else:
            self._store.occupied(node.next).prev = node.prev

    def pop_front(self) -> T:
        """
        Remove and return the first value. O(1).

        Raises:
            EmptyListError: If the list is empty
        """
        if self._head is None:
            raise EmptyListError("pop_front from an empty list")
        return self.remove(self._store.handle_at(self._head))

    def pop_back(self) -> T:
        """
        Remove and return the last value. O(1).

        Raises:
            EmptyListError: If the list is empty
        """
        if self._tail is None:
            raise EmptyListError("pop_back from an empty list")
        return self.remove(self._store.handle_at(self._tail))

    def get(self, handle: Handle[T]) -> T:
        """
        Return the value handle refers to.

        Raises:
            InvalidHandleError: If handle does not refer to a live node
        """
        return self._store.resolve(handle).value

    def set(self, handle: Handle[T], value: T) -> None:
        """
        Replace the value handle refers to, keeping its position and handle.

        Raises:
            InvalidHandleError: If handle does not refer to a live node
        """
        self._store.resolve(handle).value = value

    def __getitem__(self, handle: Handle[T]) -> T:
        return self.get(handle)

    def __setitem__(self, handle: Handle[T], value: T) -> None:
        self.set(handle, value)

    def is_valid(self, handle: Handle[T]) -> bool:
        """Return True if handle refers to a node that is still in the list."""
        return self._store.is_valid(handle)

    def peek_front(self) -> T:
        """
        Return the first value without removing it. O(1).

        Raises:
            EmptyListError: If the list is empty
        """
        if self._head is None:
            raise EmptyListError("peek_front on an empty list")
        return self._store.occupied(self._head).value

    def peek_back(self) -> T:
        """
        Return the last value without removing it. O(1).

        Raises:
            EmptyListError: If the list is empty
        """
        if self._tail is None:
            raise EmptyListError("peek_back on an empty list")
        return self._store.occupied(self._tail).value

    def head_handle(self) -> Handle[T] | None:
        """Return the handle of the first node, or None if the list is empty."""
        if self._head is None:
            return None
        return self._store.handle_at(self._head)

    def tail_handle(self) -> Handle[T] | None:
        """Return the handle of the last node, or None if the list is empty."""
        if self._tail is None:
            return None
        return self._store.handle_at(self._tail)

    def next_handle(self, handle: Handle[T]) -> Handle[T] | None:
        """
        Return the handle of the node after handle, or None at the tail.

        Raises:
            InvalidHandleError: If handle does not refer to a live node
        """
        node = self._store.resolve(handle)
        if node.next is None:
            return None
        return self._store.handle_at(node.next)

    def prev_handle(self, handle: Handle[T]) -> Handle[T] | None:
        """
        Return the handle of the node before handle, or None at the head.

        Raises:
            InvalidHandleError: If handle does not refer to a live node
        """
        node = self._store.resolve(handle)
        if node.prev is None:
            return None
        return self._store.handle_at(node.prev)

    def index_of(self, value: T) -> Handle[T] | None:
        """Return the handle of the first node equal to value, or None. O(n)."""
        for position, node in self._walk(reverse=False):
            if node.value == value:
                return Handle(position, node.generation)
        return None

    def _walk(self, *, reverse: bool) -> Iterator[tuple[Position, Occupied[T]]]:
        position = self._tail if reverse else self._head
        while position is not None:
            node = self._store.occupied(position)
            yield position, node
            position = node.prev if reverse else node.next

    def handles(self, *, reverse: bool = False) -> Iterator[Handle[T]]:
        """Lazily yield the handle of every node, head to tail unless reverse."""
        for position, node in self._walk(reverse=reverse):
            yield Handle(position, node.generation)

    def __iter__(self) -> Iterator[T]:
        """Lazily yield values from head to tail."""
        for _, node in self._walk(reverse=False):
            yield node.value

    def __reversed__(self) -> Iterator[T]:
        """Lazily yield values from tail to head."""
        for _, node in self._walk(reverse=True):
            yield node.value

    def __contains__(self, value: object) -> bool:
        """Return True if some node's value equals value. O(n)."""
        return any(item == value for item in self)

    def __len__(self) -> int:
        """Return the number of values in the list."""
        return self._length

    def __bool__(self) -> bool:
        """Return True if the list is non-empty."""
        return self._length > 0

    def is_empty(self) -> bool:
        return self._length == 0

    @property
    def slot_count(self) -> int:
        """Number of slots in the backing store. Never decreases."""
        return len(self._store)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexList):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"

    def check_integrity(self) -> None:
        """
        Verify the internal bookkeeping of the list and its slot store.

        Checks that forward and backward links agree, that the chain length
        matches len(), and that every slot is either on the occupied chain, on
        the free chain, or retired, exactly once.

        Raises:
            RuntimeError: If any invariant is broken
        """
        store = self._store
        if (self._head is None) != (self._tail is None) or (
            (self._head is None) != (self._length == 0)
        ):
            raise RuntimeError(
                f"Corrupted list: head={self._head} tail={self._tail} length={self._length}"
            )

        forward: list[Position] = []
        prev: Position | None = None
        for position, node in self._walk(reverse=False):
            if node.prev != prev:
                raise RuntimeError(
                    f"Corrupted list: slot {position} has prev {node.prev}, expected {prev}"
                )
            forward.append(position)
            if len(forward) > self._length:
                raise RuntimeError("Corrupted list: forward chain is longer than length")
            prev = position
        if len(forward) != self._length or prev != self._tail:
            raise RuntimeError("Corrupted list: forward chain does not end at tail")

        backward = [position for position, _ in self._walk(reverse=True)]
        if backward != forward[::-1]:
            raise RuntimeError("Corrupted list: backward chain disagrees with forward chain")

        free = list(store.free_positions())
        if len(free) != store.free_count:
            raise RuntimeError("Corrupted list: free chain length disagrees with free count")

        occupied = set(forward)
        free_set = set(free)
        if len(free_set) != len(free) or occupied & free_set:
            raise RuntimeError("Corrupted list: slot appears twice across chains")

        retired = 0
        for position in range(len(store)):
            slot = store.slot(position)
            if isinstance(slot, Occupied):
                expected = position in occupied
            elif isinstance(slot, Free):
                expected = position in free_set
            elif isinstance(slot, Retired):
                retired += 1
                expected = position not in occupied and position not in free_set
            else:
                expected = False
            if not expected:
                raise RuntimeError(f"Corrupted list: slot {position} is unaccounted for")
        if retired != store.retired_count:
            raise RuntimeError("Corrupted list: retired slot count disagrees")
