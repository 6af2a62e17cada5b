"""Append-only slot storage with generation-checked handles."""

import logging
from typing import Generic, Iterator, TypeAlias

from indexlist.errors import CapacityExceededError, InvalidHandleError
from indexlist.handle import Handle
from indexlist.types import Generation, Position, T

logger = logging.getLogger(__name__)


class Occupied(Generic[T]):
    """A slot holding a live value and the positions of its list neighbours."""

    __slots__ = ("value", "generation", "prev", "next")

    def __init__(
        self,
        value: T,
        generation: Generation,
        prev: Position | None = None,
        next: Position | None = None,
    ) -> None:
        self.value = value
        self.generation = generation
        self.prev = prev
        self.next = next


class Free:
    """A recyclable slot, linked into the store's free chain."""

    __slots__ = ("next_free", "generation")

    def __init__(self, next_free: Position | None, generation: Generation) -> None:
        self.next_free = next_free
        self.generation = generation


class Retired:
    """A slot whose generation is exhausted. It is never reoccupied."""

    __slots__ = ("generation",)

    def __init__(self, generation: Generation) -> None:
        self.generation = generation


Slot: TypeAlias = "Occupied[T] | Free | Retired"


def _check_limit(name: str, value: int | None, minimum: int) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ValueError(f"{name} must be an integer >= {minimum} or None, got {value!r}")
    return value


class SlotStore(Generic[T]):
    """
    Backing store for IndexList nodes.

    Slots are kept in a single Python list that only grows. A released slot is
    pushed onto a singly-linked free chain threaded through the Free slots
    themselves and is handed out again by the next allocation. Each slot keeps
    its own generation, bumped on release, so handles issued before a release
    no longer resolve afterwards.
    """

    def __init__(
        self,
        *,
        max_slots: int | None = None,
        max_generation: int | None = None,
    ) -> None:
        """
        Initialize an empty store.

        Args:
            max_slots: Upper bound on the number of slots. Growing past it
                raises CapacityExceededError. None means unbounded.
            max_generation: Highest generation a slot may reach. A slot released
                at this generation is retired instead of recycled. None means
                unbounded.

        Raises:
            ValueError: If a limit is not an integer or is out of range
        """
        self._max_slots = _check_limit("max_slots", max_slots, 1)
        self._max_generation = _check_limit("max_generation", max_generation, 0)
        self._slots: list[Slot] = []
        self._free_head: Position | None = None
        self._free_count = 0
        self._retired_count = 0

    @property
    def max_slots(self) -> int | None:
        return self._max_slots

    @property
    def max_generation(self) -> int | None:
        return self._max_generation

    @property
    def free_head(self) -> Position | None:
        """Position at the front of the free chain, or None if it is empty."""
        return self._free_head

    @property
    def free_count(self) -> int:
        return self._free_count

    @property
    def retired_count(self) -> int:
        return self._retired_count

    def __len__(self) -> int:
        """Return the number of slots in the store, whatever their state."""
        return len(self._slots)

    def slot(self, position: Position) -> Slot:
        """Return the raw slot at position. Intended for inspection only."""
        return self._slots[position]

    def allocate(
        self,
        value: T,
        *,
        prev: Position | None = None,
        next: Position | None = None,
    ) -> Handle[T]:
        """
        Store value in a recycled or new slot and return its handle. O(1).

        A recycled slot keeps the generation it was given on release; a new
        slot starts at generation 0.

        Raises:
            CapacityExceededError: If no free slot exists and the store is at max_slots
        """
        position = self._free_head
        if position is not None:
            slot = self._slots[position]
            if not isinstance(slot, Free):
                raise RuntimeError(f"Corrupted list: free chain reaches non-free slot {position}")
            self._free_head = slot.next_free
            self._free_count -= 1
            generation = slot.generation
            self._slots[position] = Occupied(value, generation, prev, next)
            return Handle(position, generation)

        position = len(self._slots)
        if self._max_slots is not None and position >= self._max_slots:
            raise CapacityExceededError(
                f"Backing store is full: {self._max_slots} slots in use or retired"
            )
        self._slots.append(Occupied(value, 0, prev, next))
        if position & (position + 1) == 0:
            logger.debug("Slot store grew to %d slots", position + 1)
        return Handle(position, 0)

    def release(self, position: Position) -> T:
        """
        Free the occupied slot at position and return its value. O(1).

        The slot's generation is incremented and the slot becomes the new front
        of the free chain. If the generation cannot be incremented without
        passing max_generation the slot is retired instead.
        """
        slot = self.occupied(position)
        if self._max_generation is not None and slot.generation >= self._max_generation:
            self._slots[position] = Retired(slot.generation)
            self._retired_count += 1
            logger.warning(
                "Retiring slot %d: generation %d reached max_generation",
                position,
                slot.generation,
            )
        else:
            self._slots[position] = Free(self._free_head, slot.generation + 1)
            self._free_head = position
            self._free_count += 1
        return slot.value

    def resolve(self, handle: Handle[T]) -> Occupied[T]:
        """
        Return the occupied slot a handle refers to.

        Raises:
            InvalidHandleError: If the handle is out of range, points at a free
                or retired slot, or carries a stale generation
        """
        if not isinstance(handle, Handle):
            raise TypeError(f"Expected a Handle, got {type(handle).__name__}")
        position = handle.position
        if not 0 <= position < len(self._slots):
            raise InvalidHandleError(f"{handle!r} is out of range")
        slot = self._slots[position]
        if not isinstance(slot, Occupied):
            raise InvalidHandleError(f"{handle!r} refers to a free slot")
        if slot.generation != handle.generation:
            raise InvalidHandleError(
                f"{handle!r} is stale: slot is at generation {slot.generation}"
            )
        return slot

    def is_valid(self, handle: Handle[T]) -> bool:
        """Return True if handle currently resolves to a live value."""
        try:
            self.resolve(handle)
        except InvalidHandleError:
            return False
        return True

    def occupied(self, position: Position) -> Occupied[T]:
        """Return the slot at a position reached through an internal link."""
        slot = self._slots[position]
        if not isinstance(slot, Occupied):
            raise RuntimeError(f"Corrupted list: link reaches non-occupied slot {position}")
        return slot

    def handle_at(self, position: Position) -> Handle[T]:
        """Build the current handle for an occupied position."""
        return Handle(position, self.occupied(position).generation)

    def free_positions(self) -> Iterator[Position]:
        """Walk the free chain from its head, yielding each free position."""
        position = self._free_head
        steps = 0
        while position is not None:
            slot = self._slots[position]
            if not isinstance(slot, Free):
                raise RuntimeError(f"Corrupted list: free chain reaches non-free slot {position}")
            steps += 1
            if steps > len(self._slots):
                raise RuntimeError("Corrupted list: free chain contains a cycle")
            yield position
            position = slot.next_free
