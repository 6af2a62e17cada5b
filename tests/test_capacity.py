"""Tests for capacity limits and generation exhaustion."""

import logging

import pytest

from indexlist import CapacityExceededError, Handle, IndexList, InvalidHandleError


def test_max_slots_rejects_growth() -> None:
    """Test that pushing past max_slots fails and leaves the list unchanged."""
    lst = IndexList[int](max_slots=2)
    lst.push_back(1)
    lst.push_back(2)

    with pytest.raises(CapacityExceededError):
        lst.push_back(3)
    with pytest.raises(CapacityExceededError):
        lst.push_front(0)

    assert list(lst) == [1, 2]
    assert len(lst) == 2
    lst.check_integrity()


def test_max_slots_insert_leaves_anchor_untouched() -> None:
    """Test that a failed insert does not relink its anchor."""
    lst = IndexList[int]([1, 2], max_slots=2)
    head = lst.head_handle()
    assert head is not None

    with pytest.raises(CapacityExceededError):
        lst.insert_after(head, 5)
    with pytest.raises(CapacityExceededError):
        lst.insert_before(head, 5)

    assert list(lst) == [1, 2]
    lst.check_integrity()


def test_max_slots_allows_reuse() -> None:
    """Test that freed slots can still be reused at capacity."""
    lst = IndexList[int](max_slots=1)
    handle = lst.push_back(1)
    lst.remove(handle)
    assert lst.push_back(2) == Handle(0, 1)


def test_generation_exhaustion_retires_slot(caplog: pytest.LogCaptureFixture) -> None:
    """Test that a slot at max_generation is retired instead of wrapping around."""
    lst = IndexList[str](max_generation=1)
    first = lst.push_back("a")
    lst.remove(first)
    second = lst.push_back("b")
    assert second == Handle(0, 1)

    with caplog.at_level(logging.WARNING, logger="indexlist.store"):
        lst.remove(second)
    assert "Retiring slot 0" in caplog.text

    third = lst.push_back("c")
    assert third == Handle(1, 0)
    assert lst.slot_count == 2
    for stale in (first, second):
        with pytest.raises(InvalidHandleError):
            lst.get(stale)
    lst.check_integrity()


def test_retired_slots_count_against_max_slots() -> None:
    """Test that a retired slot is never handed out again."""
    lst = IndexList[int](max_slots=1, max_generation=0)
    handle = lst.push_back(1)
    lst.remove(handle)

    with pytest.raises(CapacityExceededError):
        lst.push_back(2)
    assert lst.is_empty()
    lst.check_integrity()


def test_growth_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Test that store growth is logged at each power of two."""
    lst = IndexList[int]()
    with caplog.at_level(logging.DEBUG, logger="indexlist.store"):
        for i in range(5):
            lst.push_back(i)
    messages = [r.getMessage() for r in caplog.records if r.name == "indexlist.store"]
    assert messages == [
        "Slot store grew to 1 slots",
        "Slot store grew to 2 slots",
        "Slot store grew to 4 slots",
    ]


@pytest.mark.parametrize(
    "kwargs",
    [{"max_slots": 0}, {"max_generation": -1}, {"max_slots": 2.0}],
)
def test_invalid_configuration(kwargs: dict[str, object]) -> None:
    """Test that invalid limits are rejected when the list is created."""
    with pytest.raises(ValueError):
        IndexList(**kwargs)  # type: ignore[arg-type]
