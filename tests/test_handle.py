"""Tests for the Handle value type."""

import pytest

from indexlist import Handle


def test_handle_fields() -> None:
    """Test that a handle exposes its position and generation."""
    handle = Handle(3, 7)
    assert handle.position == 3
    assert handle.generation == 7


def test_handle_equality() -> None:
    """Test that handles are equal only when both fields match."""
    assert Handle(0, 0) == Handle(0, 0)
    assert Handle(0, 0) != Handle(0, 1)
    assert Handle(0, 1) != Handle(1, 1)


def test_handle_hashable() -> None:
    """Test that equal handles hash the same and can key a dict."""
    lookup = {Handle(2, 1): "a"}
    assert lookup[Handle(2, 1)] == "a"
    assert Handle(2, 0) not in lookup


def test_handle_immutability() -> None:
    """Test that handles are immutable."""
    handle = Handle(0, 0)
    with pytest.raises(AttributeError):  # FrozenInstanceError
        handle.generation = 1  # type: ignore[misc]


def test_handle_repr() -> None:
    """Test the compact handle representation."""
    assert repr(Handle(4, 2)) == "Handle(4@2)"
