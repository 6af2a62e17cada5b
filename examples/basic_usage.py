"""Basic usage example for indexlist."""

from indexlist import IndexList, InvalidHandleError


def main() -> None:
    """Demonstrate handles, insertion and stale-handle detection."""
    lst = IndexList[str]()

    print("=== Basic IndexList Example ===\n")

    # Pushing returns a handle to the new node
    print("Pushing values...")
    apple = lst.push_back("apple")
    cherry = lst.push_back("cherry")
    lst.push_front("start")
    print(f"  List: {list(lst)}")

    # Handles anchor O(1) inserts in the middle of the list
    banana = lst.insert_before(cherry, "banana")
    lst.insert_after(cherry, "date")
    print(f"  After inserts: {list(lst)}")
    print(f"  Backwards: {list(reversed(lst))}\n")

    # Values can be read and replaced through their handles
    lst[banana] = "blueberry"
    print(f"Value at {banana!r}: {lst[banana]}\n")

    # Removing a node frees its slot for reuse
    print(f"Removing {apple!r} -> {lst.remove(apple)!r}")
    fig = lst.push_back("fig")
    print(f"  New node {fig!r} reused slot {fig.position}")
    print(f"  Slots in store: {lst.slot_count}, values in list: {len(lst)}\n")

    # The old handle no longer resolves, even though its slot is in use again
    try:
        lst.get(apple)
    except InvalidHandleError as exc:
        print(f"Stale handle rejected: {exc}\n")

    print(f"Front: {lst.peek_front()}, back: {lst.peek_back()}")
    print(f"Final list: {lst!r}")


if __name__ == "__main__":
    main()
