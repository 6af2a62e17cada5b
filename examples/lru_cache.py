"""LRU cache built on IndexList handles."""

from typing import Generic, Hashable, TypeVar

from indexlist import Handle, IndexList

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """
    Fixed-size cache evicting the least recently used key.

    Recency order lives in an IndexList; a dict maps each key to the handle of
    its node so a hit can be moved to the front in O(1).
    """

    def __init__(self, maxsize: int) -> None:
        self._maxsize = maxsize
        self._order = IndexList[tuple[K, V]](max_slots=maxsize)
        self._handles: dict[K, Handle[tuple[K, V]]] = {}

    def get(self, key: K) -> V | None:
        handle = self._handles.get(key)
        if handle is None:
            return None
        _, value = self._order.remove(handle)
        self._handles[key] = self._order.push_front((key, value))
        return value

    def put(self, key: K, value: V) -> None:
        handle = self._handles.pop(key, None)
        if handle is not None:
            self._order.remove(handle)
        elif len(self._order) >= self._maxsize:
            evicted, _ = self._order.pop_back()
            del self._handles[evicted]
            print(f"  evicted {evicted!r}")
        self._handles[key] = self._order.push_front((key, value))

    def keys(self) -> list[K]:
        """Return keys from most to least recently used."""
        return [key for key, _ in self._order]


def main() -> None:
    cache = LRUCache[str, int](maxsize=3)

    print("=== LRU Cache Example ===\n")
    for key, value in [("a", 1), ("b", 2), ("c", 3)]:
        cache.put(key, value)
    print(f"Keys: {cache.keys()}")

    print(f"get('a') -> {cache.get('a')}")
    print(f"Keys: {cache.keys()}")

    print("put('d', 4)")
    cache.put("d", 4)
    print(f"Keys: {cache.keys()}")
    print(f"get('b') -> {cache.get('b')}")


if __name__ == "__main__":
    main()
