"""String to string mapping with a well-defined iteration order."""

from collections.abc import MutableMapping
from functools import cmp_to_key
from typing import Any, Callable, Iterator
from sortedcontainers import SortedDict
from .utils import OrderedKeySet

type Comparator = Callable[[str, str], int]
"""Two-argument ordering: negative if the first key sorts before the second,
zero if equal, positive otherwise."""
type SortKey = Callable[[str], Any]
"""One-argument ordering as used by sorted()."""


def _check_str(name: str, value: object) -> None:
    if not isinstance(value, str):
        raise TypeError(f"Property {name} must be str, not {type(value).__name__}.")


class OrderedMap(MutableMapping[str, str]):
    """Mapping from string keys to string values that iterates in either
    insertion order or the order of a comparator (or sort key).

    In insertion order, the position of a key is decided when it is first set.
    Setting it again only updates its value. In comparator order, the position
    is derived from the key alone.
    """

    def __init__(
        self,
        comparator: Comparator | None = None,
        *,
        key: SortKey | None = None,
    ) -> None:
        """
        Args:
            comparator (Comparator | None, optional): Ordering of the keys as a
                two-argument comparison function. Defaults to None.
            key (SortKey | None, optional): Ordering of the keys as a sort key
                function. Ignored if comparator is given. Defaults to None.

        If neither comparator nor key is given, keys iterate in insertion order.
        """
        self._comparator = comparator
        self._key = key
        self._data: dict[str, str] | SortedDict
        if comparator is not None:
            self._data = SortedDict(cmp_to_key(comparator))
        elif key is not None:
            self._data = SortedDict(key)
        else:
            self._data = {}

    @property
    def comparator(self) -> Comparator | None:
        return self._comparator

    @property
    def sort_key(self) -> SortKey | None:
        return self._key

    @property
    def is_sorted(self) -> bool:
        """Whether the map iterates in comparator (or sort key) order."""
        return isinstance(self._data, SortedDict)

    # ----------
    # point access
    # ----------

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._data.get(key, default)

    def get_or_default(self, key: str, default: str) -> str:
        """Get the value of key or default if key is absent."""
        return self._data.get(key, default)

    def set(self, key: str, value: str) -> str | None:
        """Set key to value.

        Args:
            key (str): The key.
            value (str): The new value.

        Returns:
            str | None: The previous value of key or None if key was absent.
        """
        _check_str("key", key)
        _check_str("value", value)
        previous = self._data.get(key)
        self._data[key] = value
        return previous

    def remove(self, key: str) -> str | None:
        """Remove key and return its value (None if key was absent)."""
        return self._data.pop(key, None)

    def contains(self, key: str) -> bool:
        return key in self._data

    def is_empty(self) -> bool:
        return not self._data

    def clear(self) -> None:
        self._data.clear()

    # ----------
    # snapshots
    # ----------

    def keys(self) -> list[str]:  # type: ignore[override]
        """Ordered list of the keys. Later changes to the map don't affect it."""
        return list(self._data)

    def keys_as_set(self) -> OrderedKeySet[str]:
        """Ordered set of the keys. Later changes to the map don't affect it."""
        return OrderedKeySet(self._data)

    def items(self) -> list[tuple[str, str]]:  # type: ignore[override]
        """Ordered list of (key, value) pairs."""
        return list(self._data.items())

    def values(self) -> list[str]:  # type: ignore[override]
        return list(self._data.values())

    def copy(self) -> "OrderedMap":
        """Copy with the same ordering and the same entries."""
        new = self.empty_like()
        new._data.update(self._data)
        return new

    def empty_like(self) -> "OrderedMap":
        """New empty map with the same ordering."""
        return OrderedMap(self._comparator, key=self._key)

    # ----------
    # MutableMapping protocol
    # ----------

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedMap):
            return dict(self._data) == dict(other._data)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return "{" + ", ".join(f"{k}={v}" for k, v in self._data.items()) + "}"
