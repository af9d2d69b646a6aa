"""Storage seam of the properties codecs.

The codecs never keep entries themselves. Every lookup, insertion and
enumeration they do while parsing or writing goes through a PropertiesStorage,
which makes it possible to point them at any backing map.
"""

from typing import Iterable, Protocol, runtime_checkable
from .ordered_map import OrderedMap


@runtime_checkable
class PropertiesStorage(Protocol):
    """Operations a codec performs on the entries it reads or writes."""

    def get(self, key: str) -> str | None:
        """Value of key or None if absent."""
        ...

    def put(self, key: str, value: str) -> str | None:
        """Set key to value and return the previous value (None if absent)."""
        ...

    def keys(self) -> Iterable[str]:
        """All keys, in the order they are to be written."""
        ...

    def __contains__(self, key: object) -> bool: ...


class DictStorage:
    """Storage owned by a codec that is used on its own."""

    def __init__(self) -> None:
        self.entries: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.entries.get(key)

    def put(self, key: str, value: str) -> str | None:
        previous = self.entries.get(key)
        self.entries[key] = value
        return previous

    def keys(self) -> list[str]:
        return list(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries


class RedirectedStorage:
    """Storage that forwards every codec access to an OrderedMap.

    Holds nothing but the map reference, so one instance per load or store
    call is enough and instances never need to be shared.
    """

    __slots__ = ("_target",)

    def __init__(self, target: OrderedMap) -> None:
        """
        Args:
            target (OrderedMap): The map that receives all reads and writes.
        """
        self._target = target

    def get(self, key: str) -> str | None:
        return self._target.get(key)

    def put(self, key: str, value: str) -> str | None:
        return self._target.set(key, value)

    def keys(self) -> list[str]:
        return self._target.keys()

    def __contains__(self, key: object) -> bool:
        return key in self._target
