from collections.abc import Set
from typing import Callable, Iterable, Iterator, overload
from itertools import islice


def copy_doc[
    **P, T
](doc_source: Callable[..., T], annotations: bool = False) -> Callable[
    [Callable[P, T]], Callable[P, T]
]:
    """Decorator to copy the docstring of doc_source to another.
    Inspired by Trevor (stackoverflow.com/users/13905088/trevor)
    from: stackoverflow.com/questions/68901049/
        copying-the-docstring-of-function-onto-another-function-by-name

    Args:
        doc_source (Callable): The source function to copy the docstring from.
        annotations (bool, optional): Whether to also copy annotations. Defaults to False.

    Returns:
        Callable: The decorated function.

    """

    def wrapped(doc_target: Callable[P, T]) -> Callable[P, T]:
        doc_target.__doc__ = doc_source.__doc__
        if annotations:
            doc_target.__annotations__ = doc_source.__annotations__
        return doc_target

    return wrapped


### Ordered key set with iLoc functionality


class OrderedKeySet[_KT](Set[_KT]):
    """Immutable set that keeps the order its members were given in.

    Comparisons with other sets ignore the order, like for any set.
    """

    def __init__(self, keys: Iterable[_KT] = ()) -> None:
        self._keys: dict[_KT, None] = dict.fromkeys(keys)
        self.iloc: _iLocIndexer[_KT] = _iLocIndexer(self)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __iter__(self) -> Iterator[_KT]:
        return iter(self._keys)

    def __reversed__(self) -> Iterator[_KT]:
        return reversed(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __hash__(self) -> int:
        return self._hash()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self._keys)!r})"

    @classmethod
    def _from_iterable(cls, it: Iterable[_KT]) -> "OrderedKeySet[_KT]":
        return cls(it)


class _iLocIndexer[_KT]:

    def __init__(self, target: OrderedKeySet[_KT]) -> None:
        self.target = target

    @overload
    def __getitem__(self, key: int) -> _KT: ...

    @overload
    def __getitem__(self, key: slice) -> list[_KT]: ...

    def __getitem__(self, key: int | slice) -> list[_KT] | _KT:

        set_len = len(self.target)

        # convert negative indices to positive indices
        if isinstance(key, int):
            index = set_len + key if key < 0 else key
            if not 0 <= index < set_len:
                raise IndexError("OrderedKeySet index out of range")
            return next(islice(self.target, index, None))
        elif isinstance(key, slice):
            return list(self.target)[key]
        raise TypeError("key must be of type int or slice.")
