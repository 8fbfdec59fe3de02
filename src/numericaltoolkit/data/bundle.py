from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, Iterable, Iterator, Optional, TypeVar

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

T = TypeVar("T")


class DataBundle(Generic[T]):
    """
    Flat, ordered data set with an optional admission condition.

    `add` honours the condition, `write` stores unconditionally.
    """

    def __init__(self, condition: Optional[Callable[[T], bool]] = None) -> None:
        self._collection: list[T] = []
        self.condition = condition

    @classmethod
    def of(cls, data: Iterable[T], condition: Optional[Callable[[T], bool]] = None) -> DataBundle[T]:
        """Create a bundle and `add` every item of `data`."""
        bundle = cls(condition=condition)
        bundle.extend(data)
        return bundle

    def write(self, data: T) -> None:
        """Store an item regardless of the condition."""
        self._collection.append(data)

    def add(self, data: T) -> bool:
        """
        Store an item if it satisfies the condition.

        Returns:
            True if the item was stored.
        """
        if self.condition is not None and not self.condition(data):
            return False
        self._collection.append(data)
        return True

    def extend(self, data: Iterable[T]) -> int:
        """`add` every item; return how many were stored."""
        return sum(1 for item in data if self.add(item))

    @property
    def values(self) -> list[T]:
        return list(self._collection)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.asarray(self._collection, dtype=np.float64)

    def __len__(self) -> int:
        return len(self._collection)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._collection))

    def __repr__(self) -> str:
        return f"DataBundle({self._collection!r})"
