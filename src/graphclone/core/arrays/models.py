"""Fixed-shape arrays with arbitrary rank and per-dimension lower bounds.

Python lists are always rank 1 and zero-based. `Array` covers the remaining
shapes: any number of dimensions, each with its own length and lower bound.

Usage:
    grid = Array((2, 3), lower_bounds=(1, -1), fill=0)
    grid[1, -1] = 5
    grid.get_upper_bound(1)  # 1

    for index in grid.indices():
        ...
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from itertools import product
from typing import Any


def init_storage(
    array: Array,
    lengths: Sequence[int],
    lower_bounds: Sequence[int] | None = None,
    fill: Any = None,
) -> None:
    """Give an allocated array its shape and fill every element.

    Used by `Array.__init__` and by the cloner, which allocates arrays without
    running their constructor.

    Args:
        array: Array instance to initialize (may be freshly allocated).
        lengths: Length of each dimension.
        lower_bounds: Lower bound of each dimension (default all zero).
        fill: Initial value of every element.

    Raises:
        ValueError: If the shape is empty, a length is negative, or the lower
            bounds do not match the rank.
    """
    lengths = tuple(int(n) for n in lengths)
    if not lengths:
        raise ValueError("Array rank must be at least 1")
    if any(n < 0 for n in lengths):
        raise ValueError(f"Array lengths must be non-negative, got {lengths}")
    if lower_bounds is None:
        bounds = (0,) * len(lengths)
    else:
        bounds = tuple(int(b) for b in lower_bounds)
    if len(bounds) != len(lengths):
        raise ValueError(f"Expected {len(lengths)} lower bounds, got {len(bounds)}")

    size = 1
    for n in lengths:
        size *= n

    array._lengths = lengths
    array._lower_bounds = bounds
    array._items = [fill] * size


class Array:
    """Multi-dimensional array with per-dimension lower bounds.

    Elements are stored row-major. Arrays compare by identity with `==`;
    use `deep_equal` for structural comparison.

    Args:
        lengths: Length of each dimension, or a single int for rank 1.
        lower_bounds: Lower bound of each dimension (default all zero).
        fill: Initial value of every element.
    """

    __slots__ = ("_lengths", "_lower_bounds", "_items")

    _lengths: tuple[int, ...]
    _lower_bounds: tuple[int, ...]
    _items: list[Any]

    def __init__(
        self,
        lengths: int | Sequence[int],
        lower_bounds: int | Sequence[int] | None = None,
        fill: Any = None,
    ) -> None:
        if isinstance(lengths, int):
            lengths = (lengths,)
        if isinstance(lower_bounds, int):
            lower_bounds = (lower_bounds,)
        init_storage(self, lengths, lower_bounds, fill)

    @classmethod
    def from_sequence(cls, items: Iterable[Any], lower_bound: int = 0) -> Array:
        """Build a rank-1 array from a sequence.

        Args:
            items: Elements in index order.
            lower_bound: Index of the first element.

        Returns:
            New array holding the items.
        """
        values = list(items)
        array = cls(len(values), lower_bound)
        array._items[:] = values
        return array

    @property
    def rank(self) -> int:
        """Number of dimensions."""
        return len(self._lengths)

    @property
    def lengths(self) -> tuple[int, ...]:
        return self._lengths

    @property
    def lower_bounds(self) -> tuple[int, ...]:
        return self._lower_bounds

    def get_length(self, dim: int) -> int:
        return self._lengths[dim]

    def get_lower_bound(self, dim: int) -> int:
        return self._lower_bounds[dim]

    def get_upper_bound(self, dim: int) -> int:
        """Highest valid index of a dimension (lower bound - 1 when empty)."""
        return self._lower_bounds[dim] + self._lengths[dim] - 1

    def indices(self) -> Iterator[tuple[int, ...]]:
        """Iterate every multi-index in row-major order.

        Yields:
            Index tuples, one per element.
        """
        ranges = [
            range(lb, lb + n) for lb, n in zip(self._lower_bounds, self._lengths, strict=True)
        ]
        return product(*ranges)

    def _offset(self, index: int | tuple[int, ...]) -> int:
        if not isinstance(index, tuple):
            index = (index,)
        if len(index) != len(self._lengths):
            raise IndexError(f"Expected {len(self._lengths)} indices, got {len(index)}")
        offset = 0
        for dim, (i, lb, n) in enumerate(
            zip(index, self._lower_bounds, self._lengths, strict=True)
        ):
            if not lb <= i < lb + n:
                raise IndexError(
                    f"Index {i} out of range [{lb}, {lb + n - 1}] for dimension {dim}"
                )
            offset = offset * n + (i - lb)
        return offset

    def __getitem__(self, index: int | tuple[int, ...]) -> Any:
        return self._items[self._offset(index)]

    def __setitem__(self, index: int | tuple[int, ...], value: Any) -> None:
        self._items[self._offset(index)] = value

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __repr__(self) -> str:
        shape = ", ".join(
            f"{lb}..{lb + n - 1}" for lb, n in zip(self._lower_bounds, self._lengths, strict=True)
        )
        return f"{type(self).__name__}[{shape}]({self._items!r})"
