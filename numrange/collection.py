import heapq
import logging
from collections.abc import Iterable, Iterator
from typing import Any, overload

from typing_extensions import override

from numrange.parsing import parse_range_collection
from numrange.range import Range, ValueFn
from numrange.util import DEFAULT_DELIMITER

logger = logging.getLogger(__name__)


def _sweep(ordered: Iterable[Range]) -> list[Range]:
    """Coalesce ranges sorted by ``(start, end)`` into non-overlapping ones.

    A running range grows while it overlaps the next one. Once it reaches
    ``inf`` nothing after it can extend it, so the sweep stops there.
    """
    iterator = iter(ordered)
    try:
        current = next(iterator)
    except StopIteration:
        return []

    merged: list[Range] = []
    for candidate in iterator:
        if current.unbounded_end:
            break
        if current.overlap(candidate):
            current = current.merge(candidate)
        else:
            merged.append(current)
            current = candidate
    merged.append(current)
    return merged


class RangeCollection:
    """An immutable, ordered sequence of ranges.

    A collection may hold ranges in any order, overlapping or repeated.
    ``merge()`` returns its canonical form: sorted by ``(start, end)`` with no
    two neighbours overlapping.
    """

    __slots__ = ("_ranges",)

    def __init__(self, ranges: Iterable[Range] = ()):
        items = tuple(ranges)
        for item in items:
            if not isinstance(item, Range):
                raise TypeError(
                    f"RangeCollection items must be Range instances.\n"
                    f"Got {type(item).__name__!r}: {item!r}\n"
                    f"Hint: parse text first: RangeCollection.parse(['1:2', '4:'])"
                )
        self._ranges: tuple[Range, ...] = items

    @classmethod
    def parse(
        cls, texts: Iterable[str], delimiter: str = DEFAULT_DELIMITER
    ) -> "RangeCollection":
        return parse_range_collection(texts, delimiter)

    # Sequence protocol

    def __len__(self) -> int:
        return len(self._ranges)

    def __iter__(self) -> Iterator[Range]:
        return iter(self._ranges)

    @overload
    def __getitem__(self, item: int) -> Range: ...

    @overload
    def __getitem__(self, item: slice) -> "RangeCollection": ...

    def __getitem__(self, item: int | slice) -> "Range | RangeCollection":
        if isinstance(item, slice):
            return RangeCollection(self._ranges[item])
        return self._ranges[item]

    def __contains__(self, value: object) -> bool:
        return any(value in r for r in self._ranges)

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RangeCollection):
            return NotImplemented
        return self.equal(other)

    @override
    def __hash__(self) -> int:
        return hash(self._ranges)

    @override
    def __repr__(self) -> str:
        return f"RangeCollection({list(self._ranges)!r})"

    @override
    def __str__(self) -> str:
        return "[" + ", ".join(str(r) for r in self._ranges) + "]"

    # Predicates

    def equal(self, other: "RangeCollection") -> bool:
        """True if both collections hold equal ranges at the same positions.

        Order matters: merge both sides first to compare covered values.
        """
        if len(self) != len(other):
            return False
        return all(a.equal(b) for a, b in zip(self._ranges, other._ranges))

    def contains(self, value: float) -> bool:
        return any(r.contains(value) for r in self._ranges)

    def is_sorted(self) -> bool:
        return all(
            a.sort_key() <= b.sort_key()
            for a, b in zip(self._ranges, self._ranges[1:])
        )

    def is_merged(self) -> bool:
        """True if sorted by ``(start, end)`` with no overlapping neighbours."""
        if not self.is_sorted():
            return False
        return not any(a.overlap(b) for a, b in zip(self._ranges, self._ranges[1:]))

    # Normalization

    def sorted(self) -> "RangeCollection":
        return RangeCollection(sorted(self._ranges, key=Range.sort_key))

    def merge(self) -> "RangeCollection":
        """Return the canonical form of this collection.

        Sorts by ``(start, end)`` and sweeps overlapping neighbours together.
        An empty or already merged collection is returned as is.
        """
        if not self._ranges or self.is_merged():
            return self

        merged = _sweep(sorted(self._ranges, key=Range.sort_key))
        logger.debug("merged %d ranges into %d", len(self._ranges), len(merged))
        return RangeCollection(merged)

    def union(self, *others: "RangeCollection") -> "RangeCollection":
        """Merge the ranges of this and every other collection into one.

        Each operand is sorted on its own and the sorted streams are
        interleaved, so the sweep runs without a second sort.
        """
        streams = [c.sorted() for c in (self, *others)]
        combined = heapq.merge(*streams, key=Range.sort_key)
        return RangeCollection(_sweep(combined))

    def __or__(self, other: "RangeCollection") -> "RangeCollection":
        if not isinstance(other, RangeCollection):
            return NotImplemented
        return self.union(other)

    # Enumeration

    def iter_values(self, fn: ValueFn | None = None) -> Iterator[Any]:
        for r in self.merge():
            yield from r.iter_values(fn)

    def values(self) -> list[float]:
        """Return every value of the merged collection, range by range."""
        return list(self.iter_values())

    def each_value(self, fn: ValueFn) -> None:
        for _ in self.iter_values(fn):
            pass

    def value_map(self, fn: ValueFn) -> list[Any]:
        return list(self.iter_values(fn))

    def iter_values_in_range(
        self, other: Range, fn: ValueFn | None = None
    ) -> Iterator[Any]:
        for r in self.merge():
            yield from r.iter_values_in_range(other, fn)

    def values_in_range(self, other: Range) -> list[float]:
        """Return the values of the merged collection that fall inside ``other``."""
        return list(self.iter_values_in_range(other))

    def each_value_in_range(self, other: Range, fn: ValueFn) -> None:
        for _ in self.iter_values_in_range(other, fn):
            pass

    def map_value_in_range(self, other: Range, fn: ValueFn) -> list[Any]:
        return list(self.iter_values_in_range(other, fn))
