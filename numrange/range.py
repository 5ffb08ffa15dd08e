import logging
import math
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from numrange.errors import DisjointRangeError, InvalidRangeError
from numrange.util import (
    DEFAULT_DELIMITER,
    NEGATIVE_INFINITY,
    POSITIVE_INFINITY,
    format_bound,
)

logger = logging.getLogger(__name__)

ValueFn = Callable[[float], Any]


def _identity(value: float) -> float:
    return value


def _walk(first: float, last: float, fn: ValueFn) -> Iterator[Any]:
    """Yield fn(first), fn(first + 1), ... while the value stays <= last.

    Integral starts step an exact integer counter, since above 2**53 adding
    1 to a float no longer changes it.
    """
    if isinstance(first, int) or first.is_integer():
        as_float = isinstance(first, float)
        n = int(first)
        while n <= last:
            yield fn(float(n) if as_float else n)
            n += 1
        return

    value = first
    while value <= last:
        yield fn(value)
        if value + 1 == value:
            return
        value += 1


@dataclass(frozen=True, kw_only=True)
class Range:
    """A closed interval over the extended real line.

    Either bound may be infinite: ``-inf`` for a range without a lower limit,
    ``inf`` for one without an upper limit.
    """

    start: float
    end: float

    def __post_init__(self) -> None:
        if math.isnan(self.start) or math.isnan(self.end):
            raise InvalidRangeError(self.start, self.end)
        if self.start > self.end:
            raise InvalidRangeError(self.start, self.end)

    @classmethod
    def singleton(cls, value: float) -> "Range":
        return cls(start=value, end=value)

    @classmethod
    def unbounded(cls) -> "Range":
        return cls(start=NEGATIVE_INFINITY, end=POSITIVE_INFINITY)

    @property
    def unbounded_start(self) -> bool:
        return self.start == NEGATIVE_INFINITY

    @property
    def unbounded_end(self) -> bool:
        return self.end == POSITIVE_INFINITY

    def sort_key(self) -> tuple[float, float]:
        return (self.start, self.end)

    # Predicates

    def equal(self, other: "Range") -> bool:
        """True if both bounds are identical."""
        return self.start == other.start and self.end == other.end

    def overlap(self, other: "Range") -> bool:
        """Test whether ``other`` can be merged into this range.

        Only checks that this range ends at or after ``other`` starts; it does
        not check that ``other`` ends after this range starts. For sorted
        input (``self.start <= other.start``) that is the same as a true
        intersection test. Use ``intersects`` for arbitrary pairs.
        """
        return self.end >= other.start or other.start <= self.end

    def intersects(self, other: "Range") -> bool:
        """True if the two closed intervals share at least one point."""
        return self.start <= other.end and other.start <= self.end

    def infinite(self) -> bool:
        """True if the range is unbounded in both directions."""
        return self.unbounded_start and self.unbounded_end

    def contains(self, value: float) -> bool:
        return self.start <= value <= self.end

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, (int, float)):
            return False
        return self.contains(value)

    # Combination

    def merge(self, other: "Range") -> "Range":
        """Return the smallest range covering both ranges.

        Raises:
            DisjointRangeError: If ``self.overlap(other)`` is false
        """
        if not self.overlap(other):
            logger.debug("refusing to merge disjoint ranges %r and %r", self, other)
            raise DisjointRangeError(self, other)
        return Range(start=min(self.start, other.start), end=max(self.end, other.end))

    # Enumeration

    def iter_values(self, fn: ValueFn | None = None) -> Iterator[Any]:
        """Lazily produce the values of this range passed through ``fn``.

        A range with an unbounded side yields exactly its two bounds; a
        finite range yields ``start``, ``start + 1``, ... up to ``end``.
        """
        fn = fn or _identity
        if self.unbounded_start:
            return iter((fn(NEGATIVE_INFINITY), fn(self.end)))
        if self.unbounded_end:
            return iter((fn(self.start), fn(POSITIVE_INFINITY)))
        return _walk(self.start, self.end, fn)

    def values(self) -> list[float]:
        """Return the values of this range.

        If one end is unbounded, this is the list ``[start, end]``.
        """
        return list(self.iter_values())

    def each_value(self, fn: ValueFn) -> None:
        """Call ``fn`` on each value of this range."""
        for _ in self.iter_values(fn):
            pass

    def value_map(self, fn: ValueFn) -> list[Any]:
        """Return ``fn`` applied to each value of this range."""
        return list(self.iter_values(fn))

    def iter_values_in_range(
        self, other: "Range", fn: ValueFn | None = None
    ) -> Iterator[Any]:
        """Lazily produce the values of this range that fall inside ``other``.

        Nothing is produced when the ranges do not overlap. Unbounded sides
        are clamped to the other range's bound where that one is finite.
        """
        fn = fn or _identity
        if not self.overlap(other):
            return iter(())

        if other.infinite() and self.infinite():
            return iter((fn(NEGATIVE_INFINITY), fn(POSITIVE_INFINITY)))
        if other.infinite():
            return self.iter_values(fn)
        if other.unbounded_start:
            last = min(other.end, self.end)
            if self.unbounded_start:
                return iter((fn(NEGATIVE_INFINITY), fn(last)))
            return _walk(self.start, last, fn)
        if other.unbounded_end:
            first = max(other.start, self.start)
            if self.unbounded_end:
                return iter((fn(first), fn(POSITIVE_INFINITY)))
            return _walk(first, self.end, fn)
        return _walk(max(other.start, self.start), min(other.end, self.end), fn)

    def values_in_range(self, other: "Range") -> list[float]:
        """Return the values of this range that fall inside ``other``."""
        return list(self.iter_values_in_range(other))

    def each_value_in_range(self, other: "Range", fn: ValueFn) -> None:
        for _ in self.iter_values_in_range(other, fn):
            pass

    def map_value_in_range(self, other: "Range", fn: ValueFn) -> list[Any]:
        return list(self.iter_values_in_range(other, fn))

    # Conversion

    def format(self, delimiter: str = DEFAULT_DELIMITER) -> str:
        """Render this range in the text form accepted by ``parse_range``."""
        if self.infinite():
            return delimiter
        if self.unbounded_start:
            return f"{delimiter}{format_bound(self.end)}"
        if self.unbounded_end:
            return f"{format_bound(self.start)}{delimiter}"
        if self.start == self.end:
            return format_bound(self.start)
        return f"{format_bound(self.start)}{delimiter}{format_bound(self.end)}"

    def __str__(self) -> str:
        return self.format()

    def to_dict(self) -> dict[str, float | None]:
        """Return a JSON-friendly dict; unbounded sides become None."""
        return {
            "start": None if self.unbounded_start else self.start,
            "end": None if self.unbounded_end else self.end,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, float | None]) -> "Range":
        start = data["start"]
        end = data["end"]
        return cls(
            start=NEGATIVE_INFINITY if start is None else start,
            end=POSITIVE_INFINITY if end is None else end,
        )
