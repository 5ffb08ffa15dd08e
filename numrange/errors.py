"""Exceptions raised by numrange.

Every error derives from ``RangeError``, itself a ``ValueError``, so callers
can either catch the library's errors as a group or keep catching
``ValueError`` for invalid input.
"""

from typing import Any


class RangeError(ValueError):
    """Base class for all numrange errors."""


class InvalidRangeError(RangeError):
    def __init__(self, start: Any, end: Any):
        self.start: Any = start
        self.end: Any = end
        super().__init__(
            f"Range start ({start}) must be <= end ({end}).\n"
            f"Hint: swap the bounds, or use -inf/inf for an open side:\n"
            f"  Range({end}, {start})"
        )


class DisjointRangeError(RangeError):
    def __init__(self, first: Any, second: Any):
        self.first: Any = first
        self.second: Any = second
        super().__init__(
            f"Range {first!r} does not overlap range {second!r}.\n"
            f"Hint: check first.overlap(second) before merging, or collect both\n"
            f"      into a RangeCollection and call merge()"
        )


class ParseError(RangeError):
    """Raised when text does not follow the range grammar.

    Attributes:
        text: The text that failed to parse
        delimiter: The delimiter it was parsed with
        cause: The underlying number parsing error, None for structural errors
    """

    def __init__(
        self, text: str, delimiter: str, cause: Exception | None = None
    ):
        self.text: str = text
        self.delimiter: str = delimiter
        self.cause: Exception | None = cause
        reason = f": {cause}" if cause is not None else ""
        super().__init__(
            f"Error parsing range ({text!r}) with delimiter ({delimiter!r}){reason}\n"
            f"Expected one of: 'D', 'Dn', 'nD', 'n1Dn2' or 'n' "
            f"where D is {delimiter!r}"
        )
