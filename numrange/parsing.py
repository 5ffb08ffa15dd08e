"""Parsing ranges from delimited text.

With the default ``:`` delimiter the accepted forms are::

    ":"      everything, (-inf, inf)
    ":4"     open start, (-inf, 4)
    "3:"     open end, (3, inf)
    "3:4"    bounded, (3, 4)
    "3"      singleton, (3, 3)

Each raising function has a ``try_`` counterpart returning a ``ParseResult``
for callers that prefer errors as values.
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from numrange.errors import ParseError, RangeError
from numrange.range import Range
from numrange.util import DEFAULT_DELIMITER, NEGATIVE_INFINITY, POSITIVE_INFINITY

if TYPE_CHECKING:
    from numrange.collection import RangeCollection

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Outcome of a non-raising parse.

    Attributes:
        success: True if the text parsed into a valid value
        value: The parsed value if successful, None if failed
        error: The error that occurred if failed, None if successful
    """

    success: bool
    value: T | None
    error: RangeError | None

    def unwrap(self) -> T:
        """Return the parsed value, re-raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        assert self.value is not None
        return self.value


def _number(token: str, text: str, delimiter: str) -> float:
    # float() also takes digit underscores and padding; the grammar does not
    if "_" in token or token != token.strip():
        logger.debug("bad number %r in range %r", token, text)
        raise ParseError(
            text, delimiter, ValueError(f"invalid number text: {token!r}")
        )
    try:
        value = float(token)
    except ValueError as exc:
        logger.debug("bad number %r in range %r", token, text)
        raise ParseError(text, delimiter, exc) from exc
    if math.isnan(value):
        raise ParseError(text, delimiter, ValueError(f"not a number: {token!r}"))
    return value


def parse_range(text: str, delimiter: str = DEFAULT_DELIMITER) -> Range:
    """Parse a single range from text.

    Raises:
        ParseError: If the text is not in one of the accepted forms
        InvalidRangeError: If the parsed start is after the parsed end
    """
    if not text or not delimiter:
        raise ParseError(text, delimiter)

    if delimiter not in text:
        value = _number(text, text, delimiter)
        return Range(start=value, end=value)

    if text == delimiter:
        return Range.unbounded()

    index = text.index(delimiter)
    if index == 0:
        end = _number(text[len(delimiter) :], text, delimiter)
        return Range(start=NEGATIVE_INFINITY, end=end)
    if index == len(text) - len(delimiter):
        start = _number(text[:index], text, delimiter)
        return Range(start=start, end=POSITIVE_INFINITY)

    tokens = text.split(delimiter)
    if len(tokens) != 2:
        logger.debug("range %r splits into %d tokens", text, len(tokens))
        raise ParseError(text, delimiter)
    start = _number(tokens[0], text, delimiter)
    end = _number(tokens[1], text, delimiter)
    return Range(start=start, end=end)


def parse_range_collection(
    texts: Iterable[str], delimiter: str = DEFAULT_DELIMITER
) -> "RangeCollection":
    """Parse every text into a range, failing on the first bad one."""
    from numrange.collection import RangeCollection

    return RangeCollection(parse_range(text, delimiter) for text in texts)


def try_parse_range(
    text: str, delimiter: str = DEFAULT_DELIMITER
) -> ParseResult[Range]:
    try:
        return ParseResult(True, parse_range(text, delimiter), None)
    except RangeError as exc:
        return ParseResult(False, None, exc)


def try_parse_range_collection(
    texts: Iterable[str], delimiter: str = DEFAULT_DELIMITER
) -> "ParseResult[RangeCollection]":
    try:
        return ParseResult(True, parse_range_collection(texts, delimiter), None)
    except RangeError as exc:
        return ParseResult(False, None, exc)
