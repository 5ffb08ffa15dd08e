from .collection import RangeCollection
from .errors import DisjointRangeError, InvalidRangeError, ParseError, RangeError
from .parsing import (
    ParseResult,
    parse_range,
    parse_range_collection,
    try_parse_range,
    try_parse_range_collection,
)
from .range import Range
from .util import DEFAULT_DELIMITER, NEGATIVE_INFINITY, POSITIVE_INFINITY

__all__ = [
    "Range",
    "RangeCollection",
    "RangeError",
    "InvalidRangeError",
    "DisjointRangeError",
    "ParseError",
    "ParseResult",
    "parse_range",
    "parse_range_collection",
    "try_parse_range",
    "try_parse_range_collection",
    "DEFAULT_DELIMITER",
    "NEGATIVE_INFINITY",
    "POSITIVE_INFINITY",
]
