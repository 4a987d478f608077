"""
Parsing primitives shared by the METAR field parsers.

@license: CC BY-NC-SA 4.0 International
@github: https://github.com/smkrv/ha-metar-weather
@source: https://github.com/smkrv/ha-metar-weather
"""
from __future__ import annotations

import logging
import re
from typing import Optional, Sequence, Tuple, TypeVar

from .const import ICAO_REGEX

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

TagTable = Sequence[Tuple[str, T]]

_DIGITS = re.compile(r"[0-9]+")
_SIGNED_DIGITS = re.compile(r"[+-]?[0-9]+")


class MetarParseError(ValueError):
    """Base error for malformed METAR input.

    Attributes:
        field: Name of the field being parsed
        remainder: Unconsumed input at the point of failure
        offset: Position of the failure within the full report line,
            filled in by the record assembler
    """

    def __init__(self, message: str, field: str, remainder: str) -> None:
        """Initialize the error."""
        super().__init__(message)
        self.message = message
        self.field = field
        self.remainder = remainder
        self.offset: Optional[int] = None

    def locate(self, source: str) -> MetarParseError:
        """Record where the failure happened within ``source``."""
        if source.endswith(self.remainder):
            self.offset = len(source) - len(self.remainder)
        return self

    def __str__(self) -> str:
        """Return error message with position when known."""
        if self.offset is not None:
            return f"{self.message} (expected {self.field} near position {self.offset})"
        return self.message


class MetarSyntaxError(MetarParseError):
    """A required literal or character class did not match."""


class MetarRangeError(MetarParseError):
    """A well-formed number lies outside its allowed range."""


def validate_icao_format(icao: str) -> bool:
    """Validate ICAO airport code format.

    Args:
        icao: ICAO airport code (e.g., "KJFK", "EGLL")

    Returns:
        True if format is valid (4 alphanumeric characters)
    """
    if not icao:
        return False
    return bool(re.match(ICAO_REGEX, icao.upper()))


def at_boundary(text: str) -> bool:
    """Return True if ``text`` starts at the end of a token."""
    return not text or text[0].isspace()


def parse_bounded(
    digits: str,
    bounds: Tuple[int, int],
    field: str,
    remainder: Optional[str] = None,
    signed: bool = False,
) -> int:
    """Parse a digit run into an integer within inclusive bounds.

    Args:
        digits: Digit string, optionally with a leading sign when ``signed``
        bounds: Inclusive (minimum, maximum)
        field: Field name used in error messages
        remainder: Input reported on failure, defaults to ``digits``
        signed: Whether a leading ``+``/``-`` is allowed

    Returns:
        The parsed value

    Raises:
        MetarSyntaxError: If ``digits`` is not a number
        MetarRangeError: If the value lies outside ``bounds``
    """
    if remainder is None:
        remainder = digits
    pattern = _SIGNED_DIGITS if signed else _DIGITS
    if not pattern.fullmatch(digits):
        raise MetarSyntaxError(f"Expected digits for {field}, got {digits!r}", field, remainder)

    value = int(digits)
    minimum, maximum = bounds
    if not minimum <= value <= maximum:
        raise MetarRangeError(
            f"Value {value} for {field} outside range ({minimum}-{maximum})",
            field,
            remainder,
        )
    return value


def take_number(
    text: str,
    bounds: Tuple[int, int],
    field: str,
    signed: bool = False,
) -> Tuple[int, str]:
    """Consume the longest digit run at the start of ``text``."""
    match = (_SIGNED_DIGITS if signed else _DIGITS).match(text)
    if not match:
        raise MetarSyntaxError(f"Expected digits for {field}", field, text)
    value = parse_bounded(match.group(), bounds, field, text, signed)
    return value, text[match.end():]


def expect_literal(text: str, literal: str, field: str) -> str:
    """Consume a case-sensitive structural literal."""
    if not text.startswith(literal):
        raise MetarSyntaxError(f"Expected {literal!r} in {field}", field, text)
    return text[len(literal):]


def match_tag(text: str, table: TagTable[T], field: str) -> Tuple[T, str]:
    """Match a tag from ``table`` at the start of ``text``.

    Literals are tried longest first, keeping table order for literals of
    equal length, so "NW" wins over "N". Comparison ignores ASCII case only;
    non-ASCII input never matches (e.g. "\u00df".upper() == "SS").

    Returns:
        Tuple of the matched variant and the rest of the input

    Raises:
        MetarSyntaxError: If no literal matches
    """
    for literal, variant in sorted(table, key=lambda pair: len(pair[0]), reverse=True):
        candidate = text[:len(literal)]
        if candidate.isascii() and candidate.upper() == literal.upper():
            return variant, text[len(literal):]
    raise MetarSyntaxError(f"Unrecognized {field} at {text[:8]!r}", field, text)


def optional_tag(text: str, table: TagTable[T], field: str) -> Tuple[Optional[T], str]:
    """Like ``match_tag`` but yield None without consuming on mismatch."""
    try:
        return match_tag(text, table, field)
    except MetarSyntaxError:
        return None, text


def lookup_tag(token: str, table: TagTable[T], field: str, remainder: str) -> T:
    """Resolve a whole ASCII token against ``table``, ignoring case."""
    if token.isascii():
        wanted = token.upper()
        for literal, variant in table:
            if literal.upper() == wanted:
                return variant
    raise MetarSyntaxError(f"Unrecognized {field}: {token!r}", field, remainder)
