"""
Visibility group parser.

Handles prevailing visibility in meters (9999), statute miles (10SM, 1/4SM,
1 1/2SM), the CAVOK/NSC/SKC indicators and directional visibility
(2000 1200NW).

@license: CC BY-NC-SA 4.0 International
@github: https://github.com/smkrv/ha-metar-weather
@source: https://github.com/smkrv/ha-metar-weather
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Tuple, Union

from .const import (
    COMPASS_DESCRIPTIONS,
    COMPASS_TAGS,
    MILES_TO_KM,
    STATUTE_MILES_BOUNDS,
    STATUTE_MILES_MAX_DENOMINATOR,
    VISIBILITY_CATEGORY_TAGS,
    VISIBILITY_DESCRIPTIONS,
    VISIBILITY_METERS_BOUNDS,
    CompassDirection,
    VisibilityKind,
)
from .utils import (
    MetarParseError,
    MetarRangeError,
    at_boundary,
    match_tag,
    optional_tag,
    parse_bounded,
    take_number,
)

_LOGGER = logging.getLogger(__name__)

_MIXED_MILES = re.compile(r"([0-9]+)\s+([0-9]+)/([0-9]+)SM")
_FRACTION_MILES = re.compile(r"([0-9]+)/([0-9]+)SM")
_WHOLE_MILES = re.compile(r"([0-9]+)SM")

# CAVOK implies at least 10 km
CAVOK_VISIBILITY_KM = 10.0


@dataclass(frozen=True)
class Visibility:
    """Represents a single visibility value.

    ``value`` holds whole meters for METERS, statute miles for
    STATUTE_MILES and is None for the categorical kinds.
    """

    kind: VisibilityKind
    value: Union[int, float, None] = None

    def __post_init__(self) -> None:
        """Check the value matches the kind."""
        numeric = self.kind in (VisibilityKind.METERS, VisibilityKind.STATUTE_MILES)
        if numeric != (self.value is not None):
            raise ValueError(f"Invalid value {self.value!r} for {self.kind} visibility")

    @classmethod
    def meters(cls, value: int) -> Visibility:
        """Create a visibility in meters."""
        return cls(VisibilityKind.METERS, value)

    @classmethod
    def statute_miles(cls, value: float) -> Visibility:
        """Create a visibility in statute miles."""
        return cls(VisibilityKind.STATUTE_MILES, float(value))

    @property
    def km(self) -> Optional[float]:
        """Return visibility in kilometers where it is defined."""
        if self.kind == VisibilityKind.METERS:
            return self.value / 1000
        if self.kind == VisibilityKind.STATUTE_MILES:
            return round(self.value * MILES_TO_KM, 1)
        if self.kind == VisibilityKind.CAVOK:
            return CAVOK_VISIBILITY_KM
        return None

    def to_metar(self) -> str:
        """Return canonical METAR text."""
        if self.kind == VisibilityKind.METERS:
            return f"{self.value:04d}"
        if self.kind == VisibilityKind.STATUTE_MILES:
            return _format_statute_miles(self.value)
        return self.kind.value

    def describe(self) -> str:
        """Return a human readable description."""
        if self.kind == VisibilityKind.METERS:
            return f"{self.value} m"
        if self.kind == VisibilityKind.STATUTE_MILES:
            return f"{self.value:g} SM"
        return VISIBILITY_DESCRIPTIONS[self.kind]


@dataclass(frozen=True)
class DirectionalVisibility:
    """Prevailing visibility plus a lower visibility towards one direction."""

    primary: Visibility
    secondary: Visibility
    direction: CompassDirection

    def __post_init__(self) -> None:
        """Reject nested directional values."""
        if not isinstance(self.primary, Visibility) or not isinstance(self.secondary, Visibility):
            raise TypeError("Directional visibility can only hold plain visibility values")

    @property
    def km(self) -> Optional[float]:
        """Return prevailing visibility in kilometers."""
        return self.primary.km

    def to_metar(self) -> str:
        """Return canonical METAR text."""
        return f"{self.primary.to_metar()} {self.secondary.to_metar()}{self.direction.value}"

    def describe(self) -> str:
        """Return a human readable description."""
        return (f"{self.primary.describe()}, {self.secondary.describe()} "
                f"to the {COMPASS_DESCRIPTIONS[self.direction]}")


AnyVisibility = Union[Visibility, DirectionalVisibility]


def _format_statute_miles(value: float) -> str:
    """Write statute miles as whole and fractional parts."""
    fraction = Fraction(value).limit_denominator(STATUTE_MILES_MAX_DENOMINATOR)
    whole, numerator = divmod(fraction.numerator, fraction.denominator)
    if numerator == 0:
        return f"{whole}SM"
    if whole == 0:
        return f"{numerator}/{fraction.denominator}SM"
    return f"{whole} {numerator}/{fraction.denominator}SM"


def _miles_fraction(numerator: str, denominator: str, text: str) -> Fraction:
    """Evaluate a statute mile fraction exactly."""
    num = parse_bounded(numerator, STATUTE_MILES_BOUNDS, "visibility", text)
    den = parse_bounded(denominator, STATUTE_MILES_BOUNDS, "visibility", text)
    if den == 0:
        raise MetarRangeError("Zero denominator in statute mile visibility", "visibility", text)
    return Fraction(num, den)


def _parse_statute_miles(text: str) -> Optional[Tuple[Visibility, str]]:
    """Parse statute miles, returning None when the pattern is absent.

    Values are rounded to float once, from the exact rational, so that
    ``_format_statute_miles`` can recover the same fraction.
    """
    match = _MIXED_MILES.match(text)
    if match:
        whole = parse_bounded(match.group(1), STATUTE_MILES_BOUNDS, "visibility", text)
        fraction = _miles_fraction(match.group(2), match.group(3), text)
        if fraction >= 1:
            raise MetarRangeError(
                "Fraction part of mixed statute miles must be below one", "visibility", text
            )
        return Visibility.statute_miles(float(whole + fraction)), text[match.end():]

    match = _FRACTION_MILES.match(text)
    if match:
        value = _miles_fraction(match.group(1), match.group(2), text)
        return Visibility.statute_miles(float(value)), text[match.end():]

    match = _WHOLE_MILES.match(text)
    if match:
        value = parse_bounded(match.group(1), STATUTE_MILES_BOUNDS, "visibility", text)
        return Visibility.statute_miles(value), text[match.end():]

    return None


def parse_visibility(text: str) -> Tuple[Visibility, str]:
    """Parse a single visibility value.

    Tries the categorical tags, then statute miles, then meters.

    Args:
        text: Input starting with the visibility, leading whitespace allowed

    Returns:
        Tuple of the visibility and the unconsumed input

    Raises:
        MetarSyntaxError: If no visibility form matches
        MetarRangeError: On overflow or a zero denominator
    """
    text = text.lstrip()

    kind, rest = optional_tag(text, VISIBILITY_CATEGORY_TAGS, "visibility")
    if kind is not None:
        return Visibility(kind), rest

    miles = _parse_statute_miles(text)
    if miles is not None:
        return miles

    meters, rest = take_number(text, VISIBILITY_METERS_BOUNDS, "visibility")
    return Visibility.meters(meters), rest


def parse_visibility_full(text: str) -> Tuple[AnyVisibility, str]:
    """Parse visibility including an optional directional second value.

    "2000 1200NW" yields a DirectionalVisibility. When the second value and
    compass tag do not both match, the first value is returned and the rest
    is left for later fields.
    """
    first, rest = parse_visibility(text)
    if not rest[:1].isspace():
        return first, rest

    try:
        second, tail = parse_visibility(rest)
        direction, tail = match_tag(tail, COMPASS_TAGS, "visibility direction")
    except MetarParseError:
        return first, rest

    if not at_boundary(tail):
        return first, rest

    visibility = DirectionalVisibility(first, second, direction)
    _LOGGER.debug("Parsed directional visibility: %s", visibility)
    return visibility, tail
