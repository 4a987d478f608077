"""
Wind group parser.

Handles groups such as 22010KT, 22010G40KT 200V240, VRB03MPS.

@license: CC BY-NC-SA 4.0 International
@github: https://github.com/smkrv/ha-metar-weather
@source: https://github.com/smkrv/ha-metar-weather
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from .const import (
    WIND_DIRECTION_BOUNDS,
    WIND_SPEED_BOUNDS,
    WIND_UNIT_TAGS,
    WIND_UNIT_TO_KMH,
    WIND_VARIABLE,
    WindUnit,
)
from .utils import (
    MetarParseError,
    MetarSyntaxError,
    lookup_tag,
    parse_bounded,
    take_number,
)

_LOGGER = logging.getLogger(__name__)

_HEADING = re.compile(r"[0-9]{3}")
_UNIT = re.compile(r"[A-Za-z]+")
_VARIABLE_DIRECTION = re.compile(r"\s*([0-9]{1,3})V([0-9]{1,3})(?=\s|$)")


@dataclass(frozen=True)
class Wind:
    """Represents the wind group of a METAR.

    ``direction`` is the heading in degrees, or None when the report gives
    a variable direction (VRB).
    """

    direction: Optional[int]
    speed: int
    unit: WindUnit
    gust_speed: Optional[int] = None
    variable_direction: Optional[Tuple[int, int]] = None

    @property
    def is_variable(self) -> bool:
        """Return True for a VRB direction."""
        return self.direction is None

    @property
    def speed_kmh(self) -> float:
        """Return wind speed in km/h."""
        return round(self.speed * WIND_UNIT_TO_KMH[self.unit], 1)

    @property
    def gust_kmh(self) -> Optional[float]:
        """Return gust speed in km/h."""
        if self.gust_speed is None:
            return None
        return round(self.gust_speed * WIND_UNIT_TO_KMH[self.unit], 1)

    def to_metar(self) -> str:
        """Return canonical METAR text."""
        direction = WIND_VARIABLE if self.direction is None else f"{self.direction:03d}"
        text = f"{direction}{self.speed:02d}"
        if self.gust_speed is not None:
            text += f"G{self.gust_speed:02d}"
        text += self.unit.value
        if self.variable_direction is not None:
            low, high = self.variable_direction
            text += f" {low:03d}V{high:03d}"
        return text

    def describe(self) -> str:
        """Return a human readable description."""
        unit = self.unit.value.lower()
        heading = "Variable" if self.direction is None else f"{self.direction:03d}°"
        parts = [f"{heading} at {self.speed} {unit}"]
        if self.gust_speed is not None:
            parts.append(f"gusting {self.gust_speed} {unit}")
        if self.variable_direction is not None:
            low, high = self.variable_direction
            parts.append(f"varying {low:03d}°-{high:03d}°")
        return ", ".join(parts)


def _parse_direction(text: str) -> Tuple[Optional[int], str]:
    """Parse the 3-character direction token."""
    token = text[:3]
    if token == WIND_VARIABLE:
        return None, text[3:]
    if _HEADING.fullmatch(token):
        return parse_bounded(token, WIND_DIRECTION_BOUNDS, "wind direction", text), text[3:]
    raise MetarSyntaxError(f"Invalid wind direction {token!r}", "wind direction", text)


def parse_variable_direction(text: str) -> Tuple[Optional[Tuple[int, int]], str]:
    """Parse the optional variable direction suffix (e.g. 200V240).

    A suffix that does not fit the pattern, or whose headings are out of
    range, is treated as absent and nothing is consumed.
    """
    match = _VARIABLE_DIRECTION.match(text)
    if not match:
        return None, text

    try:
        low = parse_bounded(match.group(1), WIND_DIRECTION_BOUNDS, "variable wind direction", text)
        high = parse_bounded(match.group(2), WIND_DIRECTION_BOUNDS, "variable wind direction", text)
    except MetarParseError as err:
        _LOGGER.debug("Ignoring variable wind direction %r: %s", match.group().strip(), err)
        return None, text
    return (low, high), text[match.end():]


def parse_wind(text: str) -> Tuple[Wind, str]:
    """Parse a wind group.

    Args:
        text: Input starting with the wind group, leading whitespace allowed

    Returns:
        Tuple of the parsed wind and the unconsumed input

    Raises:
        MetarSyntaxError: On a malformed direction, speed, gust or unit
        MetarRangeError: On a speed or gust above 65535
    """
    text = text.lstrip()
    direction, rest = _parse_direction(text)
    speed, rest = take_number(rest, WIND_SPEED_BOUNDS, "wind speed")

    gust_speed = None
    if rest.startswith("G"):
        gust_speed, rest = take_number(rest[1:], WIND_SPEED_BOUNDS, "wind gust")

    match = _UNIT.match(rest)
    if not match:
        raise MetarSyntaxError("Missing wind unit", "wind unit", rest)
    unit = lookup_tag(match.group(), WIND_UNIT_TAGS, "wind unit", rest)
    rest = rest[match.end():]

    variable_direction, rest = parse_variable_direction(rest)

    wind = Wind(
        direction=direction,
        speed=speed,
        unit=unit,
        gust_speed=gust_speed,
        variable_direction=variable_direction,
    )
    _LOGGER.debug("Parsed wind: %s", wind)
    return wind, rest
