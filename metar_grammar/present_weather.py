"""
Present weather parser.

A weather group combines up to five codes: intensity, characteristic
(descriptor), obscuration, precipitation and other phenomena, e.g. +SHRA,
VCFG, TSRA.

@license: CC BY-NC-SA 4.0 International
@github: https://github.com/smkrv/ha-metar-weather
@source: https://github.com/smkrv/ha-metar-weather
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional, Tuple

from .const import (
    CHARACTERISTIC_TAGS,
    INTENSITY_TAGS,
    OBSCURATION_TAGS,
    OTHER_PHENOMENA_TAGS,
    PRECIPITATION_TAGS,
    WEATHER_PHENOMENA,
    Characteristic,
    Intensity,
    Obscuration,
    OtherPhenomena,
    Precipitation,
)
from .utils import at_boundary, optional_tag

_LOGGER = logging.getLogger(__name__)

# Code families in the order they are tried
_FAMILIES = (
    ("intensity", INTENSITY_TAGS),
    ("characteristic", CHARACTERISTIC_TAGS),
    ("obscuration", OBSCURATION_TAGS),
    ("precipitation", PRECIPITATION_TAGS),
    ("other_phenomena", OTHER_PHENOMENA_TAGS),
)


@dataclass(frozen=True)
class PresentWeather:
    """Represents one present weather group.

    Every code is optional; an empty group means no phenomenon was coded.
    """

    intensity: Optional[Intensity] = None
    characteristic: Optional[Characteristic] = None
    obscuration: Optional[Obscuration] = None
    precipitation: Optional[Precipitation] = None
    other_phenomena: Optional[OtherPhenomena] = None

    @property
    def is_empty(self) -> bool:
        """Return True when no code is set."""
        return all(getattr(self, item.name) is None for item in fields(self))

    def _codes(self) -> List[Any]:
        """Return codes in METAR writing order."""
        return [
            code for code in (
                self.intensity,
                self.characteristic,
                self.precipitation,
                self.obscuration,
                self.other_phenomena,
            )
            if code is not None
        ]

    def to_metar(self) -> str:
        """Return canonical METAR text."""
        return "".join(code.value for code in self._codes())

    def describe(self) -> str:
        """Return a human readable description, e.g. "Heavy Shower Rain"."""
        return " ".join(WEATHER_PHENOMENA[code.value] for code in self._codes())


def _next_code(text: str, first: bool) -> Optional[Tuple[str, Any, str]]:
    """Find the family whose tag matches at the start of ``text``."""
    for name, table in _FAMILIES:
        # Intensity only opens a group
        if name == "intensity" and not first:
            continue
        code, rest = optional_tag(text, table, name)
        if code is not None:
            return name, code, rest
    return None


def _parse_group(text: str, span_whitespace: bool) -> Tuple[PresentWeather, str]:
    """Fill weather slots until no family matches or a slot repeats."""
    slots: Dict[str, Any] = {}
    rest = text

    while True:
        probe = rest.lstrip() if span_whitespace or not slots else rest
        found = _next_code(probe, first=not slots)
        if found is None:
            break
        name, code, tail = found
        if name in slots:
            # Belongs to the next group
            break
        slots[name] = code
        rest = tail

    return PresentWeather(**slots), rest


def parse_present_weather(text: str) -> Tuple[PresentWeather, str]:
    """Parse one present weather group.

    Codes may be written together (+SHRA) or separated by whitespace
    (+SH RA FG); both yield a single group. Never fails: when nothing
    matches, an empty group is returned and no input is consumed.

    Args:
        text: Input starting with the group, leading whitespace allowed

    Returns:
        Tuple of the weather group and the unconsumed input
    """
    weather, rest = _parse_group(text, span_whitespace=True)
    _LOGGER.debug("Parsed present weather: %s", weather)
    return weather, rest


def parse_present_weather_groups(text: str) -> Tuple[List[PresentWeather], str]:
    """Parse whitespace separated weather groups, one group per token.

    Stops before the first token that is not a complete, non-empty weather
    group; an empty list is valid.
    """
    groups: List[PresentWeather] = []
    rest = text

    while True:
        if groups and not rest[:1].isspace():
            break
        weather, tail = _parse_group(rest.lstrip(), span_whitespace=False)
        if weather.is_empty or not at_boundary(tail):
            break
        groups.append(weather)
        rest = tail

    _LOGGER.debug("Parsed %d present weather group(s)", len(groups))
    return groups, rest
