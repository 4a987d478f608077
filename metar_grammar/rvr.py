"""
Runway visual range (RVR) parser.

Handles groups such as R25L/P1075N, R04/M0075U and space separated lists
of them.

@license: CC BY-NC-SA 4.0 International
@github: https://github.com/smkrv/ha-metar-weather
@source: https://github.com/smkrv/ha-metar-weather
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .const import (
    RUNWAY_NUMBER_BOUNDS,
    RUNWAY_POSITION_TAGS,
    RVR_METERS_BOUNDS,
    RVR_SCALE_DESCRIPTIONS,
    RVR_STATUS_DESCRIPTIONS,
    VISIBILITY_SCALE_TAGS,
    VISIBILITY_STATUS_TAGS,
    RunwayPosition,
    VisibilityScale,
    VisibilityStatus,
)
from .utils import (
    MetarParseError,
    at_boundary,
    expect_literal,
    optional_tag,
    take_number,
)

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunwayVisualRange:
    """Represents one RVR group."""

    number: int
    visibility_meters: int
    position: Optional[RunwayPosition] = None
    scale: Optional[VisibilityScale] = None
    status: Optional[VisibilityStatus] = None

    @property
    def runway(self) -> str:
        """Return runway designator, e.g. 25L."""
        position = self.position.value if self.position else ""
        return f"{self.number:02d}{position}"

    def to_metar(self) -> str:
        """Return canonical METAR text."""
        scale = self.scale.value if self.scale else ""
        status = self.status.value if self.status else ""
        return f"R{self.runway}/{scale}{self.visibility_meters:04d}{status}"

    def describe(self) -> str:
        """Return a human readable description."""
        parts = [f"Runway {self.runway}:"]
        if self.scale:
            parts.append(RVR_SCALE_DESCRIPTIONS[self.scale])
        parts.append(f"{self.visibility_meters} m")
        text = " ".join(parts)
        if self.status:
            text += f", {RVR_STATUS_DESCRIPTIONS[self.status]}"
        return text


def _parse_group(text: str) -> Tuple[RunwayVisualRange, str]:
    """Parse one RVR group starting exactly at ``text``."""
    rest = expect_literal(text, "R", "runway visual range")
    number, rest = take_number(rest, RUNWAY_NUMBER_BOUNDS, "runway number", signed=True)
    position, rest = optional_tag(rest, RUNWAY_POSITION_TAGS, "runway position")
    rest = expect_literal(rest, "/", "runway visual range")
    scale, rest = optional_tag(rest, VISIBILITY_SCALE_TAGS, "visibility scale")
    meters, rest = take_number(rest, RVR_METERS_BOUNDS, "runway visual range", signed=True)
    status, rest = optional_tag(rest, VISIBILITY_STATUS_TAGS, "visibility status")

    return RunwayVisualRange(
        number=number,
        visibility_meters=meters,
        position=position,
        scale=scale,
        status=status,
    ), rest


def parse_rvr(text: str) -> Tuple[RunwayVisualRange, str]:
    """Parse a single RVR group.

    Args:
        text: Input starting with the group, leading whitespace allowed

    Returns:
        Tuple of the parsed group and the unconsumed input

    Raises:
        MetarSyntaxError: If the group is malformed
        MetarRangeError: If the runway number or distance overflows
    """
    rvr, rest = _parse_group(text.lstrip())
    _LOGGER.debug("Parsed RVR: %s", rvr)
    return rvr, rest


def parse_rvrs(text: str) -> Tuple[List[RunwayVisualRange], str]:
    """Parse whitespace separated RVR groups.

    Stops before the first token that is not a complete RVR group; an
    empty list is valid.
    """
    ranges: List[RunwayVisualRange] = []
    rest = text.lstrip()

    while True:
        if ranges:
            if not rest[:1].isspace():
                break
            candidate = rest.lstrip()
        else:
            candidate = rest

        try:
            rvr, tail = _parse_group(candidate)
        except MetarParseError as err:
            _LOGGER.debug("RVR list ends at %r: %s", candidate[:12], err)
            break

        if not at_boundary(tail):
            break
        ranges.append(rvr)
        rest = tail

    return ranges, rest
