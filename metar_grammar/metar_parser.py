"""
Parser for complete METAR reports.

Runs the field parsers left to right over the unconsumed input:
station, observation time, report type, wind, visibility, then the
optional RVR and present weather groups. Anything after that is kept as
the unparsed remainder.

@license: CC BY-NC-SA 4.0 International
@github: https://github.com/smkrv/ha-metar-weather
@source: https://github.com/smkrv/ha-metar-weather
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .config import ParserOptions
from .const import (
    DAY_BOUNDS,
    HOUR_BOUNDS,
    METAR_KEYWORD,
    MINUTE_BOUNDS,
    REPORT_TYPE_TAGS,
    ReportType,
    VisibilityKind,
)
from .present_weather import PresentWeather, parse_present_weather_groups
from .rvr import RunwayVisualRange, parse_rvrs
from .utils import (
    MetarParseError,
    MetarRangeError,
    MetarSyntaxError,
    at_boundary,
    expect_literal,
    optional_tag,
    parse_bounded,
)
from .visibility import AnyVisibility, DirectionalVisibility, parse_visibility_full
from .wind import Wind, parse_wind

_LOGGER = logging.getLogger(__name__)

_TIME_DIGITS = re.compile(r"[0-9]{6}")


@dataclass(frozen=True)
class Time:
    """Observation day of month and UTC time."""

    day: int
    hour: int
    minute: int

    def __post_init__(self) -> None:
        """Validate ranges."""
        for field, value, (minimum, maximum) in (
            ("day", self.day, DAY_BOUNDS),
            ("hour", self.hour, HOUR_BOUNDS),
            ("minute", self.minute, MINUTE_BOUNDS),
        ):
            if not minimum <= value <= maximum:
                raise MetarRangeError(
                    f"Value {value} for {field} outside range ({minimum}-{maximum})",
                    field,
                    "",
                )

    def to_metar(self) -> str:
        """Return canonical METAR text."""
        return f"{self.day:02d}{self.hour:02d}{self.minute:02d}Z"


@dataclass(frozen=True)
class Report:
    """Represents a parsed METAR report.

    ``runway_visual_ranges`` and ``present_weather`` are empty when the
    report has no such groups. ``remainder`` holds the unparsed trailing
    text (clouds, temperature, pressure, trend, remarks).
    """

    station: str
    time: Time
    wind: Wind
    visibility: AnyVisibility
    report_type: ReportType = ReportType.MANUAL
    runway_visual_ranges: Tuple[RunwayVisualRange, ...] = ()
    present_weather: Tuple[PresentWeather, ...] = ()
    remainder: str = ""

    def to_metar(self) -> str:
        """Return canonical METAR text, starting with the METAR keyword."""
        parts = [METAR_KEYWORD, self.station, self.time.to_metar()]
        if self.report_type != ReportType.MANUAL:
            parts.append(self.report_type.value)
        parts.append(self.wind.to_metar())
        parts.append(self.visibility.to_metar())
        parts.extend(rvr.to_metar() for rvr in self.runway_visual_ranges)
        parts.extend(weather.to_metar() for weather in self.present_weather)
        if self.remainder:
            parts.append(self.remainder)
        return " ".join(parts)


def parse_station(text: str) -> Tuple[str, str]:
    """Take the 4-character station identifier."""
    station = text[:4]
    if len(station) < 4:
        raise MetarSyntaxError("Station identifier must be 4 characters", "station", text)
    return station, text[4:]


def parse_time(text: str) -> Tuple[Time, str]:
    """Parse the DDHHMMZ observation time.

    Raises:
        MetarSyntaxError: If six digits and the Z terminator are not present
        MetarRangeError: If day, hour or minute is out of range
    """
    text = text.lstrip()
    digits = text[:6]
    if not _TIME_DIGITS.fullmatch(digits):
        raise MetarSyntaxError("Expected DDHHMM observation time", "time", text)

    day = parse_bounded(digits[0:2], DAY_BOUNDS, "day", text)
    hour = parse_bounded(digits[2:4], HOUR_BOUNDS, "hour", text)
    minute = parse_bounded(digits[4:6], MINUTE_BOUNDS, "minute", text)
    rest = expect_literal(text[6:], "Z", "time")
    return Time(day, hour, minute), rest


def parse_report_type(text: str) -> Tuple[ReportType, str]:
    """Parse the optional AUTO/NIL flag; MANUAL when absent. Never fails."""
    flag, rest = optional_tag(text.lstrip(), REPORT_TYPE_TAGS, "report type")
    if flag is None or not at_boundary(rest):
        return ReportType.MANUAL, text
    return flag, rest


def _strip_keyword(text: str) -> str:
    """Remove a leading METAR keyword and surrounding whitespace."""
    text = text.lstrip()
    if text.startswith(METAR_KEYWORD):
        text = text[len(METAR_KEYWORD):].lstrip()
    return text


def parse_report(text: str, options: Optional[ParserOptions] = None) -> Report:
    """Parse a complete METAR line.

    Args:
        text: Report line, optionally prefixed with the METAR keyword
        options: Which optional groups to parse, defaults to all

    Returns:
        The parsed report

    Raises:
        MetarParseError: If a required field is malformed; ``offset`` gives
            the failure position within ``text``
    """
    if options is None:
        options = ParserOptions()

    try:
        rest = _strip_keyword(text) if options.strip_keyword else text.lstrip()
        station, rest = parse_station(rest)
        time, rest = parse_time(rest)
        report_type, rest = parse_report_type(rest)
        wind, rest = parse_wind(rest)
        visibility, rest = parse_visibility_full(rest)
    except MetarParseError as err:
        err.locate(text)
        _LOGGER.debug("Failed to parse METAR %r: %s", text, err)
        raise

    runway_visual_ranges: Tuple[RunwayVisualRange, ...] = ()
    if options.parse_runway_ranges:
        ranges, rest = parse_rvrs(rest)
        runway_visual_ranges = tuple(ranges)

    present_weather: Tuple[PresentWeather, ...] = ()
    if options.parse_present_weather:
        groups, rest = parse_present_weather_groups(rest)
        present_weather = tuple(groups)

    report = Report(
        station=station,
        time=time,
        wind=wind,
        visibility=visibility,
        report_type=report_type,
        runway_visual_ranges=runway_visual_ranges,
        present_weather=present_weather,
        remainder=rest.strip(),
    )
    _LOGGER.debug("Parsed METAR report: %s", report)
    return report


class MetarParser:
    """Parser for a single raw METAR line."""

    def __init__(self, raw_metar: str, options: Optional[ParserOptions] = None) -> None:
        """Initialize parser with a raw METAR line."""
        self.raw_metar = raw_metar
        self.options = options or ParserOptions()
        # Parsed once on first access
        self._report_cache: Optional[Report] = None
        if not raw_metar.strip():
            _LOGGER.warning("Empty raw METAR string received, parsing will fail")
        else:
            _LOGGER.debug("Initializing METAR parser with data: %s", raw_metar)

    @property
    def report(self) -> Report:
        """Return the parsed report.

        Raises:
            MetarParseError: If the line is malformed
        """
        if self._report_cache is None:
            self._report_cache = parse_report(self.raw_metar, self.options)
        return self._report_cache

    def parse_weather(self) -> str:
        """Return present weather as text, "Clear" when none is reported."""
        descriptions = [weather.describe() for weather in self.report.present_weather]
        return ", ".join(descriptions) if descriptions else "Clear"

    def get_parsed_data(self) -> Dict[str, Any]:
        """Return complete parsed METAR data as a JSON ready dict."""
        report = self.report
        wind = report.wind
        visibility = report.visibility
        prevailing = (
            visibility.primary if isinstance(visibility, DirectionalVisibility) else visibility
        )

        data = {
            "raw_metar": self.raw_metar,
            "station": report.station,
            "report_type": report.report_type.name,
            "auto": report.report_type == ReportType.AUTO,
            "observation_time": {
                "day": report.time.day,
                "hour": report.time.hour,
                "minute": report.time.minute,
            },
            "wind_direction": wind.direction,
            "wind_variable": wind.is_variable,
            "wind_speed": wind.speed,
            "wind_gust": wind.gust_speed,
            "wind_unit": wind.unit.value,
            "wind_speed_kmh": wind.speed_kmh,
            "wind_gust_kmh": wind.gust_kmh,
            "wind_variable_direction": (
                list(wind.variable_direction) if wind.variable_direction else None
            ),
            "wind_description": wind.describe(),
            "visibility": visibility.to_metar(),
            "visibility_km": visibility.km,
            "visibility_description": visibility.describe(),
            "cavok": prevailing.kind == VisibilityKind.CAVOK,
            "runway_visual_ranges": [
                {
                    "runway": rvr.runway,
                    "visibility_meters": rvr.visibility_meters,
                    "scale": rvr.scale.value if rvr.scale else None,
                    "status": rvr.status.value if rvr.status else None,
                    "description": rvr.describe(),
                }
                for rvr in report.runway_visual_ranges
            ],
            "weather": self.parse_weather(),
            "weather_codes": [weather.to_metar() for weather in report.present_weather],
            "remainder": report.remainder,
        }

        _LOGGER.debug("Parsed METAR data: %s", data)
        return data
