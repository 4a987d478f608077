"""
Option handling for the METAR grammar parser.

@license: CC BY-NC-SA 4.0 International
@github: https://github.com/smkrv/ha-metar-weather
@source: https://github.com/smkrv/ha-metar-weather
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple

import voluptuous as vol

from .const import (
    CONF_HOURS_BEFORE,
    CONF_PARSE_PRESENT_WEATHER,
    CONF_PARSE_RUNWAY_RANGES,
    CONF_STATIONS,
    CONF_STRIP_KEYWORD,
    CONF_TIMEOUT,
    DEFAULT_HOURS_BEFORE,
    DEFAULT_TIMEOUT,
    HOURS_BEFORE_RANGE,
    TIMEOUT_RANGE,
)
from .utils import validate_icao_format

_LOGGER = logging.getLogger(__name__)


class InvalidOptionsError(ValueError):
    """Error to indicate invalid parser or fetch options."""


def _station_list(value: Any) -> List[str]:
    """Accept a list of stations or a comma/space separated string."""
    if isinstance(value, str):
        return [item for item in re.split(r"[,\s]+", value) if item]
    if isinstance(value, (list, tuple)):
        return list(value)
    raise vol.Invalid(f"Expected station list, got {type(value).__name__}")


def _station_id(value: Any) -> str:
    """Validate and normalize an ICAO code."""
    station = str(value).strip().upper()
    if not validate_icao_format(station):
        raise vol.Invalid(f"Invalid ICAO code format: {value}")
    return station


PARSER_OPTIONS_SCHEMA = vol.Schema({
    vol.Optional(CONF_STRIP_KEYWORD, default=True): vol.Boolean(),
    vol.Optional(CONF_PARSE_RUNWAY_RANGES, default=True): vol.Boolean(),
    vol.Optional(CONF_PARSE_PRESENT_WEATHER, default=True): vol.Boolean(),
})

FETCH_OPTIONS_SCHEMA = vol.Schema({
    vol.Required(CONF_STATIONS): vol.All(_station_list, vol.Length(min=1), [_station_id]),
    vol.Optional(CONF_HOURS_BEFORE, default=DEFAULT_HOURS_BEFORE): vol.All(
        vol.Coerce(float), vol.Range(min=HOURS_BEFORE_RANGE[0], max=HOURS_BEFORE_RANGE[1])
    ),
    vol.Optional(CONF_TIMEOUT, default=DEFAULT_TIMEOUT): vol.All(
        vol.Coerce(int), vol.Range(min=TIMEOUT_RANGE[0], max=TIMEOUT_RANGE[1])
    ),
})


def _validate(schema: vol.Schema, data: Optional[Mapping[str, Any]], kind: str) -> dict:
    """Run ``schema`` and translate voluptuous errors."""
    try:
        return schema(dict(data or {}))
    except vol.Invalid as err:
        _LOGGER.debug("Rejected %s options %s: %s", kind, data, err)
        raise InvalidOptionsError(f"Invalid {kind} options: {err}") from err


@dataclass(frozen=True)
class ParserOptions:
    """Options controlling which optional groups the assembler parses.

    With ``parse_runway_ranges`` and ``parse_present_weather`` disabled the
    report stops after visibility and everything else stays in the
    remainder.
    """

    strip_keyword: bool = True
    parse_runway_ranges: bool = True
    parse_present_weather: bool = True

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]] = None) -> ParserOptions:
        """Build options from a mapping validated by PARSER_OPTIONS_SCHEMA.

        Raises:
            InvalidOptionsError: If a value fails validation
        """
        return cls(**_validate(PARSER_OPTIONS_SCHEMA, data, "parser"))


@dataclass(frozen=True)
class FetchOptions:
    """Options for fetching raw reports."""

    stations: Tuple[str, ...]
    hours_before: float = DEFAULT_HOURS_BEFORE
    timeout: int = DEFAULT_TIMEOUT

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]] = None) -> FetchOptions:
        """Build options from a mapping validated by FETCH_OPTIONS_SCHEMA."""
        validated = _validate(FETCH_OPTIONS_SCHEMA, data, "fetch")
        return cls(
            stations=tuple(validated[CONF_STATIONS]),
            hours_before=validated[CONF_HOURS_BEFORE],
            timeout=validated[CONF_TIMEOUT],
        )
