"""
METAR report grammar.

Parses METAR aviation weather reports into immutable records: station,
observation time, report type, wind, visibility, runway visual range and
present weather.

@license: CC BY-NC-SA 4.0 International
@github: https://github.com/smkrv/ha-metar-weather
@source: https://github.com/smkrv/ha-metar-weather
"""
from __future__ import annotations

from .config import FetchOptions, InvalidOptionsError, ParserOptions
from .const import (
    VERSION,
    Characteristic,
    CompassDirection,
    Intensity,
    Obscuration,
    OtherPhenomena,
    Precipitation,
    ReportType,
    RunwayPosition,
    VisibilityKind,
    VisibilityScale,
    VisibilityStatus,
    WindUnit,
)
from .metar_parser import (
    MetarParser,
    Report,
    Time,
    parse_report,
    parse_report_type,
    parse_station,
    parse_time,
)
from .present_weather import (
    PresentWeather,
    parse_present_weather,
    parse_present_weather_groups,
)
from .rvr import RunwayVisualRange, parse_rvr, parse_rvrs
from .utils import MetarParseError, MetarRangeError, MetarSyntaxError
from .visibility import (
    DirectionalVisibility,
    Visibility,
    parse_visibility,
    parse_visibility_full,
)
from .wind import Wind, parse_wind

__version__ = VERSION

__all__ = [
    "Characteristic",
    "CompassDirection",
    "DirectionalVisibility",
    "FetchOptions",
    "Intensity",
    "InvalidOptionsError",
    "MetarParseError",
    "MetarParser",
    "MetarRangeError",
    "MetarSyntaxError",
    "Obscuration",
    "OtherPhenomena",
    "ParserOptions",
    "Precipitation",
    "PresentWeather",
    "Report",
    "ReportType",
    "RunwayPosition",
    "RunwayVisualRange",
    "Time",
    "Visibility",
    "VisibilityKind",
    "VisibilityScale",
    "VisibilityStatus",
    "Wind",
    "WindUnit",
    "parse_present_weather",
    "parse_present_weather_groups",
    "parse_report",
    "parse_report_type",
    "parse_rvr",
    "parse_rvrs",
    "parse_station",
    "parse_time",
    "parse_visibility",
    "parse_visibility_full",
    "parse_wind",
]
