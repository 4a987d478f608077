"""
Constants for the METAR grammar parser.

@license: CC BY-NC-SA 4.0 International
@github: https://github.com/smkrv/ha-metar-weather
@source: https://github.com/smkrv/ha-metar-weather
"""

from __future__ import annotations

from enum import StrEnum
from importlib import metadata
from typing import Dict, Final, Tuple, Type, TypeVar

_E = TypeVar("_E", bound=StrEnum)


class ReportType(StrEnum):
    """Report type flag following the observation time."""

    MANUAL = ""  # no flag present
    AUTO = "AUTO"
    NIL = "NIL"


class WindUnit(StrEnum):
    """Wind speed units."""

    MPS = "MPS"
    MPH = "MPH"
    KT = "KT"


class CompassDirection(StrEnum):
    """Compass direction of a directional visibility."""

    # Two-letter tags first: N must not shadow NE/NW
    NORTH_EAST = "NE"
    NORTH_WEST = "NW"
    SOUTH_EAST = "SE"
    SOUTH_WEST = "SW"
    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"


class VisibilityKind(StrEnum):
    """Kinds of visibility values."""

    METERS = "meters"
    STATUTE_MILES = "statute_miles"
    CAVOK = "CAVOK"
    NSC = "NSC"
    SKC = "SKC"


class RunwayPosition(StrEnum):
    """Parallel runway designator."""

    LEFT = "L"
    CENTER = "C"
    RIGHT = "R"


class VisibilityScale(StrEnum):
    """RVR above/below the measurable range."""

    PLUS = "P"
    MINUS = "M"


class VisibilityStatus(StrEnum):
    """RVR tendency."""

    DOWN = "D"
    UP = "U"
    NO = "N"


class Intensity(StrEnum):
    """Intensity or proximity qualifier."""

    LIGHT = "-"
    HEAVY = "+"
    VICINITY = "VC"


class Characteristic(StrEnum):
    """Weather descriptor."""

    THUNDERSTORM = "TS"
    SHOWER = "SH"
    FREEZING = "FZ"
    BLOWING = "BL"
    LOW_DRIFTING = "DR"
    SHALLOW = "MI"
    PATCHES = "BC"
    PARTIAL = "PR"


class Precipitation(StrEnum):
    """Precipitation codes."""

    DRIZZLE = "DZ"
    RAIN = "RA"
    SNOW = "SN"
    SNOW_GRAINS = "SG"
    ICE_PELLETS = "PL"
    ICE_CRYSTALS = "IC"
    HAIL = "GR"
    SMALL_HAIL_SNOW_PELLETS = "GS"
    UNKNOWN_PRECIPITATION = "UP"


class Obscuration(StrEnum):
    """Obscuration codes."""

    FOG = "FG"
    MIST = "BR"
    SAND = "SA"
    DUST = "DU"
    HAZE = "HZ"
    SMOKE = "FU"
    VOLCANIC_ASH = "VA"
    SPRAY = "PY"


class OtherPhenomena(StrEnum):
    """Other weather phenomena."""

    DUST_SAND_WHIRLS = "PO"
    SQUALL = "SQ"
    FUNNEL_CLOUD = "FC"
    DUSTSTORM = "DS"
    SANDSTORM = "SS"


def tag_table(enum_cls: Type[_E]) -> Tuple[Tuple[str, _E], ...]:
    """Build an ordered (literal, variant) table from an enum.

    Members whose value is empty are not matchable and are left out.
    """
    return tuple((member.value, member) for member in enum_cls if member.value)


# Version - read from the installed distribution metadata
def _get_version() -> str:
    """Read version from package metadata."""
    try:
        return metadata.version("metar-grammar")
    except metadata.PackageNotFoundError:
        return "0.0.0"

VERSION: Final[str] = _get_version()

# Report keyword stripped before the station identifier
METAR_KEYWORD: Final[str] = "METAR"

# Tag tables (literal -> variant), tried longest literal first
REPORT_TYPE_TAGS: Final = tag_table(ReportType)
WIND_UNIT_TAGS: Final = tag_table(WindUnit)
COMPASS_TAGS: Final = tag_table(CompassDirection)
VISIBILITY_CATEGORY_TAGS: Final[Tuple[Tuple[str, VisibilityKind], ...]] = (
    ("CAVOK", VisibilityKind.CAVOK),
    ("NSC", VisibilityKind.NSC),
    ("SKC", VisibilityKind.SKC),
)
RUNWAY_POSITION_TAGS: Final = tag_table(RunwayPosition)
VISIBILITY_SCALE_TAGS: Final = tag_table(VisibilityScale)
VISIBILITY_STATUS_TAGS: Final = tag_table(VisibilityStatus)
INTENSITY_TAGS: Final = tag_table(Intensity)
CHARACTERISTIC_TAGS: Final = tag_table(Characteristic)
PRECIPITATION_TAGS: Final = tag_table(Precipitation)
OBSCURATION_TAGS: Final = tag_table(Obscuration)
OTHER_PHENOMENA_TAGS: Final = tag_table(OtherPhenomena)

# Literal for variable wind direction
WIND_VARIABLE: Final[str] = "VRB"

# Inclusive numeric bounds
DAY_BOUNDS: Final[Tuple[int, int]] = (1, 31)
HOUR_BOUNDS: Final[Tuple[int, int]] = (0, 23)
MINUTE_BOUNDS: Final[Tuple[int, int]] = (0, 59)
# Raw headings, not limited to 0-360
WIND_DIRECTION_BOUNDS: Final[Tuple[int, int]] = (0, 65535)
WIND_SPEED_BOUNDS: Final[Tuple[int, int]] = (0, 65535)
VISIBILITY_METERS_BOUNDS: Final[Tuple[int, int]] = (0, 65535)
STATUTE_MILES_BOUNDS: Final[Tuple[int, int]] = (0, 65535)
RUNWAY_NUMBER_BOUNDS: Final[Tuple[int, int]] = (-128, 127)
RVR_METERS_BOUNDS: Final[Tuple[int, int]] = (-(2**31), 2**31 - 1)

# Largest denominator used when writing statute miles back as a fraction
STATUTE_MILES_MAX_DENOMINATOR: Final[int] = STATUTE_MILES_BOUNDS[1]

# Unit conversion factors
KNOTS_TO_KMH: Final[float] = 1.852
MPS_TO_KMH: Final[float] = 3.6
MPH_TO_KMH: Final[float] = 1.60934
MILES_TO_KM: Final[float] = 1.60934

WIND_UNIT_TO_KMH: Final[Dict[WindUnit, float]] = {
    WindUnit.KT: KNOTS_TO_KMH,
    WindUnit.MPS: MPS_TO_KMH,
    WindUnit.MPH: MPH_TO_KMH,
}

# Validation
ICAO_REGEX: Final[str] = r"^[A-Z0-9]{4}$"

# Option keys
CONF_STRIP_KEYWORD: Final[str] = "strip_keyword"
CONF_PARSE_RUNWAY_RANGES: Final[str] = "parse_runway_ranges"
CONF_PARSE_PRESENT_WEATHER: Final[str] = "parse_present_weather"
CONF_STATIONS: Final[str] = "stations"
CONF_HOURS_BEFORE: Final[str] = "hours_before"
CONF_TIMEOUT: Final[str] = "timeout"

# Fetch defaults and limits
DEFAULT_HOURS_BEFORE: Final[float] = 2.0
HOURS_BEFORE_RANGE: Final[Tuple[float, float]] = (0.5, 72.0)
DEFAULT_TIMEOUT: Final[int] = 30  # seconds
TIMEOUT_RANGE: Final[Tuple[int, int]] = (1, 300)

# API configuration
AWC_API_BASE_URL: Final[str] = "https://aviationweather.gov/api/data/metar"
NOAA_CYCLES_URL: Final[str] = (
    "https://tgftp.nws.noaa.gov/data/observations/metar/cycles/{hour:02d}Z.TXT"
)
# Timestamp lines in NOAA cycle files, e.g. "2024/01/15 09:00"
NOAA_TIMESTAMP_REGEX: Final[str] = r"^\d{4}/\d{2}/\d{2} \d{2}:\d{2}$"

# Weather codes and descriptions
WEATHER_PHENOMENA: Final[Dict[str, str]] = {
    # Intensity
    '-': 'Light',
    '+': 'Heavy',
    'VC': 'Vicinity',

    # Descriptors
    'MI': 'Shallow',
    'PR': 'Partial',
    'BC': 'Patches',
    'DR': 'Low Drifting',
    'BL': 'Blowing',
    'SH': 'Shower',
    'TS': 'Thunderstorm',
    'FZ': 'Freezing',

    # Precipitation
    'DZ': 'Drizzle',
    'RA': 'Rain',
    'SN': 'Snow',
    'SG': 'Snow Grains',
    'IC': 'Ice Crystals',
    'PL': 'Ice Pellets',
    'GR': 'Hail',
    'GS': 'Small Hail',
    'UP': 'Unknown Precipitation',

    # Obscuration
    'BR': 'Mist',
    'FG': 'Fog',
    'FU': 'Smoke',
    'VA': 'Volcanic Ash',
    'DU': 'Widespread Dust',
    'SA': 'Sand',
    'HZ': 'Haze',
    'PY': 'Spray',

    # Other
    'PO': 'Dust/Sand Whirls',
    'SQ': 'Squalls',
    'FC': 'Funnel Cloud',
    'SS': 'Sandstorm',
    'DS': 'Duststorm'
}

VISIBILITY_DESCRIPTIONS: Final[Dict[str, str]] = {
    VisibilityKind.CAVOK: "Ceiling and visibility OK",
    VisibilityKind.NSC: "No significant clouds",
    VisibilityKind.SKC: "Clear sky",
}

RVR_SCALE_DESCRIPTIONS: Final[Dict[str, str]] = {
    VisibilityScale.PLUS: "more than",
    VisibilityScale.MINUS: "less than",
}

RVR_STATUS_DESCRIPTIONS: Final[Dict[str, str]] = {
    VisibilityStatus.DOWN: "decreasing",
    VisibilityStatus.UP: "increasing",
    VisibilityStatus.NO: "no change",
}

COMPASS_DESCRIPTIONS: Final[Dict[str, str]] = {
    CompassDirection.NORTH: "north",
    CompassDirection.NORTH_EAST: "north-east",
    CompassDirection.EAST: "east",
    CompassDirection.SOUTH_EAST: "south-east",
    CompassDirection.SOUTH: "south",
    CompassDirection.SOUTH_WEST: "south-west",
    CompassDirection.WEST: "west",
    CompassDirection.NORTH_WEST: "north-west",
}
