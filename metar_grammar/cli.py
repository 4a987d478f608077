"""
Command line interface for the METAR grammar parser.

@license: CC BY-NC-SA 4.0 International
@github: https://github.com/smkrv/ha-metar-weather
@source: https://github.com/smkrv/ha-metar-weather
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Iterable, List, Optional, TextIO

import aiohttp

from .awc_client import AWCApiClient, AWCApiError
from .config import FetchOptions, InvalidOptionsError, ParserOptions
from .const import (
    CONF_HOURS_BEFORE,
    CONF_PARSE_PRESENT_WEATHER,
    CONF_PARSE_RUNWAY_RANGES,
    CONF_STATIONS,
    CONF_STRIP_KEYWORD,
    CONF_TIMEOUT,
    DEFAULT_HOURS_BEFORE,
    DEFAULT_TIMEOUT,
    VERSION,
)
from .metar_parser import MetarParser
from .utils import MetarParseError

_LOGGER = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="metar-grammar",
        description="Parse METAR weather reports into structured JSON.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument(
        "--no-runway-ranges", action="store_true", help="leave RVR groups in the remainder"
    )
    parser.add_argument(
        "--no-present-weather", action="store_true", help="leave weather groups in the remainder"
    )
    parser.add_argument(
        "--keep-keyword", action="store_true", help="do not strip a leading METAR keyword"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="parse report lines (stdin when none given)")
    parse_cmd.add_argument("lines", nargs="*", help="raw METAR lines")

    fetch_cmd = subparsers.add_parser("fetch", help="fetch and parse reports from the AWC API")
    fetch_cmd.add_argument("stations", nargs="+", help="ICAO station codes")
    fetch_cmd.add_argument("--hours", type=float, default=DEFAULT_HOURS_BEFORE)
    fetch_cmd.add_argument("--timeout", type=int, default=DEFAULT_TIMEOUT)

    cycle_cmd = subparsers.add_parser("cycle", help="fetch and parse a NOAA hourly cycle file")
    cycle_cmd.add_argument("hour", type=int, help="UTC cycle hour (0-23)")
    cycle_cmd.add_argument("--station", help="only lines containing this station code")
    cycle_cmd.add_argument("--timeout", type=int, default=DEFAULT_TIMEOUT)

    return parser


def _emit(lines: Iterable[str], options: ParserOptions, out: TextIO, err: TextIO) -> int:
    """Parse lines and print one JSON document per report."""
    status = 0
    for line in lines:
        line = line.strip()
        if not line:
            continue
        try:
            data = MetarParser(line, options).get_parsed_data()
        except MetarParseError as error:
            print(f"error: {error}: {line}", file=err)
            status = 1
            continue
        print(json.dumps(data), file=out)
    return status


async def _fetch_lines(args: argparse.Namespace) -> List[str]:
    """Download raw lines for the fetch and cycle commands."""
    if args.command == "fetch":
        fetch = FetchOptions.from_dict({
            CONF_STATIONS: args.stations,
            CONF_HOURS_BEFORE: args.hours,
            CONF_TIMEOUT: args.timeout,
        })
        async with aiohttp.ClientSession() as session:
            client = AWCApiClient(session, timeout=fetch.timeout)
            return await client.fetch_raw_metars(fetch.stations, fetch.hours_before)

    async with aiohttp.ClientSession() as session:
        client = AWCApiClient(session, timeout=args.timeout)
        lines = await client.fetch_cycle(args.hour)
    if args.station:
        station = args.station.upper()
        lines = [line for line in lines if station in line]
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line interface."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    try:
        options = ParserOptions.from_dict({
            CONF_STRIP_KEYWORD: not args.keep_keyword,
            CONF_PARSE_RUNWAY_RANGES: not args.no_runway_ranges,
            CONF_PARSE_PRESENT_WEATHER: not args.no_present_weather,
        })

        if args.command == "parse":
            lines = args.lines or sys.stdin
        else:
            lines = asyncio.run(_fetch_lines(args))
    except InvalidOptionsError as err:
        parser.error(str(err))
    except (AWCApiError, ValueError) as err:
        _LOGGER.error("Failed to fetch reports: %s", err)
        return 2

    return _emit(lines, options, sys.stdout, sys.stderr)
