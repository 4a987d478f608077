"""
Clients fetching raw METAR bulletins.

Aviation Weather Center (AWC) REST API for selected stations and NOAA
cycle files for the complete hourly collection. Fetched lines are handed
to the report parser one by one.

API Documentation: https://aviationweather.gov/data/api/

@license: CC BY-NC-SA 4.0 International
@github: https://github.com/smkrv/ha-metar-weather
"""
from __future__ import annotations

import asyncio
import logging
import re
from typing import Iterable, List, Optional, Sequence, Tuple

import aiohttp

from .config import ParserOptions
from .const import (
    AWC_API_BASE_URL,
    DEFAULT_HOURS_BEFORE,
    DEFAULT_TIMEOUT,
    NOAA_CYCLES_URL,
    NOAA_TIMESTAMP_REGEX,
)
from .metar_parser import Report, parse_report
from .utils import MetarParseError

_LOGGER = logging.getLogger(__name__)

_TIMESTAMP = re.compile(NOAA_TIMESTAMP_REGEX)


class AWCApiError(Exception):
    """Exception for AWC API and NOAA download errors."""


def extract_report_lines(text: str) -> List[str]:
    """Return report lines from a bulletin, dropping blanks and timestamps."""
    lines = []
    for line in text.splitlines():
        line = line.strip()
        if not line or _TIMESTAMP.match(line):
            continue
        lines.append(line)
    return lines


def parse_lines(
    lines: Iterable[str],
    options: Optional[ParserOptions] = None,
) -> Tuple[List[Report], List[Tuple[str, MetarParseError]]]:
    """Parse each line independently.

    Args:
        lines: Raw report lines
        options: Parser options

    Returns:
        Tuple of parsed reports and (line, error) pairs for malformed lines
    """
    reports: List[Report] = []
    failures: List[Tuple[str, MetarParseError]] = []
    for line in lines:
        try:
            reports.append(parse_report(line, options))
        except MetarParseError as err:
            _LOGGER.warning("Skipping malformed METAR %r: %s", line, err)
            failures.append((line, err))
    _LOGGER.debug("Parsed %d report(s), %d failure(s)", len(reports), len(failures))
    return reports, failures


class AWCApiClient:
    """Client for the Aviation Weather Center REST API and NOAA cycle files."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        timeout: int = DEFAULT_TIMEOUT,
        options: Optional[ParserOptions] = None,
    ) -> None:
        """Initialize the client.

        Args:
            session: Shared aiohttp session
            timeout: Total request timeout in seconds
            options: Parser options for ``fetch_reports``
        """
        self.session = session
        self.timeout = timeout
        self.options = options or ParserOptions()

    async def _get_text(self, url: str, params: Optional[dict] = None) -> Optional[str]:
        """GET ``url`` and return the body, or None when there is no data."""
        try:
            _LOGGER.debug("Fetching %s with %s", url, params)

            async with self.session.get(
                url,
                params=params,
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as response:
                if response.status == 200:
                    return await response.text()

                elif response.status == 204:
                    _LOGGER.warning("No METAR data available for %s", params or url)
                    return None

                elif response.status == 400:
                    text = await response.text()
                    _LOGGER.error("AWC API bad request: %s", text)
                    raise AWCApiError(f"Invalid request: {text}")

                elif response.status == 429:
                    _LOGGER.warning("AWC API rate limit exceeded")
                    raise AWCApiError("Rate limit exceeded")

                else:
                    text = await response.text()
                    _LOGGER.error(
                        "API error: status=%s, response=%s",
                        response.status,
                        text
                    )
                    raise AWCApiError(f"API error: {response.status}")

        except aiohttp.ClientError as err:
            _LOGGER.error("Connection error for %s: %s", url, err)
            raise AWCApiError(f"Connection error: {err}") from err

        except (TimeoutError, asyncio.TimeoutError) as err:
            _LOGGER.error("Request timeout for %s", url)
            raise AWCApiError("Request timeout") from err

    async def fetch_raw_metars(
        self,
        station_ids: str | Sequence[str],
        hours_before: float = DEFAULT_HOURS_BEFORE,
    ) -> List[str]:
        """Fetch raw METAR lines from the AWC API.

        Args:
            station_ids: Single ICAO code or list of ICAO codes
            hours_before: Hours of data to retrieve

        Returns:
            Raw report lines, empty when the API has no data
        """
        if isinstance(station_ids, str):
            ids = station_ids.upper()
        else:
            ids = ",".join(s.upper() for s in station_ids)

        params = {
            "ids": ids,
            "format": "raw",
            "hours": hours_before,
        }
        text = await self._get_text(AWC_API_BASE_URL, params)
        return extract_report_lines(text) if text else []

    async def fetch_cycle(self, hour: int) -> List[str]:
        """Fetch all raw METAR lines of a NOAA hourly cycle file.

        Args:
            hour: UTC cycle hour (0-23)
        """
        if not 0 <= hour <= 23:
            raise ValueError(f"Cycle hour must be 0-23, got {hour}")
        text = await self._get_text(NOAA_CYCLES_URL.format(hour=hour))
        return extract_report_lines(text) if text else []

    async def fetch_reports(
        self,
        station_ids: str | Sequence[str],
        hours_before: float = DEFAULT_HOURS_BEFORE,
    ) -> List[Report]:
        """Fetch and parse reports, skipping malformed lines."""
        lines = await self.fetch_raw_metars(station_ids, hours_before)
        reports, _ = parse_lines(lines, self.options)
        return reports
