"""Tests for the AWC API client."""

import asyncio

import aiohttp
import pytest

from metar_grammar.awc_client import (
    AWCApiClient,
    AWCApiError,
    extract_report_lines,
    parse_lines,
)
from metar_grammar.const import AWC_API_BASE_URL

CYCLE_TEXT = """2024/01/15 09:00
KTEB 150851Z 31008KT 10SM FEW250 M02/M14 A3034

2024/01/15 09:00
KJFK 150851Z 32012G20KT 10SM SKC M01/M15 A3035
"""


class FakeResponse:
    """Minimal stand-in for an aiohttp response."""

    def __init__(self, status: int = 200, text: str = "") -> None:
        self.status = status
        self._text = text

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info) -> bool:
        return False


class FakeSession:
    """Records requests and replays a canned response or error."""

    def __init__(self, response: FakeResponse = None, error: Exception = None) -> None:
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params))
        if self.error is not None:
            raise self.error
        return self.response


class TestHelpers:
    """Tests for bulletin helpers."""

    def test_extract_report_lines(self) -> None:
        """Test blanks and timestamps are dropped."""
        lines = extract_report_lines(CYCLE_TEXT)
        assert len(lines) == 2
        assert lines[0].startswith("KTEB")

    def test_parse_lines_collects_failures(self) -> None:
        """Test malformed lines are reported, not raised."""
        reports, failures = parse_lines(["KTEB 150851Z 31008KT 10SM", "KTEB garbage"])
        assert [report.station for report in reports] == ["KTEB"]
        assert failures[0][0] == "KTEB garbage"


class TestAWCApiClient:
    """Tests for AWCApiClient."""

    async def test_fetch_raw_metars(self) -> None:
        """Test request parameters and returned lines."""
        session = FakeSession(FakeResponse(200, CYCLE_TEXT))
        client = AWCApiClient(session)

        lines = await client.fetch_raw_metars(["kteb", "kjfk"], hours_before=3)

        assert len(lines) == 2
        assert session.calls == [
            (AWC_API_BASE_URL, {"ids": "KTEB,KJFK", "format": "raw", "hours": 3})
        ]

    async def test_no_content(self) -> None:
        """Test 204 yields no lines."""
        client = AWCApiClient(FakeSession(FakeResponse(204)))
        assert await client.fetch_raw_metars("KTEB") == []

    @pytest.mark.parametrize(
        ("status", "message"),
        [(400, "Invalid request"), (429, "Rate limit"), (500, "API error: 500")],
    )
    async def test_error_status(self, status: int, message: str) -> None:
        """Test error statuses raise AWCApiError."""
        client = AWCApiClient(FakeSession(FakeResponse(status, "oops")))
        with pytest.raises(AWCApiError, match=message):
            await client.fetch_raw_metars("KTEB")

    @pytest.mark.parametrize(
        "error", [aiohttp.ClientConnectionError("refused"), asyncio.TimeoutError()]
    )
    async def test_transport_errors(self, error: Exception) -> None:
        """Test connection errors and timeouts are wrapped."""
        client = AWCApiClient(FakeSession(error=error))
        with pytest.raises(AWCApiError) as err:
            await client.fetch_raw_metars("KTEB")
        assert err.value.__cause__ is error

    async def test_fetch_cycle(self) -> None:
        """Test the cycle file URL."""
        session = FakeSession(FakeResponse(200, CYCLE_TEXT))
        lines = await AWCApiClient(session).fetch_cycle(9)
        assert session.calls[0][0].endswith("/cycles/09Z.TXT")
        assert len(lines) == 2

    async def test_fetch_cycle_rejects_bad_hour(self) -> None:
        """Test hours outside 0-23."""
        with pytest.raises(ValueError):
            await AWCApiClient(FakeSession()).fetch_cycle(24)

    async def test_fetch_reports_skips_malformed(self) -> None:
        """Test malformed lines are skipped."""
        text = "KTEB 150851Z 31008KT 10SM\nKTEB 159951Z 31008KT 10SM\n"
        client = AWCApiClient(FakeSession(FakeResponse(200, text)))
        reports = await client.fetch_reports("KTEB")
        assert len(reports) == 1
        assert reports[0].wind.speed == 8
