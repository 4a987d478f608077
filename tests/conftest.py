"""Shared fixtures for METAR grammar tests."""

import pytest

SAMPLE_REPORTS = [
    "METAR LICJ 141600Z 120120G50KT 090V150 CAVOK",
    "LICJ 141600Z 12012MPS 090V150 1400 R04/P1500N R22/P1500U +SN BKN022 OVC050 "
    "M04/M07 Q1020 NOSIG 8849//91=",
    "METAR KJFK 151251Z AUTO 27010KT 10SM FEW250 05/02 A3012",
    "KSEA 251756Z 18012KT 1 1/2SM -RA BR OVC008 10/08 A2985",
    "EGLL 141050Z 24015KT 2000 1200NW R27L/1100U +TSRA",
    "UUEE 010030Z VRB02MPS 0800 R24/0550D FG VV002",
    "KORD 121200Z 00000KT 1/4SM FZFG VV001",
]


@pytest.fixture(params=SAMPLE_REPORTS)
def sample_report(request) -> str:
    """Yield each sample report line."""
    return request.param


@pytest.fixture
def licj_report() -> str:
    """Return a report carrying RVR and weather groups."""
    return SAMPLE_REPORTS[1]
