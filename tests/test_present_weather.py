"""Tests for the present weather parser."""

from metar_grammar.const import (
    Characteristic,
    Intensity,
    Obscuration,
    OtherPhenomena,
    Precipitation,
)
from metar_grammar.present_weather import (
    PresentWeather,
    parse_present_weather,
    parse_present_weather_groups,
)


class TestParsePresentWeather:
    """Tests for single weather groups."""

    def test_thunderstorm(self) -> None:
        """Test a characteristic on its own."""
        assert parse_present_weather("TS") == (
            PresentWeather(characteristic=Characteristic.THUNDERSTORM),
            "",
        )

    def test_heavy_rain(self) -> None:
        """Test intensity followed by precipitation."""
        assert parse_present_weather("+RA") == (
            PresentWeather(intensity=Intensity.HEAVY, precipitation=Precipitation.RAIN),
            "",
        )

    def test_codes_separated_by_whitespace(self) -> None:
        """Test codes split by spaces fill one group."""
        weather, rest = parse_present_weather("+SH RA FG")
        assert weather == PresentWeather(
            intensity=Intensity.HEAVY,
            characteristic=Characteristic.SHOWER,
            obscuration=Obscuration.FOG,
            precipitation=Precipitation.RAIN,
        )
        assert rest == ""

    def test_intensity_only_opens_a_group(self) -> None:
        """Test a trailing intensity is left unconsumed."""
        weather, rest = parse_present_weather("SH UP VC")
        assert weather == PresentWeather(
            characteristic=Characteristic.SHOWER,
            precipitation=Precipitation.UNKNOWN_PRECIPITATION,
        )
        assert rest == " VC"

    def test_repeated_family_starts_next_group(self) -> None:
        """Test a second obscuration is left for the next group."""
        weather, rest = parse_present_weather("DU VA PO")
        assert weather == PresentWeather(obscuration=Obscuration.DUST)
        assert rest == " VA PO"

    def test_partial_fog(self) -> None:
        """Test a characteristic with an obscuration."""
        weather, _ = parse_present_weather("PR FG")
        assert weather == PresentWeather(
            characteristic=Characteristic.PARTIAL, obscuration=Obscuration.FOG
        )

    def test_nothing_to_parse(self) -> None:
        """Test no input is consumed without a match."""
        assert parse_present_weather("") == (PresentWeather(), "")
        weather, rest = parse_present_weather("BKN022")
        assert weather.is_empty
        assert rest == "BKN022"


class TestParsePresentWeatherGroups:
    """Tests for weather group lists."""

    def test_one_group_per_token(self) -> None:
        """Test several groups before the cloud groups."""
        groups, rest = parse_present_weather_groups(" +SHRA BR VCTS BKN022")
        assert groups == [
            PresentWeather(
                intensity=Intensity.HEAVY,
                characteristic=Characteristic.SHOWER,
                precipitation=Precipitation.RAIN,
            ),
            PresentWeather(obscuration=Obscuration.MIST),
            PresentWeather(
                intensity=Intensity.VICINITY,
                characteristic=Characteristic.THUNDERSTORM,
            ),
        ]
        assert rest == " BKN022"

    def test_empty_list(self) -> None:
        """Test input without weather groups."""
        assert parse_present_weather_groups("") == ([], "")
        assert parse_present_weather_groups(" OVC008") == ([], " OVC008")

    def test_stops_at_partially_matching_token(self) -> None:
        """Test a token that is not fully consumed ends the list."""
        groups, rest = parse_present_weather_groups("BR FGX")
        assert groups == [PresentWeather(obscuration=Obscuration.MIST)]
        assert rest == " FGX"

    def test_other_phenomena(self) -> None:
        """Test squalls and funnel clouds."""
        groups, _ = parse_present_weather_groups("SQ +FC")
        assert groups[0].other_phenomena == OtherPhenomena.SQUALL
        assert groups[1] == PresentWeather(
            intensity=Intensity.HEAVY, other_phenomena=OtherPhenomena.FUNNEL_CLOUD
        )


class TestPresentWeather:
    """Tests for the weather record."""

    def test_to_metar_uses_writing_order(self) -> None:
        """Test precipitation is written before obscuration."""
        weather = PresentWeather(
            intensity=Intensity.HEAVY,
            characteristic=Characteristic.SHOWER,
            obscuration=Obscuration.FOG,
            precipitation=Precipitation.RAIN,
        )
        assert weather.to_metar() == "+SHRAFG"
        assert weather.describe() == "Heavy Shower Rain Fog"

    def test_is_empty(self) -> None:
        """Test the empty group."""
        assert PresentWeather().is_empty
        assert not PresentWeather(obscuration=Obscuration.SPRAY).is_empty
