"""Tests for parsing primitives."""

import pytest

from metar_grammar.const import (
    COMPASS_TAGS,
    OTHER_PHENOMENA_TAGS,
    WIND_UNIT_TAGS,
    CompassDirection,
    WindUnit,
)
from metar_grammar.utils import (
    MetarRangeError,
    MetarSyntaxError,
    expect_literal,
    lookup_tag,
    match_tag,
    optional_tag,
    parse_bounded,
    take_number,
    validate_icao_format,
)


class TestParseBounded:
    """Tests for the bounded numeric primitive."""

    def test_value_in_bounds(self) -> None:
        """Test values on both edges are accepted."""
        assert parse_bounded("00", (0, 23), "hour") == 0
        assert parse_bounded("23", (0, 23), "hour") == 23

    def test_value_out_of_bounds_is_rejected(self) -> None:
        """Test out-of-range values fail instead of being clamped."""
        with pytest.raises(MetarRangeError) as err:
            parse_bounded("24", (0, 23), "hour")
        assert err.value.field == "hour"

    @pytest.mark.parametrize("digits", ["", "2a", " 1", "1.5", "-5"])
    def test_non_digits_are_rejected(self, digits: str) -> None:
        """Test malformed digit runs."""
        with pytest.raises(MetarSyntaxError):
            parse_bounded(digits, (0, 99), "value")

    def test_signed_values(self) -> None:
        """Test a leading sign when allowed."""
        assert parse_bounded("-5", (-128, 127), "runway number", signed=True) == -5
        assert parse_bounded("+7", (-128, 127), "runway number", signed=True) == 7

    def test_take_number_consumes_digit_run(self) -> None:
        """Test the digit run is consumed and the rest returned."""
        assert take_number("1075N", (0, 9999), "distance") == (1075, "N")

    def test_take_number_requires_digits(self) -> None:
        """Test an empty digit run fails."""
        with pytest.raises(MetarSyntaxError) as err:
            take_number("KT", (0, 999), "wind speed")
        assert err.value.remainder == "KT"


class TestTags:
    """Tests for the tag matching primitive."""

    def test_two_letter_compass_tag_wins(self) -> None:
        """Test NW is not read as N followed by a dangling W."""
        assert match_tag("NW rest", COMPASS_TAGS, "direction") == (
            CompassDirection.NORTH_WEST,
            " rest",
        )

    def test_single_letter_compass_tag(self) -> None:
        """Test single letters still match."""
        assert match_tag("S", COMPASS_TAGS, "direction") == (CompassDirection.SOUTH, "")

    def test_longest_literal_first_regardless_of_table_order(self) -> None:
        """Test declaration order does not let a prefix shadow a longer tag."""
        table = (("N", "north"), ("NW", "north-west"))
        assert match_tag("NWX", table, "direction") == ("north-west", "X")

    def test_matching_ignores_case(self) -> None:
        """Test lowercase input matches."""
        assert match_tag("kt", WIND_UNIT_TAGS, "wind unit") == (WindUnit.KT, "")

    def test_no_match_raises(self) -> None:
        """Test an unknown tag fails."""
        with pytest.raises(MetarSyntaxError):
            match_tag("XYZ", COMPASS_TAGS, "direction")

    def test_optional_tag_does_not_consume(self) -> None:
        """Test optional matching leaves input untouched."""
        assert optional_tag("XYZ", COMPASS_TAGS, "direction") == (None, "XYZ")

    def test_lookup_requires_whole_token(self) -> None:
        """Test exact lookup of a token."""
        assert lookup_tag("mps", WIND_UNIT_TAGS, "wind unit", "mps") == WindUnit.MPS
        with pytest.raises(MetarSyntaxError):
            lookup_tag("KTS", WIND_UNIT_TAGS, "wind unit", "KTS")

    def test_structural_literal_is_case_sensitive(self) -> None:
        """Test literals such as the time terminator."""
        assert expect_literal("Z rest", "Z", "time") == " rest"
        with pytest.raises(MetarSyntaxError):
            expect_literal("z rest", "Z", "time")

    def test_non_ascii_never_matches(self) -> None:
        """Test characters whose upper case spells a tag."""
        with pytest.raises(MetarSyntaxError):
            match_tag("\u00df", OTHER_PHENOMENA_TAGS, "other phenomena")
        assert optional_tag("\u00df RA", OTHER_PHENOMENA_TAGS, "other phenomena") == (
            None,
            "\u00df RA",
        )
        with pytest.raises(MetarSyntaxError):
            lookup_tag("\u00df", (("SS", "sandstorm"),), "other phenomena", "\u00df")


class TestErrors:
    """Tests for error reporting."""

    def test_locate_sets_offset(self) -> None:
        """Test the failure position is computed from the remainder."""
        err = MetarSyntaxError("Bad time", "time", "XYZ")
        err.locate("ABC XYZ")
        assert err.offset == 4
        assert "near position 4" in str(err)

    def test_message_without_offset(self) -> None:
        """Test plain message before locating."""
        assert str(MetarSyntaxError("Bad time", "time", "XYZ")) == "Bad time"


@pytest.mark.parametrize(
    ("icao", "expected"),
    [("KJFK", True), ("egll", True), ("KJF", False), ("KJFK1", False), ("", False)],
)
def test_validate_icao_format(icao: str, expected: bool) -> None:
    """Test ICAO code validation."""
    assert validate_icao_format(icao) is expected
