"""
Person API: CSV Line Codec Unit Tests
========================================

What:  Tests for line parsing, address splitting, formatting and the color table.
How:   Pure function calls; no files involved.
"""

import pytest

from person_api.models.person import Person
from person_api.services import csv_format


class TestParseLine:
    """Tests for parse_line()."""

    def test_parses_valid_line_with_line_number_as_id(self):
        person = csv_format.parse_line(7, "Müller, Hans, 67742 Lauterecken, 1")

        assert person == Person(
            id=7,
            name="Hans",
            last_name="Müller",
            zip_code="67742",
            city="Lauterecken",
            color="blau",
        )

    def test_trims_fields_and_tolerates_line_terminator(self):
        person = csv_format.parse_line(1, "  Petersen ,Peter,  18439 Stralsund  , 2 \n")

        assert person.last_name == "Petersen"
        assert person.name == "Peter"
        assert person.zip_code == "18439"
        assert person.city == "Stralsund"
        assert person.color == "grün"

    def test_city_keeps_inner_spaces(self):
        person = csv_format.parse_line(1, "Andersson, Anders, 32132 Schweden - ☀, 2")

        assert person.zip_code == "32132"
        assert person.city == "Schweden - ☀"

    def test_special_characters(self):
        person = csv_format.parse_line(1, "Anderßon, ÄndérŞ, 321-32 Schweden - ☀, 1")

        assert person.name == "ÄndérŞ"
        assert person.last_name == "Anderßon"
        assert person.zip_code == "321-32"
        assert person.city == "Schweden - ☀"
        assert person.color == "blau"

    def test_unknown_color_code_is_unbekannt(self):
        person = csv_format.parse_line(1, "Müller, Hans, 67742 Lauterecken, 999")
        assert person.color == "unbekannt"

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "   ",
            "Bart, Bertram",
            "Bart, Bertram,",
            "Müller, Hans, 67742 Lauterecken, 1, extra, field",
            "Meyer, Achim, 12345, 2",
            ", Hans, 67742 Lauterecken, 1",
            "Müller, , 67742 Lauterecken, 1",
            "Müller, Hans, , 1",
            "Müller, Hans, 67742 Lauterecken, ",
            "12313 Wasweißich, 1",
        ],
    )
    def test_malformed_lines_are_skipped(self, line):
        assert csv_format.parse_line(1, line) is None


class TestSplitAddress:
    """Tests for split_address()."""

    def test_zip_and_city(self):
        assert csv_format.split_address("67742 Lauterecken") == ("67742", "Lauterecken")

    def test_multi_word_city(self):
        assert csv_format.split_address("12345 Bad Homburg vor der Höhe") == (
            "12345",
            "Bad Homburg vor der Höhe",
        )

    def test_single_token_is_rejected(self):
        assert csv_format.split_address("12345") is None

    def test_empty_city_is_rejected(self):
        assert csv_format.split_address("12345 ") is None

    def test_empty_zip_is_rejected(self):
        assert csv_format.split_address(" Berlin") is None


class TestColors:
    """Tests for the color table lookups."""

    @pytest.mark.parametrize(
        "code,name",
        [("1", "blau"), ("2", "grün"), ("3", "violett"), ("4", "rot"),
         ("5", "gelb"), ("6", "türkis"), ("7", "weiß")],
    )
    def test_table_is_bidirectional(self, code, name):
        assert csv_format.color_name_for_code(code) == name
        assert csv_format.color_code_for_name(name) == code

    def test_reverse_lookup_ignores_case_and_whitespace(self):
        assert csv_format.color_code_for_name("  ROT ") == "4"
        assert csv_format.color_code_for_name("Türkis") == "6"

    @pytest.mark.parametrize("name", ["zinober", "unbekannt", "", "4"])
    def test_unknown_names_have_no_code(self, name):
        assert csv_format.color_code_for_name(name) is None

    def test_unknown_code_maps_to_unbekannt(self):
        assert csv_format.color_name_for_code("0") == csv_format.UNKNOWN_COLOR


def test_format_line_writes_color_code():
    person = Person(id=4, name="John", last_name="Doe", zip_code="12345", city="Berlin", color="rot")
    assert csv_format.format_line(person, "4") == "Doe, John, 12345 Berlin, 4"
