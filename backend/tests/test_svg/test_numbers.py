"""Tests for number lexing."""

import pytest

from svgscene.errors import PathSyntaxError
from svgscene.svg.numbers import PathScanner, parse_number_list, parse_numbers


def test_run_together_numbers():
    assert parse_numbers("1.5-2.3e-1,4").numbers == pytest.approx([1.5, -0.23, 4.0])


def test_second_decimal_point_starts_a_number():
    assert parse_numbers("0.5.5").numbers == pytest.approx([0.5, 0.5])


def test_exponent_sign_belongs_to_the_number():
    assert parse_numbers("1e2-3 4E+1").numbers == pytest.approx([100.0, -3.0, 40.0])


def test_stops_at_command_letter():
    result = parse_numbers("10 20L30 40")
    assert result.numbers == [10.0, 20.0]
    assert result.next_index == 5


def test_stops_at_closing_paren():
    result = parse_numbers("1,2)")
    assert result.numbers == [1.0, 2.0]
    assert result.next_index == 3


def test_start_offset():
    assert parse_numbers("translate(3 4)", 10).numbers == [3.0, 4.0]


def test_trailing_whitespace_is_ignored():
    assert parse_numbers("1 2 \n\t ").numbers == [1.0, 2.0]


def test_bad_fragment_raises():
    with pytest.raises(ValueError):
        parse_numbers("1 x 2")


def test_number_list_rejects_trailing_data():
    assert parse_number_list("0 0 24 24") == [0.0, 0.0, 24.0, 24.0]
    with pytest.raises(ValueError):
        parse_number_list("1 2 )")


def test_scanner_reads_packed_arc_flags():
    ph = PathScanner("1 1 0 0110 10")
    assert [ph.next_float(), ph.next_float(), ph.next_float()] == [1.0, 1.0, 0.0]
    assert ph.next_flag() == 0
    assert ph.next_flag() == 1
    assert ph.next_float() == 10.0
    assert ph.next_float() == 10.0
    assert ph.at_end()


def test_scanner_raises_on_missing_number():
    ph = PathScanner("  L")
    with pytest.raises(PathSyntaxError):
        ph.next_float()
    with pytest.raises(PathSyntaxError):
        PathScanner("2").next_flag()
