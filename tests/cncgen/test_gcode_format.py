"""Tests for cncgen/utils/gcode_format.py."""
import io

import pytest

from cncgen.moves import feed_move, rapid
from cncgen.utils.gcode_format import (
    format_number,
    format_move,
    write_move,
    generate_comment,
    generate_preamble,
    generate_trailer
)


class TestFormatNumber:
    """Tests for numeric formatting."""

    @pytest.mark.parametrize("value,expected", [
        (12.0, "12."),
        (12, "12."),
        (-3.0, "-3."),
        (0.0, "0."),
        (-0.0, "0."),
        (1000000.0, "1000000."),
        (0.1, "0.1000"),
        (-0.25, "-0.2500"),
        (1.23456, "1.2346"),
        (2.5, "2.5000"),
    ])
    def test_format_number(self, value, expected):
        assert format_number(value) == expected


class TestFormatMove:
    """Tests for move line rendering."""

    def test_rapid_xy(self):
        assert format_move(rapid(x=1.0, y=2.5)) == "G0 X1. Y2.5000"

    def test_feed_with_all_axes(self):
        move = feed_move(100.0, a=90.0, x=1.5, z=-0.25, y=0.0)
        assert format_move(move) == "G1 X1.5000 Y0. Z-0.2500 A90. F100."

    def test_fractional_feed(self):
        assert format_move(feed_move(33.333333, z=0.0)) == "G1 Z0. F33.3333"

    def test_custom_command(self):
        assert format_move(rapid(x=1.0), "G00") == "G00 X1."

    def test_write_move_newline(self):
        sink = io.StringIO()
        write_move(sink, rapid(x=1.0, y=2.0))
        write_move(sink, feed_move(50.0, z=-1.0))
        assert sink.getvalue() == "G0 X1. Y2.\nG1 Z-1. F50.\n"


class TestBoilerplate:
    """Tests for comment, preamble and trailer generation."""

    def test_comment(self):
        assert generate_comment("Tooth 1 of 20") == "(Tooth 1 of 20)"

    def test_preamble_with_name(self):
        lines = generate_preamble("Dial", 17, "T17 D=0.5 engraver", 8000, False)

        assert lines[0] == "(Dial)"
        assert lines[1] == "(T17 D=0.5 engraver)"
        assert "G90 (Absolute)" in lines
        assert "G21 (Metric)" in lines
        assert "G30 (Go Home Before Starting)" in lines
        assert lines[-2] == "T17 G43 H17 M6"
        assert lines[-1] == "S8000 M3"
        assert "M8" not in lines

    def test_preamble_without_name(self):
        lines = generate_preamble(None, 3, "T3 D=6.35 end mill", 650, False)
        assert lines[0] == "(T3 D=6.35 end mill)"

    def test_preamble_coolant(self):
        lines = generate_preamble(None, 1, "T1", 8000, True)
        assert lines[-1] == "M8"

    def test_preamble_fractional_rpm(self):
        lines = generate_preamble(None, 1, "T1", 650.5, False)
        assert "S650.5 M3" in lines

    def test_trailer(self):
        assert generate_trailer() == ["M9 (Coolant off)", "M5 (Spindle off)", "M30"]
