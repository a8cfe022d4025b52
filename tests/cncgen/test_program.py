"""Tests for cncgen/program.py."""
import io

from cncgen.moves import feed_move, rapid
from cncgen.program import GCodeProgram


class TestGCodeProgram:
    """Tests for the program line buffer."""

    def test_empty(self):
        program = GCodeProgram()
        assert program.text() == ""
        assert program.line_count == 0
        assert program.moves == []

    def test_lines_in_order(self):
        program = GCodeProgram()
        program.comment("Pass 1")
        program.add_move(rapid(z=1.0))
        program.add_moves([rapid(x=1.0, y=1.0), feed_move(60.0, z=-0.5)])
        program.add_lines(["M30"])

        assert program.text() == "(Pass 1)\nG0 Z1.\nG0 X1. Y1.\nG1 Z-0.5000 F60.\nM30\n"
        assert program.line_count == 5
        assert len(program.moves) == 3

    def test_custom_command(self):
        program = GCodeProgram()
        program.add_move(rapid(a=45.0), "G00")
        assert program.lines == ["G00 A45."]

    def test_write_to_matches_text(self):
        program = GCodeProgram()
        program.add_move(rapid(x=2.0))
        program.add_lines(["", "M30"])

        stream = io.StringIO()
        program.write_to(stream)

        assert stream.getvalue() == program.text() == "G0 X2.\n\nM30\n"

    def test_lines_copy(self):
        """Returned lists do not alias the buffer."""
        program = GCodeProgram()
        program.comment("a")
        program.lines.append("b")
        assert program.lines == ["(a)"]
