"""Ordered, append-only G-code program buffer."""
from typing import IO, Iterable, List, Optional

from .moves import MoveDescriptor
from .utils.gcode_format import format_move, generate_comment


class GCodeProgram:
    """
    Collects G-code lines in emission order.

    Moves are rendered as they are added; the descriptors are kept as well
    so callers (e.g. the toolpath preview) can inspect what was emitted.
    """

    def __init__(self):
        self._lines: List[str] = []
        self._moves: List[MoveDescriptor] = []

    def comment(self, text: str) -> None:
        self._lines.append(generate_comment(text))

    def add_move(self, move: MoveDescriptor, command: Optional[str] = None) -> None:
        self._lines.append(format_move(move, command))
        self._moves.append(move)

    def add_moves(self, moves: Iterable[MoveDescriptor]) -> None:
        for move in moves:
            self.add_move(move)

    def add_lines(self, lines: Iterable[str]) -> None:
        """Append raw lines (preamble, trailer, blank separators)."""
        self._lines.extend(lines)

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    @property
    def moves(self) -> List[MoveDescriptor]:
        return list(self._moves)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def text(self) -> str:
        """Full program text, one instruction per line, newline terminated."""
        return "".join(line + "\n" for line in self._lines)

    def write_to(self, stream: IO[str]) -> None:
        for line in self._lines:
            stream.write(line + "\n")
