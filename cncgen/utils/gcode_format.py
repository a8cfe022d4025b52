"""G-code formatting utilities.

Numbers are written the way the machine post expects: integral values as
`12.` (trailing point, no decimals), everything else with 4 decimals.
"""
from typing import IO, List, Optional

from ..moves import MoveDescriptor

INVERSE_TIME_FEED = "G93 (Inverse time feed)"
UNITS_PER_MINUTE_FEED = "G94 (Feed per minute)"


def format_number(value: float) -> str:
    """
    Format a coordinate or feed value.

    Args:
        value: The value to format

    Returns:
        `N.` for integral values, otherwise 4 fractional digits
    """
    if value == 0:
        # Avoid rendering negative zero as "-0."
        return "0."
    if value == round(value):
        return f"{value:.0f}."
    return f"{value:.4f}"


def format_move(move: MoveDescriptor, command: Optional[str] = None) -> str:
    """
    Render a move as a single G-code line (without newline).

    Args:
        move: The validated move
        command: Command token, defaults to the move kind's (G0 or G1)

    Returns:
        Command followed by axis words in X, Y, Z, A order and F last
    """
    parts = [command if command is not None else move.command]
    for letter, value in move.axis_words():
        parts.append(f"{letter}{format_number(value)}")
    if move.feed is not None:
        parts.append(f"F{format_number(move.feed)}")
    return " ".join(parts)


def write_move(sink: IO[str], move: MoveDescriptor, command: Optional[str] = None) -> None:
    """Write one rendered move terminated by a single newline."""
    sink.write(format_move(move, command) + "\n")


def generate_comment(text: str) -> str:
    """Wrap text as a G-code comment."""
    return f"({text})"


def generate_preamble(
    name: Optional[str],
    tool: int,
    description: str,
    rpm: float,
    coolant: bool
) -> List[str]:
    """
    Generate the program preamble.

    Args:
        name: Job name, written as the first comment when set
        tool: Tool number
        description: Tool description comment (e.g. "T17 D=0.5 engraver")
        rpm: Spindle speed
        coolant: Turn flood coolant on after the spindle starts

    Returns:
        List of G-code preamble lines
    """
    lines = []
    if name:
        lines.append(generate_comment(name))
    lines.append(generate_comment(description))
    lines.extend([
        "",
        "G90 (Absolute)",
        "G54 (G54 Datum)",
        "G17 (X-Y Plane)",
        "G40 (No cutter compensation)",
        "G80 (No cycles)",
        UNITS_PER_MINUTE_FEED,
        "G91.1 (Arc absolute mode)",
        "G49 (No tool length compensation)",
        "M9 (Coolant off)",
        "",
        "G21 (Metric)",
        "",
        "G30 (Go Home Before Starting)",
        "",
        f"T{tool} G43 H{tool} M6",
        f"S{format_spindle_speed(rpm)} M3",
    ])
    if coolant:
        lines.append("M8")
    return lines


def generate_trailer() -> List[str]:
    """Generate the program trailer: coolant off, spindle off, end."""
    return [
        "M9 (Coolant off)",
        "M5 (Spindle off)",
        "M30",
    ]


def format_spindle_speed(rpm: float) -> str:
    # Spindle words are plain integers when possible
    if rpm == round(rpm):
        return str(int(rpm))
    return str(rpm)
