"""Reusable path builders for engraved dial patterns.

These produce either finished move lists (tick marks) or raw polylines that
callers pass through the trimmed path walker (cube rows, spirals).
"""
import math
from typing import Iterable, Iterator, List, Tuple

import numpy as np

from .models import Point
from .moves import MoveDescriptor, feed_move, rapid

DEG_30 = math.pi / 6.0


def radial_tick_marks(
    inner_rad: float,
    outer_rad: float,
    count: int,
    center: Point,
    cut_z: float,
    feed: float,
    skip_mods: Iterable[int] = (),
    safe_z: float = 1.0
) -> List[MoveDescriptor]:
    """
    Build moves for evenly spaced radial tick marks.

    Ticks are numbered clockwise from +Y. Tick i is skipped when it is a
    multiple of any value in skip_mods (tick 0 is therefore always skipped
    when skip_mods is non-empty), leaving room for other marks there.

    Args:
        inner_rad: Radius where each tick starts
        outer_rad: Radius where each tick ends
        count: Number of tick positions around the circle
        center: Dial center
        cut_z: Cutting depth (negative below the surface)
        feed: Feed rate for plunge, cut and retract
        skip_mods: Moduli of tick indices to leave out
        safe_z: Clearance height between ticks

    Returns:
        Moves in cutting order

    Raises:
        ValueError: If a skip modulus is not a positive integer
    """
    skip_mods = tuple(skip_mods)
    if any(modulus <= 0 for modulus in skip_mods):
        raise ValueError(f"Tick skip moduli must be positive (got {skip_mods})")
    moves = [rapid(z=safe_z)]
    for i in range(count):
        if any(i % modulus == 0 for modulus in skip_mods):
            continue
        angle = i * math.tau / count
        moves.append(rapid(
            x=inner_rad * math.sin(angle) + center.x,
            y=inner_rad * math.cos(angle) + center.y
        ))
        moves.append(feed_move(feed, z=cut_z))
        moves.append(feed_move(
            feed,
            x=outer_rad * math.sin(angle) + center.x,
            y=outer_rad * math.cos(angle) + center.y
        ))
        moves.append(feed_move(feed, z=safe_z))
    return moves


def cube_centers(outer_rad: float, cube_size: float) -> Iterator[Tuple[int, Point]]:
    """
    Centers of a staggered field of isometric cubes covering a dial.

    Yields:
        (row index, cube center) pairs, row by row
    """
    width = 2.0 * math.cos(DEG_30) * cube_size
    height = cube_size * (1.0 + math.sin(DEG_30))
    nx = 2 * math.ceil(outer_rad / width)
    ny = 2 * int(outer_rad / cube_size)
    for row in range(ny):
        cy = row * height - outer_rad
        for col in range(nx):
            cx = col * width + (row % 2) * width / 2.0 - outer_rad
            yield row, Point(cx, cy)


def cube_lines(center: Point, cube_size: float, step_over: float) -> List[List[Point]]:
    """
    Chevron polylines shading one cube.

    Each line is a three-point 'V' opening upwards; lines are stacked
    step_over apart going down from the cube center.
    """
    steps = math.floor(cube_size / step_over) + 1
    y_adv = cube_size * math.sin(DEG_30)
    x_adv = cube_size * math.cos(DEG_30)
    lines = []
    for i in range(steps):
        base_y = center.y - i * step_over
        lines.append([
            Point(center.x - x_adv, base_y + y_adv),
            Point(center.x, base_y),
            Point(center.x + x_adv, base_y + y_adv),
        ])
    return lines


def wavy_spiral(
    outer_rad: float,
    inner_rad: float,
    pass_width: float,
    min_depth: float,
    max_depth: float,
    rays: int,
    radial_wobble: float,
    steps_per_turn: int,
    z_offset: float = 0.0
) -> List[Tuple[float, float, float]]:
    """
    Points along a spiral whose depth and radius oscillate with angle.

    The spiral starts at the first full turn outside inner_rad and grows by
    pass_width per turn up to outer_rad. Depth swings between min_depth and
    max_depth `rays` times per turn.

    Returns:
        List of (x, y, z) points, z relative to z_offset
    """
    turns = math.floor(outer_rad / pass_width)
    skip_turns = math.ceil(inner_rad / pass_width)

    progress = np.arange(steps_per_turn) / steps_per_turn
    angle = 2.0 * math.pi * progress
    z_step = (1.0 + np.sin(angle * rays)) / 2.0
    depth = (max_depth - min_depth) * z_step + min_depth

    points = []
    for turn in range(skip_turns, turns):
        radius = (progress + turn) * pass_width + z_step * radial_wobble
        xs = radius * np.cos(angle)
        ys = radius * np.sin(angle)
        zs = z_offset - depth
        points.extend(zip(xs.tolist(), ys.tolist(), zs.tolist()))
    return points


def flinque_circle(
    radius: float,
    radial_wobble: float,
    rays: int,
    steps_per_turn: int,
    overlap_steps: int = 5
) -> List[Tuple[float, float]]:
    """
    Points around one wobbling circle of a flinque guilloche.

    The radius swells outwards by up to radial_wobble `rays` times per turn.
    The loop runs overlap_steps past a full turn so the seam is cut twice.

    Returns:
        List of (x, y) points starting at angle 0
    """
    angle = 2.0 * math.pi * np.arange(steps_per_turn + overlap_steps) / steps_per_turn
    wobble = radial_wobble * (1.0 + np.sin(angle * rays)) / 2.0
    r = radius + wobble
    return list(zip((r * np.cos(angle)).tolist(), (r * np.sin(angle)).tolist()))
