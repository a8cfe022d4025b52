"""Trimmed path walking.

Turns a polyline and a circular boundary into the moves that cut only the
parts of the polyline inside the boundary. The cutter is raised to a safe
height before anything else, lowered when a cuttable stretch begins and
raised again whenever the path leaves the boundary.
"""
import logging
from enum import Enum
from typing import List, Optional, Sequence

from .geometry import trim
from .models import Circle, LineSegment, Point, PointLike, as_point
from .moves import MoveDescriptor, feed_move, rapid
from .program import GCodeProgram

logger = logging.getLogger(__name__)

# Max distance between a cut's end and the next cut's start for the two to
# be cut without lifting the cutter
CONTINUITY_TOLERANCE = 1e-9


class CutterState(Enum):
    RETRACTED = 'retracted'
    ENGAGED = 'engaged'


def trimmed_feed_path(
    waypoints: Sequence[PointLike],
    boundary: Circle,
    safe_z: float,
    cut_z: float,
    feed: float
) -> List[MoveDescriptor]:
    """
    Build the moves that cut a polyline trimmed to a circle.

    Args:
        waypoints: Ordered polyline vertices (Points or (x, y) pairs)
        boundary: Keep-in circle; only path portions inside it are cut
        safe_z: Clearance height the cutter retracts to
        cut_z: Cutting depth the cutter plunges to
        feed: Feed rate for plunges, cuts and retracts

    Returns:
        Moves in path order. Empty if fewer than two waypoints are given.

    Raises:
        InvalidMove: If a move cannot be built (e.g. negative safe_z, which
                     would make the initial rapid plunge)
    """
    points = [as_point(p) for p in waypoints]
    if len(points) < 2:
        return []

    moves = [rapid(z=safe_z)]
    state = CutterState.RETRACTED
    position: Optional[Point] = None

    for start, end in zip(points, points[1:]):
        result = trim(LineSegment(start, end), boundary)

        if not result.is_cuttable:
            if state is CutterState.ENGAGED:
                moves.append(feed_move(feed, z=safe_z))
                state = CutterState.RETRACTED
                logger.debug("Retract: segment %s -> %s outside boundary", start, end)
            continue

        segment = result.segment
        if state is CutterState.ENGAGED and segment.start.distance_to(position) > CONTINUITY_TOLERANCE:
            # Path left the boundary at a vertex and re-enters here
            moves.append(feed_move(feed, z=safe_z))
            state = CutterState.RETRACTED
            logger.debug("Retract: gap between %s and %s", position, segment.start)

        if state is CutterState.RETRACTED:
            moves.append(rapid(x=segment.start.x, y=segment.start.y))
            moves.append(feed_move(feed, z=cut_z))
            state = CutterState.ENGAGED
            logger.debug("Plunge at %s (%s)", segment.start, result.outcome.value)

        moves.append(feed_move(feed, x=segment.end.x, y=segment.end.y))
        position = segment.end

    if state is CutterState.ENGAGED:
        moves.append(feed_move(feed, z=safe_z))

    return moves


def walk_trimmed_path(
    program: GCodeProgram,
    waypoints: Sequence[PointLike],
    boundary: Circle,
    safe_z: float,
    cut_z: float,
    feed: float
) -> int:
    """
    Emit a trimmed polyline into a program.

    All moves are built before any is appended, so a walk that fails with
    InvalidMove leaves the program untouched.

    Returns:
        Number of moves appended
    """
    moves = trimmed_feed_path(waypoints, boundary, safe_z, cut_z, feed)
    program.add_moves(moves)
    return len(moves)
