"""Line segment trimming against a circular boundary.

A segment is parametrized as start + t * (end - start) for t in [0, 1].
Substituting into the circle equation gives a quadratic in t whose roots
are the parameters where the infinite line crosses the circle.
"""
import logging
import math

from .models import Circle, LineSegment, TrimResult

logger = logging.getLogger(__name__)


def trim(segment: LineSegment, circle: Circle) -> TrimResult:
    """
    Trim a line segment to the portion lying inside a circle.

    A segment that only touches the circle (tangent line, or a clamped
    interval that collapses to a single endpoint) is eliminated rather
    than returned as a zero-length cut.

    Args:
        segment: The segment to trim
        circle: The trim boundary

    Returns:
        TrimResult classified as UNCHANGED, CLIPPED or ELIMINATED
    """
    start = segment.start
    to_start_x = start.x - circle.center.x
    to_start_y = start.y - circle.center.y
    dir_x = segment.end.x - start.x
    dir_y = segment.end.y - start.y

    a = dir_x * dir_x + dir_y * dir_y
    r_sq = circle.radius * circle.radius
    to_start_sq = to_start_x * to_start_x + to_start_y * to_start_y

    if a == 0.0:
        if to_start_sq <= r_sq:
            return TrimResult.unchanged(segment)
        return TrimResult.eliminated()

    b = 2.0 * (to_start_x * dir_x + to_start_y * dir_y)
    c = to_start_sq - r_sq
    discriminant = b * b - 4.0 * a * c

    logger.debug("Trim discriminant %s (a=%s b=%s c=%s)", discriminant, a, b, c)

    # No intersection, or tangent
    if discriminant <= 0.0:
        return TrimResult.eliminated()

    sqrt_disc = math.sqrt(discriminant)
    t1 = (-b - sqrt_disc) / (2.0 * a)
    t2 = (-b + sqrt_disc) / (2.0 * a)

    if (t1 > 1.0 and t2 > 1.0) or (t1 < 0.0 and t2 < 0.0):
        return TrimResult.eliminated()

    t_min = min(max(t1, 0.0), 1.0)
    t_max = min(max(t2, 0.0), 1.0)

    logger.debug("Trim roots t1=%s t2=%s clamped to [%s, %s]", t1, t2, t_min, t_max)

    if t_min == 0.0 and t_max == 1.0:
        return TrimResult.unchanged(segment)

    if t_max <= t_min:
        return TrimResult.eliminated()

    return TrimResult.clipped(LineSegment(segment.point_at(t_min), segment.point_at(t_max)))
