"""Shared dataclasses for toolpath geometry and trimming results."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class Point:
    """A 2D coordinate point."""
    x: float
    y: float

    def distance_to(self, other: 'Point') -> float:
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5


PointLike = Union[Point, Tuple[float, float], Sequence[float]]


def as_point(value: PointLike) -> Point:
    """
    Coerce a waypoint into a Point.

    Args:
        value: A Point, or any (x, y) pair

    Returns:
        The value as a Point
    """
    if isinstance(value, Point):
        return value
    x, y = value[0], value[1]
    return Point(float(x), float(y))


@dataclass(frozen=True)
class LineSegment:
    """One edge of a polyline. Zero-length segments are allowed."""
    start: Point
    end: Point

    @property
    def is_zero_length(self) -> bool:
        return self.start == self.end

    def point_at(self, t: float) -> Point:
        """Point at parameter t, where t=0 is start and t=1 is end."""
        if t == 0.0:
            return self.start
        if t == 1.0:
            return self.end
        return Point(
            self.start.x + t * (self.end.x - self.start.x),
            self.start.y + t * (self.end.y - self.start.y)
        )


@dataclass(frozen=True)
class Circle:
    """A trim boundary: center point and non-negative radius."""
    center: Point
    radius: float

    def __post_init__(self):
        if self.radius < 0:
            raise ValueError(f"Circle radius must be non-negative, got {self.radius}")

    def contains(self, point: Point) -> bool:
        """True if point lies inside or on the circle."""
        dx = point.x - self.center.x
        dy = point.y - self.center.y
        return dx * dx + dy * dy <= self.radius * self.radius


class TrimOutcome(Enum):
    """Classification of a segment trimmed against a circle."""
    UNCHANGED = 'unchanged'    # Whole segment within or on the circle
    CLIPPED = 'clipped'        # Only part of the segment is inside
    ELIMINATED = 'eliminated'  # No part lies strictly inside (includes tangency)


@dataclass(frozen=True)
class TrimResult:
    """
    Result of trimming a segment against a circle.

    Attributes:
        outcome: The TrimOutcome classification
        segment: The original segment for UNCHANGED, the clipped
                 sub-segment for CLIPPED, None for ELIMINATED
    """
    outcome: TrimOutcome
    segment: Optional[LineSegment] = None

    @classmethod
    def unchanged(cls, segment: LineSegment) -> 'TrimResult':
        return cls(TrimOutcome.UNCHANGED, segment)

    @classmethod
    def clipped(cls, segment: LineSegment) -> 'TrimResult':
        return cls(TrimOutcome.CLIPPED, segment)

    @classmethod
    def eliminated(cls) -> 'TrimResult':
        return cls(TrimOutcome.ELIMINATED, None)

    @property
    def is_cuttable(self) -> bool:
        """True for UNCHANGED and CLIPPED results."""
        return self.outcome is not TrimOutcome.ELIMINATED
