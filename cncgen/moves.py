"""Move descriptors: one validated machine move.

A MoveDescriptor names the axes that move and, for controlled moves, the
feed rate. It is validated once at construction, so anything that reaches
the program writer is known to satisfy its kind's contract.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple


class InvalidMove(ValueError):
    """A move violates the contract of its kind."""


class MoveKind(Enum):
    """Rapid (non-cutting positioning) or feed-controlled move."""
    RAPID = 'G0'
    FEED = 'G1'

    @property
    def command(self) -> str:
        return self.value


# Canonical output order for axis words
AXIS_ORDER = ('x', 'y', 'z', 'a')


@dataclass(frozen=True)
class MoveDescriptor:
    """
    A sparse set of target axis values plus an optional feed rate.

    Attributes:
        kind: RAPID or FEED
        x: X target (optional)
        y: Y target (optional)
        z: Z (depth) target (optional)
        a: Rotary axis target in degrees (optional)
        feed: Feed rate, required for FEED and forbidden for RAPID

    Raises:
        InvalidMove: If no axis is present, a rapid carries a feed rate or
                     plunges below Z=0, or a feed move has no feed rate
    """
    kind: MoveKind
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None
    a: Optional[float] = None
    feed: Optional[float] = None

    def __post_init__(self):
        if all(getattr(self, axis) is None for axis in AXIS_ORDER):
            raise InvalidMove(f"{self.kind.command} move has no axis target")

        for name in AXIS_ORDER + ('feed',):
            value = getattr(self, name)
            if value is not None and not math.isfinite(value):
                raise InvalidMove(f"{self.kind.command} move has non-finite {name} value {value}")

        if self.kind is MoveKind.RAPID:
            if self.feed is not None:
                raise InvalidMove(f"Rapid move must not carry a feed rate (got F{self.feed})")
            if self.z is not None and self.z < 0:
                raise InvalidMove(f"Rapid move must not plunge below Z0 (got Z{self.z})")
        elif self.feed is None:
            raise InvalidMove("Feed move requires a feed rate")

    @property
    def command(self) -> str:
        return self.kind.command

    @property
    def is_rapid(self) -> bool:
        return self.kind is MoveKind.RAPID

    def axis_words(self) -> List[Tuple[str, float]]:
        """Present axis values as (letter, value) pairs in canonical order."""
        return [
            (axis.upper(), getattr(self, axis))
            for axis in AXIS_ORDER
            if getattr(self, axis) is not None
        ]


def rapid(
    x: Optional[float] = None,
    y: Optional[float] = None,
    z: Optional[float] = None,
    a: Optional[float] = None
) -> MoveDescriptor:
    """Build a rapid positioning move."""
    return MoveDescriptor(MoveKind.RAPID, x=x, y=y, z=z, a=a)


def feed_move(
    feed: Optional[float],
    x: Optional[float] = None,
    y: Optional[float] = None,
    z: Optional[float] = None,
    a: Optional[float] = None
) -> MoveDescriptor:
    """Build a feed-controlled move. A missing feed rate raises InvalidMove."""
    return MoveDescriptor(MoveKind.FEED, x=x, y=y, z=z, a=a, feed=feed)
