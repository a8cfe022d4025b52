"""G-code generation for engraved and machined CNC parts."""

from .models import Point, LineSegment, Circle, TrimOutcome, TrimResult
from .moves import InvalidMove, MoveKind, MoveDescriptor, rapid, feed_move
from .geometry import trim
from .path_walker import CutterState, trimmed_feed_path, walk_trimmed_path
from .program import GCodeProgram
from .generators import (
    GenerationResult,
    CubeDialParams,
    SpiralParams,
    TickDialParams,
    FlinqueParams,
    GearParams,
    KnurlParams,
    SlitParams,
    FluteParams,
    generate_cube_dial,
    generate_spiral,
    generate_tick_dial,
    generate_flinque,
    generate_gear,
    generate_knurl,
    generate_slits,
    generate_flutes
)

__all__ = [
    # Geometry
    'Point',
    'LineSegment',
    'Circle',
    'TrimOutcome',
    'TrimResult',
    'trim',
    # Moves
    'InvalidMove',
    'MoveKind',
    'MoveDescriptor',
    'rapid',
    'feed_move',
    # Path walking
    'CutterState',
    'trimmed_feed_path',
    'walk_trimmed_path',
    'GCodeProgram',
    # Generators
    'GenerationResult',
    'CubeDialParams',
    'SpiralParams',
    'TickDialParams',
    'FlinqueParams',
    'GearParams',
    'KnurlParams',
    'SlitParams',
    'FluteParams',
    'generate_cube_dial',
    'generate_spiral',
    'generate_tick_dial',
    'generate_flinque',
    'generate_gear',
    'generate_knurl',
    'generate_slits',
    'generate_flutes',
]
