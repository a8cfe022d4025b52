"""Complete program generators for engraved and rotary-axis jobs.

Each generator builds a full program (preamble, pattern moves, trailer)
from a parameter dataclass:
- Guilloche cube dial: isometric cube shading trimmed to a circle, plus
  a ring of radial tick marks
- Guilloche spiral: a wavy spiral of varying depth cut in step-downs
- Tick dial: radial tick marks only
- Flinque: concentric wobbling circles at a constant depth

and the rotary (A axis) jobs:
- Spur gear: one slot per tooth with an involute gear cutter
- Knurler: spiral teeth cut with simultaneous X and A motion
- Slits: evenly indexed slots along a round part
- Flutes: relieved flutes swept in Z and A together
"""
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .models import Circle, Point
from .moves import MoveDescriptor, feed_move, rapid
from .path_walker import walk_trimmed_path
from .patterns import cube_centers, cube_lines, flinque_circle, radial_tick_marks, wavy_spiral
from .program import GCodeProgram
from .utils.gcode_format import (
    INVERSE_TIME_FEED,
    UNITS_PER_MINUTE_FEED,
    generate_preamble,
    generate_trailer
)
from .utils.multipass import (
    calculate_num_passes,
    calculate_pass_depths,
    iter_clamped_depths,
    iter_finishing_depths,
    iter_step_down_offsets
)

logger = logging.getLogger(__name__)

# Whole tooth depth per unit of module (Machinery's Handbook, module system)
GEAR_WHOLE_DEPTH = 2.157


@dataclass
class GenerationResult:
    """Result of G-code generation."""
    program_text: str
    moves: List[MoveDescriptor]
    warnings: List[str] = field(default_factory=list)
    boundary: Optional[Circle] = None


@dataclass
class CubeDialParams:
    """Parameters for the guilloche cube dial."""
    outer_rad: float = 16.0
    depth: float = 0.1
    step_over: float = 0.5
    cube_size: float = 2.5
    rpm: float = 8000
    feed: float = 300.0
    tool: int = 23
    name: Optional[str] = None
    coolant: bool = False
    safe_z: float = 1.0
    trim_factor: float = 0.82   # Fraction of outer_rad kept for cubes
    tick_count: int = 60
    tick_skip_mods: Tuple[int, ...] = (5,)


@dataclass
class SpiralParams:
    """Parameters for the wavy guilloche spiral."""
    outer_rad: float = 19.0
    inner_rad: float = 1.0
    pass_width: float = 0.5
    min_depth: float = 0.1
    max_depth: float = 0.4
    max_stepdown: float = 0.2
    rays: int = 5
    radial_wobble: float = 0.0
    steps_per_turn: int = 360
    rpm: float = 8000
    feed: float = 300.0
    tool: int = 17
    name: Optional[str] = None
    coolant: bool = False


@dataclass
class TickDialParams:
    """Parameters for a dial of radial tick marks."""
    outer_rad: float = 16.0
    inner_rad: float = 14.72
    count: int = 60
    depth: float = 0.1
    skip_mods: Tuple[int, ...] = ()
    rpm: float = 8000
    feed: float = 300.0
    tool: int = 17
    tool_diameter: float = 0.5
    name: Optional[str] = None
    coolant: bool = False
    safe_z: float = 1.0


@dataclass
class FlinqueParams:
    """Parameters for the flinque guilloche of wobbling circles."""
    outer_rad: float = 19.0
    inner_rad: float = 1.0
    step_over: float = 0.75     # Gap between circles
    depth: float = 0.2
    rays: int = 17
    radial_wobble: float = 1.0
    steps_per_turn: int = 360
    rpm: float = 8000
    feed: float = 300.0
    tool: int = 17
    name: Optional[str] = None
    coolant: bool = False


@dataclass
class GearParams:
    """Parameters for a spur gear cut on the rotary axis."""
    teeth: int = 20
    width: float = 10.0
    module: float = 1.0         # Must match the cutter module
    cutter_dia: float = 50.0
    max_depth: float = 0.5
    clearance: float = 4.0      # Distance from the stock fed at cutting speed
    rpm: float = 650
    feed: float = 60.0
    tool: int = 1
    name: Optional[str] = None
    coolant: bool = False


@dataclass
class KnurlParams:
    """Parameters for a knurling tool cut on the rotary axis."""
    dia: float = 10.0
    length: float = 10.0
    pitch: float = 1.0          # mm per tooth
    tool_inc_angle: float = 40.0
    max_stepdown: float = 0.25
    spiral_angle: float = 45.0  # 0 for straight teeth, 45 for diamond
    reverse_spiral: bool = False
    clearance: float = 3.0
    rpm: float = 9500
    feed: float = 180.0
    tool: int = 17
    name: Optional[str] = None
    coolant: bool = False


@dataclass
class SlitParams:
    """Parameters for slitting-saw slots indexed around a round part."""
    stock_dia: float = 10.0
    length: float = 16.0        # Slot length along X
    depth: float = 1.0
    slits: int = 1
    max_stepdown: float = 0.25
    speed: float = 40.0         # Surface speed, m/min
    feed_per_tooth: float = 0.0254
    tool_teeth: int = 30
    tool_dia: float = 76.2
    clearance: float = 3.0
    tool: int = 1
    name: Optional[str] = None
    coolant: bool = False


@dataclass
class FluteParams:
    """Parameters for cutting flutes into a round tool blank."""
    flutes: int = 4
    depth: float = 1.0
    dia: float = 10.0
    length: float = 20.0
    tool_dia: float = 3.175
    max_stepdown: float = 3.0
    max_stepover: float = 0.15  # Fraction of tool_dia
    spiral_angle: float = 25.0  # 0 for straight flutes
    clearance: float = 4.0
    rpm: float = 4500
    feed: float = 220.0
    tool: int = 1
    name: Optional[str] = None
    coolant: bool = False


def _start_program(name: Optional[str], tool: int, description: str,
                   rpm: float, coolant: bool) -> GCodeProgram:
    program = GCodeProgram()
    program.add_lines(generate_preamble(name, tool, description, rpm, coolant))
    return program


def _finish(program: GCodeProgram, warnings: List[str],
            boundary: Optional[Circle] = None) -> GenerationResult:
    program.add_lines(generate_trailer())
    logger.info("Generated %d lines (%d moves)", program.line_count, len(program.moves))
    return GenerationResult(
        program_text=program.text(),
        moves=program.moves,
        warnings=warnings,
        boundary=boundary
    )


def generate_cube_dial(params: CubeDialParams) -> GenerationResult:
    """
    Generate the guilloche cube dial program.

    Every chevron line of every cube is trimmed to a circle of
    trim_factor * outer_rad, so only the dial face inside it is engraved.
    A ring of tick marks is cut between 0.92 and 1.0 of outer_rad.

    Args:
        params: CubeDialParams

    Returns:
        GenerationResult with the program text and emitted moves
    """
    program = _start_program(
        params.name,
        params.tool,
        f"T{params.tool} D={params.step_over} engraver",
        params.rpm,
        params.coolant
    )
    boundary = Circle(Point(0.0, 0.0), params.outer_rad * params.trim_factor)
    warnings = []

    current_row = None
    cut_lines = 0
    for row, center in cube_centers(params.outer_rad, params.cube_size):
        if row != current_row:
            program.comment(f"Row {row} at {center.y:g}")
            current_row = row
        program.comment(f"Cube at {center.x:g}, {center.y:g}")
        for line in cube_lines(center, params.cube_size, params.step_over):
            emitted = walk_trimmed_path(
                program,
                line,
                boundary,
                params.safe_z,
                -params.depth,
                params.feed
            )
            # A walk that cuts emits more than its initial safety rapid
            if emitted > 1:
                cut_lines += 1

    if cut_lines == 0:
        warnings.append(
            f"No cube lines fall inside the trim circle (radius {boundary.radius:.4f}mm)"
        )

    program.comment("Tick marks")
    program.add_moves(radial_tick_marks(
        params.outer_rad * 0.92,
        params.outer_rad,
        params.tick_count,
        Point(0.0, 0.0),
        -params.depth,
        params.feed,
        params.tick_skip_mods,
        params.safe_z
    ))

    logger.info("Cube dial: %d chevron lines cut inside r=%.4f", cut_lines, boundary.radius)
    return _finish(program, warnings, boundary)


def generate_spiral(params: SpiralParams) -> GenerationResult:
    """
    Generate the wavy spiral program, cut in equal step-downs.

    Each pass rapids above the start point, plunges at a third of the feed
    rate, follows the spiral and feeds out to Z1.
    """
    program = _start_program(
        params.name,
        params.tool,
        f"T{params.tool} D={params.pass_width} engraver",
        params.rpm,
        params.coolant
    )
    warnings = []

    start_x = math.ceil(params.inner_rad / params.pass_width) * params.pass_width
    if start_x >= params.outer_rad:
        warnings.append(
            f"Inner radius {params.inner_rad}mm leaves no spiral turns inside {params.outer_rad}mm"
        )

    for z_off in iter_step_down_offsets(params.max_depth, params.max_stepdown):
        program.comment(f"Pass at offset {z_off:g}mm")
        program.add_move(rapid(x=start_x, y=0.0, z=10.0))
        program.add_move(rapid(x=start_x, y=0.0, z=1.0 + z_off))
        program.add_move(feed_move(params.feed / 3.0, x=start_x, y=0.0, z=z_off - params.min_depth))

        for x, y, z in wavy_spiral(
            params.outer_rad,
            params.inner_rad,
            params.pass_width,
            params.min_depth,
            params.max_depth,
            params.rays,
            params.radial_wobble,
            params.steps_per_turn,
            z_off
        ):
            program.add_move(feed_move(params.feed, x=x, y=y, z=z))

        program.add_move(feed_move(params.feed, z=1.0))

    return _finish(program, warnings)


def generate_tick_dial(params: TickDialParams) -> GenerationResult:
    """Generate a program cutting radial tick marks only."""
    program = _start_program(
        params.name,
        params.tool,
        f"T{params.tool} D={params.tool_diameter} engraver",
        params.rpm,
        params.coolant
    )
    warnings = []
    if params.inner_rad >= params.outer_rad:
        warnings.append(
            f"Inner radius {params.inner_rad}mm is not inside outer radius {params.outer_rad}mm"
        )

    program.add_moves(radial_tick_marks(
        params.inner_rad,
        params.outer_rad,
        params.count,
        Point(0.0, 0.0),
        -params.depth,
        params.feed,
        params.skip_mods,
        params.safe_z
    ))
    return _finish(program, warnings)


def generate_flinque(params: FlinqueParams) -> GenerationResult:
    """
    Generate the flinque program.

    One circle is cut per step over between inner_rad and outer_rad, each at
    constant depth, wobbling outwards `rays` times per turn and running a few
    steps past its start.
    """
    program = _start_program(
        params.name,
        params.tool,
        f"T{params.tool} D={params.step_over} engraver",
        params.rpm,
        params.coolant
    )
    warnings = []

    circles = math.floor(params.outer_rad / params.step_over)
    skip_circles = math.ceil(params.inner_rad / params.step_over)
    if skip_circles >= circles:
        warnings.append(
            f"Inner radius {params.inner_rad}mm leaves no circles inside {params.outer_rad}mm"
        )

    start_x = skip_circles * params.step_over
    program.add_move(rapid(x=start_x, y=0.0, z=10.0))
    program.add_move(rapid(x=start_x, y=0.0, z=1.0))

    for circle in range(skip_circles, circles):
        radius = circle * params.step_over
        program.comment(f"Circle {circle}")
        program.add_move(rapid(x=radius + params.radial_wobble / 2.0, y=0.0, z=1.0))
        program.add_move(feed_move(params.feed, z=-params.depth))
        for x, y in flinque_circle(radius, params.radial_wobble, params.rays, params.steps_per_turn):
            program.add_move(feed_move(params.feed, x=x, y=y, z=-params.depth))
        program.add_move(rapid(z=1.0))

    program.add_move(rapid(z=10.0))
    return _finish(program, warnings)


def _gear_pass(program: GCodeProgram, params: GearParams, depth: float, x_clearance: float):
    # Cutter axis height: stock radius plus cutter radius, less the depth of cut
    y_pos = (params.teeth + 2) * params.module / 2.0 + params.cutter_dia / 2.0 - depth

    program.comment(f"Pass at depth {depth:g}")
    program.add_move(rapid(x=x_clearance, y=y_pos))
    program.add_move(rapid(z=0.0))
    program.add_move(feed_move(params.feed, x=-params.width))
    program.add_move(feed_move(params.feed, y=y_pos + params.clearance))
    program.add_move(rapid(y=y_pos + params.clearance + 10.0))
    # X before Y so the cutter stays clear of the stock
    program.add_move(rapid(x=x_clearance))
    program.add_move(rapid(y=y_pos))


def generate_gear(params: GearParams) -> GenerationResult:
    """
    Generate a spur gear program for an involute gear cutter.

    The stock sits on the rotary axis with home at the center of its right
    face. Each tooth slot is indexed with a rapid A move, then cut along -X
    in full max_depth passes followed by two equal finishing passes down to
    the whole depth of 2.157 * module.

    Args:
        params: GearParams

    Returns:
        GenerationResult with the program text and emitted moves

    Raises:
        ValueError: If the cutter is too small for the approach clearance
    """
    if params.cutter_dia <= 2.0 * params.clearance:
        raise ValueError(
            f"Cutter diameter {params.cutter_dia}mm must exceed twice the "
            f"{params.clearance}mm clearance"
        )

    program = _start_program(
        params.name,
        params.tool,
        f"T{params.tool} D={params.cutter_dia:g} - gear mill",
        params.rpm,
        params.coolant
    )

    clearance_theta = math.acos(1.0 - 2.0 * params.clearance / params.cutter_dia)
    x_clearance = (params.cutter_dia / 2.0) * math.tan(clearance_theta)
    depths = list(iter_finishing_depths(GEAR_WHOLE_DEPTH * params.module, params.max_depth))
    tooth_angle = 360.0 / params.teeth

    for tooth in range(params.teeth):
        program.comment(f"Tooth {tooth + 1} of {params.teeth}")
        program.add_move(rapid(a=tooth * tooth_angle))
        for depth in depths:
            _gear_pass(program, params, depth, x_clearance)

    program.add_lines(["G30", ""])
    logger.info("Gear: %d teeth, %d passes per tooth", params.teeth, len(depths))
    return _finish(program, [])


def knurl_tooth_count(params: KnurlParams) -> int:
    """Whole teeth that fit around the knurler at the requested pitch."""
    return math.floor(math.pi * params.dia / params.pitch)


def _knurl_tooth(program: GCodeProgram, params: KnurlParams, a_start: float, a_move: float,
                 stock_top_z: float, cut_depth: float, cutting_feed: float):
    safe_z = stock_top_z + params.clearance
    start = rapid(x=params.clearance, y=0.0, z=safe_z, a=a_start)

    program.add_move(start)
    program.add_move(feed_move(params.feed, z=stock_top_z - cut_depth))
    # Just short of the right face
    program.add_move(feed_move(params.feed, x=0.1))

    program.add_lines([INVERSE_TIME_FEED])
    program.add_move(feed_move(cutting_feed, x=-params.length, a=a_start + a_move))
    program.add_lines([UNITS_PER_MINUTE_FEED])

    program.add_move(feed_move(params.feed, x=-(params.length + 0.5)))
    program.add_move(feed_move(params.feed, z=stock_top_z - cut_depth + 0.5))
    program.add_move(rapid(z=safe_z))
    program.add_move(start)


def generate_knurl(params: KnurlParams) -> GenerationResult:
    """
    Generate a knurling tool program for a sharp engraver or chamfer mill.

    Every tooth is cut at one depth before stepping down to the next, which
    keeps the burr on the tooth edges small. The tooth itself is a single
    move in X and A together, run in inverse time feed mode so the machine
    works out the combined feed. Tooth depth follows from the tool's
    included angle.

    Raises:
        ValueError: If the pitch is too coarse to fit a single tooth
    """
    teeth = knurl_tooth_count(params)
    if teeth < 1:
        raise ValueError(
            f"Pitch {params.pitch}mm is longer than the circumference of a {params.dia}mm knurler"
        )

    program = _start_program(
        params.name,
        params.tool,
        f"T{params.tool} {params.tool_inc_angle:g} degree chamfer mill or engraver",
        params.rpm,
        params.coolant
    )
    logger.info("Requested %.3f teeth, cutting %d", math.pi * params.dia / params.pitch, teeth)

    a_step = 360.0 / teeth
    stock_top_z = params.dia / 2.0
    tooth_width = math.pi * params.dia / teeth
    tooth_depth = (tooth_width / 2.0) / math.tan(math.radians(params.tool_inc_angle))
    depths = calculate_pass_depths(tooth_depth, params.max_stepdown)

    spiral = math.radians(params.spiral_angle)
    a_move = 360.0 * params.length * math.tan(spiral) / (math.pi * params.dia)
    if params.reverse_spiral:
        a_move = -a_move
    # Inverse time: the cut along the spiral takes 1/F minutes
    cutting_feed = params.feed * math.cos(spiral) / params.length

    for pass_number, cut_depth in enumerate(depths, 1):
        program.comment(f"Pass {pass_number} of {len(depths)}")
        for tooth in range(teeth):
            program.comment(f"Tooth {tooth + 1} of {teeth}")
            _knurl_tooth(program, params, tooth * a_step, a_move,
                         stock_top_z, cut_depth, cutting_feed)

    return _finish(program, [])


def slit_spindle_speed(params: SlitParams) -> int:
    """Spindle RPM giving the saw's surface speed (m/min)."""
    return round(params.speed / (math.pi * params.tool_dia / 1000.0))


def generate_slits(params: SlitParams) -> GenerationResult:
    """
    Generate slitting-saw slots along -X, indexed evenly around the A axis.

    The stock sits on the rotary axis with home at the center of its right
    face. Each slot is cut in equal step-downs, feeding back out along the
    slot before the saw lifts. Spindle speed comes from the surface speed and
    feed from the chip load per tooth.

    Raises:
        ValueError: If the surface speed rounds to a stopped spindle
    """
    rpm = slit_spindle_speed(params)
    if rpm < 1:
        raise ValueError(
            f"Surface speed {params.speed}m/min is too low for a {params.tool_dia}mm saw"
        )
    feed = params.feed_per_tooth * params.tool_teeth * rpm

    program = _start_program(
        params.name,
        params.tool,
        f"T{params.tool} {params.tool_dia:g}mm {params.tool_teeth} tooth slitting saw",
        rpm,
        params.coolant
    )
    warnings = []

    stock_top_z = params.stock_dia / 2.0
    if params.depth >= stock_top_z:
        warnings.append(
            f"Slot depth {params.depth}mm reaches the axis of {params.stock_dia}mm stock"
        )

    safe_z = stock_top_z + params.clearance
    depths = calculate_pass_depths(params.depth, params.max_stepdown)
    slit_angle = 360.0 / params.slits

    for slit in range(params.slits):
        program.comment(f"Slit {slit + 1} of {params.slits}")
        program.add_move(rapid(z=safe_z))
        program.add_move(rapid(x=params.clearance, y=0.0, a=slit * slit_angle))
        for depth in depths:
            program.comment(f"Pass at depth {depth:g}")
            program.add_move(feed_move(feed, z=stock_top_z - depth))
            program.add_move(feed_move(feed, x=-params.length))
            program.add_move(feed_move(feed, x=params.clearance))
        program.add_move(rapid(z=safe_z))

    logger.info("Slits: %d slots at %d RPM, F%.1f", params.slits, rpm, feed)
    return _finish(program, warnings)


def _flute_pass(program: GCodeProgram, params: FluteParams, x: float, depth: float,
                a_start: float, a_end: float):
    stock_top_z = params.dia / 2.0
    sweep = abs(a_end - a_start) / 360.0 * math.pi * params.dia
    # Inverse time: the Z and A sweep takes 1/F minutes
    cutting_feed = params.feed / math.hypot(depth, sweep)

    program.comment(f"Pass at depth {depth:g}")
    program.add_move(rapid(x=x, y=0.0, z=stock_top_z + params.clearance, a=a_start))
    program.add_move(feed_move(params.feed, z=stock_top_z))
    program.add_lines([INVERSE_TIME_FEED])
    program.add_move(feed_move(cutting_feed, z=stock_top_z - depth, a=a_end))
    program.add_lines([UNITS_PER_MINUTE_FEED])
    program.add_move(feed_move(params.feed, z=stock_top_z))


def generate_flutes(params: FluteParams) -> GenerationResult:
    """
    Generate flutes with back relief in a round blank on the A axis.

    Each flute is swept in several positions along -X, starting with the
    tool just touching the right face and stepping over by a fraction of the
    tool diameter. At each position the tool sinks in Z while the blank
    turns through the flute angle less the tool radius, leaving a relieved
    tooth. A spiral angle twists the start angle along the blank.

    Raises:
        ValueError: If the step over would never advance along the blank
    """
    step = params.tool_dia * params.max_stepover
    if step <= 0:
        raise ValueError(f"Step over {step}mm must be greater than 0")

    program = _start_program(
        params.name,
        params.tool,
        f"T{params.tool} D={params.tool_dia:g} ball mill",
        params.rpm,
        params.coolant
    )

    flute_angle = 360.0 / params.flutes
    tool_radius_angle = 360.0 * (params.tool_dia / 2.0) / (math.pi * params.dia)
    twist = math.tan(math.radians(params.spiral_angle))
    depths = list(iter_clamped_depths(params.depth, params.max_stepdown))

    for flute in range(params.flutes):
        program.comment(f"Flute {flute + 1} of {params.flutes}")
        x = params.tool_dia / 2.0
        while x > -params.length:
            a_start = flute * flute_angle + 360.0 * x * twist / (math.pi * params.dia)
            a_end = a_start + flute_angle - tool_radius_angle
            for depth in depths:
                _flute_pass(program, params, x, depth, a_start, a_end)
            x -= step
        # Home between flutes
        program.add_lines(["G30", ""])

    return _finish(program, [])


def _stock_setup_text(outer_rad: float) -> str:
    return (
        "Before cut:\n"
        f"    - Create stock with diameter at least {outer_rad * 2.0:g}mm\n"
        "    - Set home to center of stock, at the top"
    )


def describe_cube_dial(params: CubeDialParams) -> str:
    return _stock_setup_text(params.outer_rad)


def describe_spiral(params: SpiralParams) -> str:
    """Setup instructions with spiral length and approximate run time."""
    spiral_length = math.pi * params.outer_rad ** 2 / (2.0 * params.pass_width)
    steps = calculate_num_passes(params.max_depth, params.max_stepdown)
    return (
        _stock_setup_text(params.outer_rad) + "\n"
        f"    - Spiral length {spiral_length:.1f}mm\n"
        f"    - {steps} steps\n"
        f"    - Approx run time {steps * spiral_length / params.feed:.1f} minutes"
    )


def describe_tick_dial(params: TickDialParams) -> str:
    return _stock_setup_text(params.outer_rad)


def describe_flinque(params: FlinqueParams) -> str:
    circles = math.floor(params.outer_rad / params.step_over)
    total_distance = circles * math.pi * params.outer_rad
    return (
        _stock_setup_text(params.outer_rad) + "\n"
        f"    - Travel distance {total_distance:.1f}mm\n"
        f"    - Approx run time {total_distance / params.feed:.1f} minutes"
    )


def _rotary_setup_text(stock_dia: float) -> str:
    return (
        "Before cut:\n"
        f"    - Create stock with OD {stock_dia:g}mm\n"
        "    - Set home to center of right face of stock"
    )


def describe_gear(params: GearParams) -> str:
    return _rotary_setup_text((params.teeth + 2) * params.module)


def describe_knurl(params: KnurlParams) -> str:
    return (
        _rotary_setup_text(params.dia) + "\n"
        f"    - {knurl_tooth_count(params)} teeth at {params.pitch:g}mm pitch"
    )


def describe_slits(params: SlitParams) -> str:
    rpm = slit_spindle_speed(params)
    return (
        _rotary_setup_text(params.stock_dia) + "\n"
        f"    - Spindle {rpm} RPM, feed "
        f"{params.feed_per_tooth * params.tool_teeth * rpm:.1f}mm/min"
    )


def describe_flutes(params: FluteParams) -> str:
    return _rotary_setup_text(params.dia)
