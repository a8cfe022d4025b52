#!/usr/bin/env python3
"""Command-line front end for the engraving and rotary-axis generators."""

import argparse
import logging
import os
import sys

from config import Config
from cncgen.generators import (
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
    generate_flutes,
    describe_cube_dial,
    describe_spiral,
    describe_tick_dial,
    describe_flinque,
    describe_gear,
    describe_knurl,
    describe_slits,
    describe_flutes
)
from cncgen.utils.file_manager import build_output_path, write_program_file
from cncgen.utils.validators import (
    validate_positive,
    validate_trim_boundary,
    validate_depths,
    validate_feed_rate,
    validate_angle
)


def add_common_arguments(parser: argparse.ArgumentParser, default_tool: int,
                         default_rpm: float = None, default_feed: float = None,
                         speeds: bool = True):
    parser.add_argument('-o', '--output', required=True, help='Output G-code file')
    parser.add_argument('-n', '--name', help='Name for the job')
    parser.add_argument('--tool', type=int, default=default_tool, help='Tool number for the cut')
    if speeds:
        parser.add_argument('--rpm', type=float,
                            default=Config.RPM if default_rpm is None else default_rpm,
                            help='Tool RPM')
        parser.add_argument('--feed', type=float,
                            default=Config.FEED if default_feed is None else default_feed,
                            help='Feed rate, in mm/min')
    parser.add_argument('--coolant', action=argparse.BooleanOptionalAction, default=Config.COOLANT,
                        help='Turn on flood coolant')
    parser.add_argument('--overwrite', action='store_true', help='Replace an existing output file')
    parser.add_argument('--preview', action='store_true', help='Save a toolpath preview PNG')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cncgen',
        description='Generate G-code for engraved dials and rotary-axis parts'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    cubes = subparsers.add_parser('cubes', help='Guilloche pattern of isometric cubes')
    cubes.add_argument('--outer-rad', type=float, default=16.0, help='Outer radius')
    cubes.add_argument('--depth', type=float, default=0.1, help='Cut depth')
    cubes.add_argument('--step-over', type=float, default=0.5, help='Step over for each line')
    cubes.add_argument('--cube-size', type=float, default=2.5, help='Size of each cube')
    cubes.add_argument('--trim-factor', type=float, default=0.82,
                       help='Fraction of the outer radius the cubes are trimmed to')
    add_common_arguments(cubes, default_tool=23)
    cubes.set_defaults(func=cmd_cubes)

    spiral = subparsers.add_parser('spiral', help='Wavy spiral with varying depth')
    spiral.add_argument('--outer-rad', type=float, default=19.0, help='Outer radius')
    spiral.add_argument('--inner-rad', type=float, default=1.0, help='Inner radius')
    spiral.add_argument('--pass-width', type=float, default=0.5,
                        help='Width of each turn in the spiral')
    spiral.add_argument('--min-depth', type=float, default=0.1,
                        help='Shallowest the tool will go in negative Z')
    spiral.add_argument('--max-depth', type=float, default=0.4,
                        help='Deepest the tool will go in negative Z')
    spiral.add_argument('--max-stepdown', type=float, default=0.2, help='Max stepdown per pass')
    spiral.add_argument('--rays', type=int, default=5,
                        help="Number of 'rays' coming out from the center")
    spiral.add_argument('--radial-wobble', type=float, default=0.0, help="Radius 'wobble' in mm")
    spiral.add_argument('--steps-per-turn', type=int, default=360,
                        help='Number of steps to take around the circle')
    add_common_arguments(spiral, default_tool=Config.TOOL)
    spiral.set_defaults(func=cmd_spiral)

    ticks = subparsers.add_parser('ticks', help='Radial tick marks')
    ticks.add_argument('--outer-rad', type=float, default=16.0, help='Outer radius of the ticks')
    ticks.add_argument('--inner-rad', type=float, default=14.72, help='Inner radius of the ticks')
    ticks.add_argument('--count', type=int, default=60, help='Number of tick positions')
    ticks.add_argument('--depth', type=float, default=0.1, help='Cut depth')
    ticks.add_argument('--skip', type=int, action='append', default=[],
                       help='Skip ticks whose index is a multiple of this (repeatable)')
    ticks.add_argument('--tool-dia', type=float, default=0.5, help='Engraver tip diameter')
    add_common_arguments(ticks, default_tool=Config.TOOL)
    ticks.set_defaults(func=cmd_ticks)

    flinque = subparsers.add_parser('flinque', help='Guilloche of concentric wobbling circles')
    flinque.add_argument('--outer-rad', type=float, default=19.0, help='Outer radius')
    flinque.add_argument('--inner-rad', type=float, default=1.0, help='Inner radius')
    flinque.add_argument('--step-over', type=float, default=0.75, help='Gap between circles')
    flinque.add_argument('--depth', type=float, default=0.2, help='Cut depth')
    flinque.add_argument('--rays', type=int, default=17,
                         help="Number of 'rays' coming out from the center")
    flinque.add_argument('--radial-wobble', type=float, default=1.0, help="Radius 'wobble' in mm")
    flinque.add_argument('--steps-per-turn', type=int, default=360,
                         help='Number of steps to take around the circle')
    add_common_arguments(flinque, default_tool=Config.TOOL)
    flinque.set_defaults(func=cmd_flinque)

    gear = subparsers.add_parser('gear', help='Spur gear on the rotary axis')
    gear.add_argument('-t', '--teeth', type=int, required=True, help='Number of gear teeth')
    gear.add_argument('-w', '--width', type=float, required=True, help='Width of the gear to cut')
    gear.add_argument('-m', '--module', type=float, default=1.0,
                      help='Gear module, must match cutter module')
    gear.add_argument('--cutter-dia', type=float, default=50.0, help='Diameter of cutter, in mm')
    gear.add_argument('--max-depth', type=float, default=0.5, help='Max depth to cut, in mm')
    add_common_arguments(gear, default_tool=1, default_rpm=650, default_feed=60)
    gear.set_defaults(func=cmd_gear)

    knurl = subparsers.add_parser('knurl', help='Knurling tool on the rotary axis')
    knurl.add_argument('--dia', type=float, required=True,
                       help='Diameter of knurler we are creating, in mm')
    knurl.add_argument('--len', dest='length', type=float, default=10.0,
                       help='Length (along A axis) of the knurler, in mm')
    knurl.add_argument('--pitch', type=float, default=1.0, help='Knurl pitch, in mm per tooth')
    knurl.add_argument('--tool-inc-angle', type=float, default=40.0,
                       help='Tool included angle, in degrees')
    knurl.add_argument('--max-stepdown', type=float, default=0.25,
                       help='Max cutting stepdown, per pass, in mm')
    knurl.add_argument('--spiral-angle', type=float, default=45.0,
                       help='Spiral angle in degrees, 0 for straight-cut, 45 for diamond')
    knurl.add_argument('--reverse-spiral', action='store_true', help='Spiral the other way')
    add_common_arguments(knurl, default_tool=Config.TOOL, default_rpm=9500, default_feed=180)
    knurl.set_defaults(func=cmd_knurl)

    slit = subparsers.add_parser('slit', help='Slitting saw slots on the rotary axis')
    slit.add_argument('--stock-dia', type=float, default=10.0, help='Stock diameter, in mm')
    slit.add_argument('--len', dest='length', type=float, default=16.0,
                      help='Length (along X axis) of each slot')
    slit.add_argument('--depth', type=float, default=1.0, help='Slot depth, in mm')
    slit.add_argument('--slits', type=int, default=1, help='Number of slots around the part')
    slit.add_argument('--max-stepdown', type=float, default=0.25,
                      help='Max cutting stepdown, per pass, in mm')
    slit.add_argument('--speed', type=float, default=40.0,
                      help='Tool surface speed, in meters/minute')
    slit.add_argument('--feed-per-tooth', type=float, default=0.0254,
                      help='Feed rate, in mm/tooth')
    slit.add_argument('--tool-teeth', type=int, default=30, help='Saw teeth')
    slit.add_argument('--tool-dia', type=float, default=76.2, help='Saw diameter, in mm')
    add_common_arguments(slit, default_tool=1, speeds=False)
    slit.set_defaults(func=cmd_slit)

    flute = subparsers.add_parser('flute', help='Relieved flutes in a round tool blank')
    flute.add_argument('--flutes', type=int, required=True, help='Number of flutes in the cutter')
    flute.add_argument('--depth', type=float, required=True, help='Max depth of each flute, in mm')
    flute.add_argument('--dia', type=float, required=True,
                       help='Diameter of cutter we are creating, in mm')
    flute.add_argument('--len', dest='length', type=float, default=20.0,
                       help='Length of the cutter we are creating, in mm')
    flute.add_argument('--tool-dia', type=float, default=3.175, help='Diameter of tool, in mm')
    flute.add_argument('--max-stepdown', type=float, default=3.0,
                       help='Max cutting stepdown, per pass, in mm')
    flute.add_argument('--max-stepover', type=float, default=0.15,
                       help='Tool stepover, as a ratio of tool width')
    flute.add_argument('--spiral-angle', type=float, default=25.0,
                       help='Spiral angle in degrees, 0 for straight flutes')
    add_common_arguments(flute, default_tool=1, default_rpm=4500, default_feed=220)
    flute.set_defaults(func=cmd_flute)

    return parser


def cmd_cubes(args):
    errors = validate_positive({
        'Depth': args.depth,
        'Step over': args.step_over,
        'Cube size': args.cube_size,
    })
    errors += validate_trim_boundary(args.outer_rad, args.trim_factor)
    errors += validate_feed_rate(args.feed)

    params = CubeDialParams(
        outer_rad=args.outer_rad,
        depth=args.depth,
        step_over=args.step_over,
        cube_size=args.cube_size,
        trim_factor=args.trim_factor,
        rpm=args.rpm,
        feed=args.feed,
        tool=args.tool,
        name=args.name,
        coolant=args.coolant,
        safe_z=Config.SAFE_Z
    )
    return errors, params, generate_cube_dial, describe_cube_dial


def cmd_spiral(args):
    errors = validate_positive({
        'Outer radius': args.outer_rad,
        'Pass width': args.pass_width,
        'Steps per turn': args.steps_per_turn,
    })
    errors += validate_depths(args.min_depth, args.max_depth, args.max_stepdown)
    errors += validate_feed_rate(args.feed)

    params = SpiralParams(
        outer_rad=args.outer_rad,
        inner_rad=args.inner_rad,
        pass_width=args.pass_width,
        min_depth=args.min_depth,
        max_depth=args.max_depth,
        max_stepdown=args.max_stepdown,
        rays=args.rays,
        radial_wobble=args.radial_wobble,
        steps_per_turn=args.steps_per_turn,
        rpm=args.rpm,
        feed=args.feed,
        tool=args.tool,
        name=args.name,
        coolant=args.coolant
    )
    return errors, params, generate_spiral, describe_spiral


def cmd_ticks(args):
    errors = validate_positive({
        'Outer radius': args.outer_rad,
        'Inner radius': args.inner_rad,
        'Count': args.count,
        'Depth': args.depth,
    })
    errors += validate_positive({
        f'Skip value {i + 1}': modulus for i, modulus in enumerate(args.skip)
    })
    errors += validate_feed_rate(args.feed)

    params = TickDialParams(
        outer_rad=args.outer_rad,
        inner_rad=args.inner_rad,
        count=args.count,
        depth=args.depth,
        skip_mods=tuple(args.skip),
        rpm=args.rpm,
        feed=args.feed,
        tool=args.tool,
        tool_diameter=args.tool_dia,
        name=args.name,
        coolant=args.coolant,
        safe_z=Config.SAFE_Z
    )
    return errors, params, generate_tick_dial, describe_tick_dial


def cmd_flinque(args):
    errors = validate_positive({
        'Outer radius': args.outer_rad,
        'Step over': args.step_over,
        'Depth': args.depth,
        'Steps per turn': args.steps_per_turn,
    })
    errors += validate_feed_rate(args.feed)

    params = FlinqueParams(
        outer_rad=args.outer_rad,
        inner_rad=args.inner_rad,
        step_over=args.step_over,
        depth=args.depth,
        rays=args.rays,
        radial_wobble=args.radial_wobble,
        steps_per_turn=args.steps_per_turn,
        rpm=args.rpm,
        feed=args.feed,
        tool=args.tool,
        name=args.name,
        coolant=args.coolant
    )
    return errors, params, generate_flinque, describe_flinque


def cmd_gear(args):
    errors = validate_positive({
        'Teeth': args.teeth,
        'Width': args.width,
        'Module': args.module,
        'Cutter diameter': args.cutter_dia,
        'Max depth': args.max_depth,
    })
    errors += validate_feed_rate(args.feed)

    params = GearParams(
        teeth=args.teeth,
        width=args.width,
        module=args.module,
        cutter_dia=args.cutter_dia,
        max_depth=args.max_depth,
        rpm=args.rpm,
        feed=args.feed,
        tool=args.tool,
        name=args.name,
        coolant=args.coolant
    )
    return errors, params, generate_gear, describe_gear


def cmd_knurl(args):
    errors = validate_positive({
        'Diameter': args.dia,
        'Length': args.length,
        'Pitch': args.pitch,
        'Max stepdown': args.max_stepdown,
    })
    errors += validate_angle('Tool included angle', args.tool_inc_angle)
    errors += validate_angle('Spiral angle', args.spiral_angle, allow_zero=True)
    errors += validate_feed_rate(args.feed)

    params = KnurlParams(
        dia=args.dia,
        length=args.length,
        pitch=args.pitch,
        tool_inc_angle=args.tool_inc_angle,
        max_stepdown=args.max_stepdown,
        spiral_angle=args.spiral_angle,
        reverse_spiral=args.reverse_spiral,
        rpm=args.rpm,
        feed=args.feed,
        tool=args.tool,
        name=args.name,
        coolant=args.coolant
    )
    return errors, params, generate_knurl, describe_knurl


def cmd_slit(args):
    errors = validate_positive({
        'Stock diameter': args.stock_dia,
        'Length': args.length,
        'Depth': args.depth,
        'Slits': args.slits,
        'Max stepdown': args.max_stepdown,
        'Surface speed': args.speed,
        'Feed per tooth': args.feed_per_tooth,
        'Tool teeth': args.tool_teeth,
        'Tool diameter': args.tool_dia,
    })

    params = SlitParams(
        stock_dia=args.stock_dia,
        length=args.length,
        depth=args.depth,
        slits=args.slits,
        max_stepdown=args.max_stepdown,
        speed=args.speed,
        feed_per_tooth=args.feed_per_tooth,
        tool_teeth=args.tool_teeth,
        tool_dia=args.tool_dia,
        tool=args.tool,
        name=args.name,
        coolant=args.coolant
    )
    return errors, params, generate_slits, describe_slits


def cmd_flute(args):
    errors = validate_positive({
        'Flutes': args.flutes,
        'Depth': args.depth,
        'Diameter': args.dia,
        'Length': args.length,
        'Tool diameter': args.tool_dia,
        'Max stepdown': args.max_stepdown,
        'Max stepover': args.max_stepover,
    })
    errors += validate_angle('Spiral angle', args.spiral_angle, allow_zero=True)
    errors += validate_feed_rate(args.feed)

    params = FluteParams(
        flutes=args.flutes,
        depth=args.depth,
        dia=args.dia,
        length=args.length,
        tool_dia=args.tool_dia,
        max_stepdown=args.max_stepdown,
        max_stepover=args.max_stepover,
        spiral_angle=args.spiral_angle,
        rpm=args.rpm,
        feed=args.feed,
        tool=args.tool,
        name=args.name,
        coolant=args.coolant
    )
    return errors, params, generate_flutes, describe_flutes


def main(argv=None) -> int:
    """Main application entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else Config.LOG_LEVEL,
        format='%(levelname)s %(name)s: %(message)s'
    )

    errors, params, generate, describe = args.func(args)
    if errors:
        print("❌ Invalid parameters:")
        for error in errors:
            print(f"  - {error}")
        return 1

    print(describe(params))

    try:
        result = generate(params)
    except ValueError as e:
        # Includes InvalidMove raised while building moves
        print(f"\n❌ Error generating G-code: {e}")
        return 1

    for warning in result.warnings:
        print(f"⚠️  {warning}")

    output_path = build_output_path(args.output, Config.OUTPUT_DIR)
    try:
        write_program_file(output_path, result.program_text, overwrite=args.overwrite)
    except FileExistsError:
        print(f"❌ {output_path} already exists (use --overwrite to replace it)")
        return 1
    except OSError as e:
        print(f"❌ Could not write {output_path}: {e}")
        return 1

    print(f"✅ G-code generated: {output_path} ({len(result.moves)} moves)")

    if args.preview:
        from cncgen.visualizer import save_plot_preview

        base_name = os.path.splitext(os.path.basename(output_path))[0]
        plot_filename = save_plot_preview(
            result.moves,
            base_name,
            os.path.dirname(output_path) or Config.OUTPUT_DIR,
            result.boundary
        )
        print(f"Plot saved to: {plot_filename}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
