"""Shared utility modules for G-code generation."""

from .multipass import (
    calculate_num_passes,
    calculate_pass_depths,
    iter_step_down_offsets,
    iter_finishing_depths,
    iter_clamped_depths
)
from .gcode_format import (
    format_number,
    format_move,
    write_move,
    generate_comment,
    generate_preamble,
    generate_trailer
)
from .validators import (
    validate_positive,
    validate_trim_boundary,
    validate_depths,
    validate_feed_rate,
    validate_angle
)
from .file_manager import (
    create_output_directory,
    build_output_path,
    write_program_file
)

__all__ = [
    # multipass
    'calculate_num_passes',
    'calculate_pass_depths',
    'iter_step_down_offsets',
    'iter_finishing_depths',
    'iter_clamped_depths',
    # gcode_format
    'format_number',
    'format_move',
    'write_move',
    'generate_comment',
    'generate_preamble',
    'generate_trailer',
    # validators
    'validate_positive',
    'validate_trim_boundary',
    'validate_depths',
    'validate_feed_rate',
    'validate_angle',
    # file_manager
    'create_output_directory',
    'build_output_path',
    'write_program_file',
]
