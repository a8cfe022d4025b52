"""Multi-pass depth calculation utilities."""
import math
from typing import Iterator, List


def calculate_num_passes(total_depth: float, pass_depth: float) -> int:
    """
    Calculate the number of passes needed for a given depth.

    Args:
        total_depth: Total depth to cut (mm)
        pass_depth: Maximum depth per pass (mm)

    Returns:
        Number of passes required (at least 1)
    """
    if pass_depth <= 0:
        return 1
    return max(1, math.ceil(total_depth / pass_depth))


def calculate_pass_depths(total_depth: float, pass_depth: float) -> List[float]:
    """
    Calculate cumulative depths for each pass.

    Returns evenly distributed pass depths that end at total_depth.

    Args:
        total_depth: Total depth to cut (mm)
        pass_depth: Maximum depth per pass (mm)

    Returns:
        List of cumulative depths for each pass
    """
    num_passes = calculate_num_passes(total_depth, pass_depth)
    actual_pass_depth = total_depth / num_passes

    depths = []
    for i in range(1, num_passes + 1):
        depths.append(i * actual_pass_depth)

    return depths


def iter_step_down_offsets(total_depth: float, pass_depth: float) -> Iterator[float]:
    """
    Iterate over Z offsets for a pattern cut in several step-downs.

    The pattern is cut first raised by most of the total depth, then lowered
    evenly until the final pass runs at offset 0.

    Yields:
        Z offset for each pass, ending with 0.0
    """
    num_passes = calculate_num_passes(total_depth, pass_depth)
    for step in range(1, num_passes + 1):
        yield total_depth * (1.0 - step / num_passes)


def iter_finishing_depths(total_depth: float, max_depth: float) -> Iterator[float]:
    """
    Iterate over cumulative depths that finish with two equal light passes.

    Full max_depth passes are taken until the remaining depth is within
    2 * max_depth, then the rest is split into two equal passes.

    Yields:
        Cumulative depth for each pass, ending with total_depth
    """
    if max_depth <= 0:
        yield total_depth
        return

    depth = 0.0
    while total_depth - depth > 2.0 * max_depth:
        depth += max_depth
        yield depth

    yield depth + (total_depth - depth) / 2.0
    yield total_depth


def iter_clamped_depths(total_depth: float, pass_depth: float) -> Iterator[float]:
    """
    Iterate over cumulative depths in full pass_depth steps.

    The last pass is clamped to total_depth, so it may be shallower than the
    others.

    Yields:
        Cumulative depth for each pass, ending with total_depth
    """
    if total_depth <= 0:
        return
    if pass_depth <= 0:
        yield total_depth
        return

    depth = 0.0
    # Within 1e-9 of a full step counts as the last pass
    while total_depth - depth > pass_depth + 1e-9:
        depth += pass_depth
        yield depth
    yield total_depth
