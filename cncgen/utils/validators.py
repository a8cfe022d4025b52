"""Generator parameter validation utilities."""
from typing import Dict, List


def validate_positive(values: Dict[str, float]) -> List[str]:
    """
    Check that every named value is strictly positive.

    Args:
        values: Mapping of parameter name to value

    Returns:
        List of error messages (empty if all valid)
    """
    errors = []
    for name, value in values.items():
        if value is None or value <= 0:
            errors.append(f"{name} must be greater than 0 (got {value})")
    return errors


def validate_trim_boundary(outer_rad: float, trim_factor: float) -> List[str]:
    """
    Validate the trim circle derived from the stock radius.

    Args:
        outer_rad: Stock radius (mm)
        trim_factor: Fraction of the stock radius kept for the pattern

    Returns:
        List of error messages (empty if valid)
    """
    errors = []
    if outer_rad <= 0:
        errors.append(f"Outer radius must be greater than 0 (got {outer_rad})")
    if not 0 < trim_factor <= 1:
        errors.append(f"Trim factor must be in (0, 1] (got {trim_factor})")
    return errors


def validate_depths(min_depth: float, max_depth: float, max_stepdown: float) -> List[str]:
    """
    Validate a varying-depth cut.

    Depths are positive distances below the stock surface; the deepest
    point must not be shallower than the shallowest.

    Returns:
        List of error messages (empty if valid)
    """
    errors = []
    if min_depth < 0:
        errors.append(f"Minimum depth must not be negative (got {min_depth})")
    if max_depth < min_depth:
        errors.append(
            f"Maximum depth ({max_depth}) must not be less than minimum depth ({min_depth})"
        )
    if max_stepdown <= 0:
        errors.append(f"Max stepdown must be greater than 0 (got {max_stepdown})")
    return errors


def validate_feed_rate(feed: float, max_feed: float = 5000.0) -> List[str]:
    """
    Validate a feed rate in mm/min.

    Args:
        feed: Feed rate
        max_feed: Highest feed rate accepted

    Returns:
        List of error messages (empty if valid)
    """
    if feed <= 0:
        return [f"Feed rate must be greater than 0 (got {feed})"]
    if feed > max_feed:
        return [f"Feed rate {feed} mm/min exceeds maximum of {max_feed} mm/min"]
    return []


def validate_angle(name: str, degrees: float, allow_zero: bool = False) -> List[str]:
    """
    Validate an angle in degrees that must stay below 90.

    Args:
        name: Parameter name used in the message
        degrees: Angle to check
        allow_zero: Accept 0 as well as positive angles

    Returns:
        List of error messages (empty if valid)
    """
    lowest_ok = degrees >= 0 if allow_zero else degrees > 0
    if not lowest_ok or degrees >= 90:
        bounds = "[0, 90)" if allow_zero else "(0, 90)"
        return [f"{name} must be in {bounds} degrees (got {degrees})"]
    return []
