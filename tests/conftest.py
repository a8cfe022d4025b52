"""Test configuration and fixtures."""
import os

# Headless matplotlib for the toolpath preview tests
os.environ.setdefault('MPLBACKEND', 'Agg')

import pytest

from cncgen.models import Circle, Point


@pytest.fixture
def unit_circle():
    """Trim boundary of radius 1 at the origin."""
    return Circle(Point(0.0, 0.0), 1.0)


@pytest.fixture
def walk_params():
    """Safe height, cut depth and feed used by path walker tests."""
    return {'safe_z': 1.0, 'cut_z': -0.1, 'feed': 100.0}
