"""
Shared fixtures for SBET tests.
"""

import logging

import pytest

from sbet.point import FIELD_NAMES, Point
from sbet.writer import Writer


def make_point(value: float, time: float = None) -> Point:
    """Point with every field set to value, and time overridden if given."""
    values = [value] * len(FIELD_NAMES)
    if time is not None:
        values[0] = time
    return Point(*values)


@pytest.fixture
def sample_points():
    """Five points one second apart, distinct values per field."""
    return [
        Point.from_values([t] + [t * 10.0 + i for i in range(1, len(FIELD_NAMES))])
        for t in (0.0, 1.0, 2.0, 3.0, 4.0)
    ]


@pytest.fixture
def sbet_file(tmp_path, sample_points):
    """SBET file holding sample_points."""
    path = tmp_path / 'sample.sbet'
    with Writer.from_path(path) as writer:
        writer.write_all(sample_points)
    return path


@pytest.fixture
def point_factory():
    """Factory for points with every field set to one value."""
    return make_point


@pytest.fixture(autouse=True)
def restore_logging():
    """Drop the stderr handler installed by the CLI, it holds the test's stderr."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)
