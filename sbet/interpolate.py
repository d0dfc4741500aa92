"""
Time interpolation of SBET points.

Every field of the two bracketing points, time included, is interpolated
linearly:

    factor = (time - before.time) / (after.time - before.time)
    value  = before.value + factor * (after.value - before.value)

The points should be sorted by ascending time. interpolate() assumes this
and does not check it: on unsorted input the first bracketing pair found
by a forward scan wins.

Two entry points are provided:
    - interpolate(): linear scan over adjacent pairs, O(n) per query
    - TrajectoryInterpolator: binary search over a time index, for many
      queries against the same trajectory. It selects the same pair as the
      linear scan, and uses the scan itself when the input is unsorted.
"""

import logging
import os
from itertools import islice
from typing import Iterable, List, Sequence, Union

import numpy as np

from .errors import ExtrapolationError, NoPointsError, OnlyOnePointError
from .point import Point
from .reader import Reader

logger = logging.getLogger(__name__)


def _check_range(points: Sequence[Point], time: float) -> None:
    if not points:
        raise NoPointsError()
    if len(points) == 1:
        raise OnlyOnePointError()

    start_time = points[0].time
    end_time = points[-1].time
    if time < start_time or time > end_time:
        raise ExtrapolationError(time, start_time, end_time)


def _interpolate_pair(before: Point, after: Point, time: float) -> Point:
    # Exact hits return the sample itself, which also covers duplicate times
    if time == before.time:
        return before
    if time == after.time:
        return after

    factor = (time - before.time) / (after.time - before.time)
    return Point(*(
        b + factor * (a - b)
        for b, a in zip(before.values(), after.values())
    ))


def interpolate(points: Sequence[Point], time: float) -> Point:
    """
    Interpolate a point at the given time.

    Args:
        points: Points sorted by ascending time
        time: Query time, within [first time, last time]

    Returns:
        Interpolated Point

    Raises:
        NoPointsError: If points is empty
        OnlyOnePointError: If there is a single point
        ExtrapolationError: If time lies outside the points' time range
    """
    _check_range(points, time)

    for before, after in zip(points, islice(points, 1, None)):
        if before.time <= time <= after.time:
            return _interpolate_pair(before, after, time)

    # Only reachable with unsorted input or a NaN query time
    raise ExtrapolationError(time, points[0].time, points[-1].time)


class TrajectoryInterpolator:
    """
    Interpolates points from an in-memory trajectory using a time index.

    The trajectory is kept in the order given; it is not re-sorted. Sort
    order is checked once at construction: sorted trajectories are searched
    with the index, unsorted ones fall back to interpolate() so that the
    first bracketing pair still wins.
    """

    def __init__(self, points: Iterable[Point]):
        """
        Initialize interpolator.

        Args:
            points: Points, normally sorted by ascending time (at least two)
        """
        self.points = list(points)

        if not self.points:
            raise NoPointsError()
        if len(self.points) == 1:
            raise OnlyOnePointError()

        self.times = np.array([p.time for p in self.points], dtype=np.float64)
        self.time_start = self.points[0].time
        self.time_end = self.points[-1].time

        # NaN times compare False and count as unsorted
        self.is_sorted = bool(np.all(np.diff(self.times) >= 0))
        if not self.is_sorted:
            logger.warning(
                "Trajectory times are not in ascending order, "
                "falling back to linear scan"
            )

        logger.info(
            f"Trajectory interpolator initialized with {len(self.points)} points, "
            f"time range: {self.time_start:.3f} to {self.time_end:.3f}"
        )

    def __len__(self) -> int:
        return len(self.points)

    def interpolate(self, time: float) -> Point:
        """
        Interpolate a point at the given time.

        Raises:
            ExtrapolationError: If time lies outside [time_start, time_end]
        """
        if not self.is_sorted:
            return interpolate(self.points, time)

        if not self.time_start <= time <= self.time_end:
            raise ExtrapolationError(time, self.time_start, self.time_end)

        # First index whose time is >= the query time
        idx = int(np.searchsorted(self.times, time, side='left'))
        if idx == 0:
            return self.points[0]

        return _interpolate_pair(self.points[idx - 1], self.points[idx], time)

    def interpolate_many(self, times: Iterable[float]) -> List[Point]:
        """Interpolate a point for each query time, in order."""
        return [self.interpolate(t) for t in times]

    @classmethod
    def from_reader(cls, reader: Reader) -> 'TrajectoryInterpolator':
        """Build an interpolator from every point of a reader."""
        return cls(reader.points())

    @classmethod
    def from_path(cls, path: Union[str, os.PathLike]) -> 'TrajectoryInterpolator':
        """Build an interpolator from an SBET file."""
        with Reader.from_path(path) as reader:
            interpolator = cls.from_reader(reader)
        logger.info(f"Loaded trajectory from {path}")
        return interpolator
