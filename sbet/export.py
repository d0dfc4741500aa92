"""
Time filtering and CSV export of SBET points.

CSV layout:
    latitude,longitude,altitude[,time]

Latitude and longitude are written in degrees, altitude in meters and time
in seconds, unconverted.
"""

import csv
import logging
from typing import Iterable, Iterator, List, TextIO

from .point import Point

logger = logging.getLogger(__name__)


def filter_time_range(
    points: Iterable[Point],
    start_time: float = float('-inf'),
    stop_time: float = float('inf'),
) -> Iterator[Point]:
    """
    Yield the points with start_time <= time <= stop_time, in order.

    Args:
        points: Source points
        start_time: Inclusive lower bound
        stop_time: Inclusive upper bound
    """
    for point in points:
        if start_time <= point.time <= stop_time:
            yield point


def csv_header(include_time: bool = False) -> List[str]:
    header = ['latitude', 'longitude', 'altitude']
    if include_time:
        header.append('time')
    return header


def csv_row(point: Point, include_time: bool = False) -> List[float]:
    row = [point.latitude_degrees, point.longitude_degrees, point.altitude]
    if include_time:
        row.append(point.time)
    return row


def write_csv(
    points: Iterable[Point],
    output: TextIO,
    include_time: bool = False,
) -> int:
    """
    Write points as CSV.

    Args:
        points: Points to write
        output: Text stream (opened with newline='' for files)
        include_time: Append a time column

    Returns:
        Number of rows written, header excluded
    """
    writer = csv.writer(output, lineterminator='\n')
    writer.writerow(csv_header(include_time))

    rows = 0
    for point in points:
        writer.writerow(csv_row(point, include_time))
        rows += 1

    logger.info(f"Wrote {rows} CSV rows")
    return rows
