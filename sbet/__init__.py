"""
SBET Package

Read and write Smoothed Best Estimate of Trajectory (SBET) files and
interpolate trajectory samples in time.

File Format:
    - Headerless concatenation of fixed-size records, no footer or count
    - Each record: 17 little-endian IEEE-754 doubles (112 bytes)
    - Field order: time, latitude, longitude, altitude, x/y/z velocity,
      roll, pitch, yaw, wander angle, x/y/z acceleration, x/y/z angular rate

Conventions:
    - Angles are stored in radians, time in seconds, altitude in meters
    - Points are assumed sorted by ascending time; this is never checked
"""

from .point import Point, FIELD_NAMES, NUM_FIELDS, FIELD_SIZE, RECORD_SIZE, SBET_DTYPE
from .errors import (
    SbetError,
    TruncatedRecordError,
    InterpolationError,
    NoPointsError,
    OnlyOnePointError,
    ExtrapolationError,
)
from .codec import decode, decode_record, encode
from .reader import Reader, ReadResult, estimate_point_count, read_array, read_endpoints
from .writer import Writer
from .interpolate import interpolate, TrajectoryInterpolator
from .export import filter_time_range, write_csv
from .config import Config, CsvOptions, FilterOptions

__version__ = "0.1.0"
__all__ = [
    "Point",
    "FIELD_NAMES",
    "NUM_FIELDS",
    "FIELD_SIZE",
    "RECORD_SIZE",
    "SBET_DTYPE",
    "SbetError",
    "TruncatedRecordError",
    "InterpolationError",
    "NoPointsError",
    "OnlyOnePointError",
    "ExtrapolationError",
    "decode",
    "decode_record",
    "encode",
    "Reader",
    "ReadResult",
    "estimate_point_count",
    "read_array",
    "read_endpoints",
    "Writer",
    "interpolate",
    "TrajectoryInterpolator",
    "filter_time_range",
    "write_csv",
    "Config",
    "CsvOptions",
    "FilterOptions",
]
