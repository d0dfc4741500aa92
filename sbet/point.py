"""
SBET point data model.

An SBET record is 17 little-endian IEEE-754 doubles, in this order:

    time, latitude, longitude, altitude,
    x_velocity, y_velocity, z_velocity,
    roll, pitch, yaw, wander_angle,
    x_acceleration, y_acceleration, z_acceleration,
    x_angular_rate, y_angular_rate, z_angular_rate

Units:
    - time: seconds (GPS or system time reference)
    - latitude, longitude, roll, pitch, yaw, wander_angle: radians
    - altitude: meters
    - velocities: m/s
    - accelerations: m/s^2
    - angular rates: rad/s
"""

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

FIELD_NAMES = (
    'time', 'latitude', 'longitude', 'altitude',
    'x_velocity', 'y_velocity', 'z_velocity',
    'roll', 'pitch', 'yaw', 'wander_angle',
    'x_acceleration', 'y_acceleration', 'z_acceleration',
    'x_angular_rate', 'y_angular_rate', 'z_angular_rate',
)

NUM_FIELDS = len(FIELD_NAMES)
FIELD_SIZE = 8  # bytes per double
RECORD_SIZE = NUM_FIELDS * FIELD_SIZE

# Structured dtype for bulk loading, one little-endian double per field
SBET_DTYPE = np.dtype([(name, '<f8') for name in FIELD_NAMES])


@dataclass(frozen=True)
class Point:
    """A single SBET sample."""
    time: float
    latitude: float
    longitude: float
    altitude: float
    x_velocity: float
    y_velocity: float
    z_velocity: float
    roll: float
    pitch: float
    yaw: float
    wander_angle: float
    x_acceleration: float
    y_acceleration: float
    z_acceleration: float
    x_angular_rate: float
    y_angular_rate: float
    z_angular_rate: float

    @classmethod
    def from_values(cls, values: Iterable[float]) -> 'Point':
        """
        Build a point from field values given in record order.

        Args:
            values: Exactly 17 numbers

        Returns:
            Point instance
        """
        values = tuple(float(v) for v in values)
        if len(values) != NUM_FIELDS:
            raise ValueError(
                f"Expected {NUM_FIELDS} values for an SBET point, got {len(values)}"
            )
        return cls(*values)

    def values(self) -> Tuple[float, ...]:
        """Field values in record order."""
        return tuple(getattr(self, name) for name in FIELD_NAMES)

    @property
    def latitude_degrees(self) -> float:
        return math.degrees(self.latitude)

    @property
    def longitude_degrees(self) -> float:
        return math.degrees(self.longitude)
