"""
Exceptions raised by the SBET reader, writer and interpolator.

Clean end-of-stream is not an error: readers signal it by returning None.
Operating-system failures are not wrapped and propagate as OSError.
"""

from typing import Optional

from .point import FIELD_NAMES, FIELD_SIZE, NUM_FIELDS, RECORD_SIZE


class SbetError(Exception):
    """Base class for all SBET errors."""


class TruncatedRecordError(SbetError):
    """
    End of input reached in the middle of a record.

    Attributes:
        bytes_read: Number of bytes of the record that were available
        field_index: Index of the first incomplete field
        field_name: Name of the first incomplete field
        offset: Byte offset of the record in its stream, if known
    """

    def __init__(self, bytes_read: int, offset: Optional[int] = None):
        self.bytes_read = bytes_read
        self.field_index = min(bytes_read // FIELD_SIZE, NUM_FIELDS - 1)
        self.field_name = FIELD_NAMES[self.field_index]
        self.offset = offset

        where = f" at offset {offset}" if offset is not None else ""
        super().__init__(
            f"truncated record{where}: got {bytes_read} of {RECORD_SIZE} bytes, "
            f"input ended in field '{self.field_name}' ({self.field_index})"
        )


class InterpolationError(SbetError):
    """Interpolation could not produce a point."""


class NoPointsError(InterpolationError):
    def __init__(self):
        super().__init__("no points")


class OnlyOnePointError(InterpolationError):
    def __init__(self):
        super().__init__("only one point")


class ExtrapolationError(InterpolationError):
    """
    Query time lies outside the time range of the points.

    Attributes:
        time: The query time
        start_time: Time of the first point
        end_time: Time of the last point
    """

    def __init__(self, time: float, start_time: float, end_time: float):
        self.time = time
        self.start_time = start_time
        self.end_time = end_time

        if time < start_time:
            detail = f"{time} is before first point time of {start_time}"
        else:
            detail = f"{time} is after last point time of {end_time}"
        super().__init__(f"extrapolation: {detail}")
