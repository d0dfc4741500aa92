"""
Binary record codec.

Maps one Point to exactly RECORD_SIZE bytes and back. The codec only deals
with layout and byte order; field values are never range checked.
"""

import struct
from typing import BinaryIO, Optional

from .errors import TruncatedRecordError
from .point import NUM_FIELDS, RECORD_SIZE, Point

RECORD_FORMAT = f'<{NUM_FIELDS}d'  # little-endian doubles
_RECORD = struct.Struct(RECORD_FORMAT)


def decode_record(buffer: bytes, offset: Optional[int] = None) -> Point:
    """
    Decode one complete record.

    Args:
        buffer: Exactly RECORD_SIZE bytes
        offset: Stream offset of the record, used in error messages

    Returns:
        Decoded Point

    Raises:
        TruncatedRecordError: If the buffer is shorter than a record
    """
    if len(buffer) != RECORD_SIZE:
        if len(buffer) < RECORD_SIZE:
            raise TruncatedRecordError(len(buffer), offset)
        raise ValueError(f"Record must be {RECORD_SIZE} bytes, got {len(buffer)}")
    return Point(*_RECORD.unpack(buffer))


def decode(stream: BinaryIO, offset: Optional[int] = None) -> Optional[Point]:
    """
    Read and decode the next record from a binary stream.

    Args:
        stream: Any object with a binary read() method
        offset: Stream offset of the record, used in error messages

    Returns:
        The decoded Point, or None if the stream ended cleanly before the
        first byte of the record

    Raises:
        TruncatedRecordError: If the stream ends inside the record
        OSError: If the underlying read fails
    """
    data = stream.read(RECORD_SIZE)
    if not data:
        return None

    # Pipes and sockets may return short reads before the real end of input
    while len(data) < RECORD_SIZE:
        chunk = stream.read(RECORD_SIZE - len(data))
        if not chunk:
            raise TruncatedRecordError(len(data), offset)
        data += chunk

    return decode_record(data, offset)


def encode(point: Point) -> bytes:
    """Encode a point as RECORD_SIZE little-endian bytes."""
    return _RECORD.pack(*point.values())
