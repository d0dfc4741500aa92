"""
Tests for the binary record codec.
"""

import io
import math
import struct

import pytest

from sbet.codec import RECORD_FORMAT, decode, decode_record, encode
from sbet.errors import TruncatedRecordError
from sbet.point import FIELD_NAMES, NUM_FIELDS, RECORD_SIZE, SBET_DTYPE, Point


class TestLayout:
    """Tests for record layout constants."""

    def test_record_size(self):
        """Record size is 17 doubles."""
        assert NUM_FIELDS == 17
        assert RECORD_SIZE == 112

    def test_struct_format_matches_record(self):
        """The codec's struct layout is exactly one record."""
        assert RECORD_FORMAT.startswith('<')
        assert struct.calcsize(RECORD_FORMAT) == RECORD_SIZE

    def test_dtype_matches_record(self):
        """Structured dtype has the same size and field order as a record."""
        assert SBET_DTYPE.itemsize == RECORD_SIZE
        assert SBET_DTYPE.names == FIELD_NAMES


class TestEncode:
    """Tests for encoding points."""

    def test_encoded_size(self, point_factory):
        """Encoding yields exactly one record."""
        assert len(encode(point_factory(1.0))) == RECORD_SIZE

    def test_little_endian_field_order(self, sample_points):
        """Fields are little-endian doubles in record order."""
        point = sample_points[1]
        data = encode(point)

        for i, name in enumerate(FIELD_NAMES):
            (value,) = struct.unpack_from('<d', data, i * 8)
            assert value == getattr(point, name)

    def test_no_range_validation(self):
        """Out-of-range angles and negative times are encoded as is."""
        point = Point.from_values([-5.0, 10.0, -10.0] + [0.0] * 14)
        assert decode_record(encode(point)) == point


class TestDecode:
    """Tests for decoding records."""

    def test_round_trip(self, sample_points):
        """decode(encode(p)) reproduces p bit for bit."""
        for point in sample_points:
            assert decode_record(encode(point)) == point

    def test_round_trip_awkward_values(self):
        """Values without a short decimal form survive the round trip."""
        point = Point.from_values([
            0.1, math.pi / 7, -math.e, 1e-310, 1e300, -0.0, 2.0 ** -52,
            1 / 3, 123456.789, -1e-5, math.tau, 5e-324, 7.0, 8.0, 9.0, 10.0, 11.0,
        ])
        decoded = decode_record(encode(point))

        for a, b in zip(decoded.values(), point.values()):
            assert struct.pack('<d', a) == struct.pack('<d', b)

    def test_decode_from_stream(self, sample_points):
        """Consecutive records are decoded from a stream."""
        stream = io.BytesIO(b''.join(encode(p) for p in sample_points[:2]))

        assert decode(stream) == sample_points[0]
        assert decode(stream) == sample_points[1]

    def test_clean_end_of_stream(self):
        """An empty stream signals end-of-stream, not an error."""
        assert decode(io.BytesIO(b'')) is None

    def test_truncated_record(self, point_factory):
        """A partial record raises TruncatedRecordError."""
        data = encode(point_factory(1.0))[:20]

        with pytest.raises(TruncatedRecordError) as excinfo:
            decode(io.BytesIO(data), offset=224)

        error = excinfo.value
        assert error.bytes_read == 20
        assert error.field_index == 2
        assert error.field_name == 'longitude'
        assert error.offset == 224

    def test_truncated_after_first_field(self, point_factory):
        """Ending right after the time field is still a truncation."""
        data = encode(point_factory(1.0))[:8]

        with pytest.raises(TruncatedRecordError) as excinfo:
            decode(io.BytesIO(data))
        assert excinfo.value.field_name == 'latitude'

    def test_short_reads(self, sample_points):
        """Records split across several reads are reassembled."""

        class TrickleStream(io.RawIOBase):
            def __init__(self, data):
                self.data = data

            def readable(self):
                return True

            def readinto(self, buffer):
                chunk, self.data = self.data[:5], self.data[5:]
                buffer[:len(chunk)] = chunk
                return len(chunk)

        stream = TrickleStream(encode(sample_points[2]))
        assert decode(stream) == sample_points[2]
        assert decode(stream) is None

    def test_decode_record_short_buffer(self):
        """decode_record rejects partial buffers."""
        with pytest.raises(TruncatedRecordError):
            decode_record(b'\x00' * (RECORD_SIZE - 1))


class TestPoint:
    """Tests for the point value type."""

    def test_from_values_wrong_length(self):
        """A point needs exactly 17 values."""
        with pytest.raises(ValueError):
            Point.from_values([1.0, 2.0])

    def test_immutable(self, point_factory):
        """Points cannot be modified."""
        point = point_factory(1.0)
        with pytest.raises(AttributeError):
            point.time = 2.0

    def test_degrees(self):
        """Latitude and longitude convert to degrees."""
        point = Point.from_values([0.0, math.pi / 2, -math.pi] + [0.0] * 14)
        assert point.latitude_degrees == pytest.approx(90.0)
        assert point.longitude_degrees == pytest.approx(-180.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
