"""
SBET stream reader.

A Reader wraps any binary readable (a file, an in-memory buffer, standard
input) and turns it into a forward-only sequence of decoded points.

Iterating a Reader yields ReadResult values rather than raising, so that
each element can be inspected on its own:

    with Reader.from_path('trajectory.sbet') as reader:
        for result in reader:
            if not result.ok:
                ...
            point = result.point

Use Reader.points() to get plain points and have the first failure raised.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Tuple, Union

import numpy as np

from .codec import decode, decode_record
from .errors import SbetError, TruncatedRecordError
from .point import RECORD_SIZE, SBET_DTYPE, Point

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


@dataclass(frozen=True)
class ReadResult:
    """Outcome of pulling one record: either a point or an error."""
    point: Optional[Point] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Point:
        """Return the point, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.point


class Reader:
    """
    Reads SBET points from a binary source.

    The reader is forward-only: once end-of-stream or an error has been
    reached it is exhausted and yields nothing further.
    """

    def __init__(self, source: BinaryIO, owns_source: bool = False):
        """
        Initialize reader.

        Args:
            source: Binary readable positioned at the start of a record
            owns_source: Close the source when the reader is closed
        """
        self.source = source
        self.owns_source = owns_source
        self.records_read = 0
        self._exhausted = False

    @classmethod
    def from_path(cls, path: PathLike) -> 'Reader':
        """
        Open an SBET file for reading.

        Args:
            path: Path to the SBET file

        Returns:
            Reader owning the opened file
        """
        source = open(path, 'rb')
        logger.debug(f"Opened SBET file {path} for reading")
        return cls(source, owns_source=True)

    def read_one(self) -> Optional[Point]:
        """
        Read one point.

        Returns:
            The next Point, or None at a clean end-of-stream

        Raises:
            TruncatedRecordError: If the source ends inside a record
            OSError: If the underlying read fails
        """
        point = decode(self.source, offset=self.records_read * RECORD_SIZE)
        if point is not None:
            self.records_read += 1
        return point

    def __iter__(self) -> 'Reader':
        return self

    def __next__(self) -> ReadResult:
        if self._exhausted:
            raise StopIteration

        try:
            point = self.read_one()
        except (SbetError, OSError) as e:
            # No resynchronization: the position after a failure is undefined
            self._exhausted = True
            logger.debug(f"Read failed after {self.records_read} records: {e}")
            return ReadResult(error=e)

        if point is None:
            self._exhausted = True
            logger.debug(f"End of stream after {self.records_read} records")
            raise StopIteration

        return ReadResult(point=point)

    def points(self) -> Iterator[Point]:
        """Yield decoded points, raising the first error encountered."""
        for result in self:
            yield result.unwrap()

    def decimate(self, step: int) -> Iterator[ReadResult]:
        """
        Yield every Nth result, starting with the first.

        Skipped records are still read and decoded. Errors are always
        surfaced, whatever their position.

        Args:
            step: Stride, 1 keeps every point

        Returns:
            Iterator over the retained results
        """
        if step < 1:
            raise ValueError(f"Decimation step must be >= 1, got {step}")

        for index, result in enumerate(self):
            if not result.ok or index % step == 0:
                yield result

    def close(self) -> None:
        if self.owns_source:
            self.source.close()

    def __enter__(self) -> 'Reader':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


def estimate_point_count(path: PathLike) -> int:
    """
    Estimate the number of points in an SBET file from its size alone.

    Args:
        path: Path to the SBET file

    Returns:
        Number of complete records the file can hold
    """
    size = Path(path).stat().st_size
    count, remainder = divmod(size, RECORD_SIZE)
    if remainder:
        logger.warning(
            f"{path}: size {size} is not a multiple of {RECORD_SIZE} bytes, "
            f"last record is truncated"
        )
    return count


def read_endpoints(path: PathLike) -> Optional[Tuple[Point, Point]]:
    """
    Read the first and last complete records of an SBET file.

    Only those two records are read; a truncated tail is ignored.

    Args:
        path: Path to the SBET file

    Returns:
        (first, last) points, or None if the file holds no complete record
    """
    count = Path(path).stat().st_size // RECORD_SIZE
    if count == 0:
        return None

    last_offset = (count - 1) * RECORD_SIZE
    with open(path, 'rb') as f:
        first = decode_record(f.read(RECORD_SIZE), offset=0)
        f.seek(last_offset)
        last = decode_record(f.read(RECORD_SIZE), offset=last_offset)

    return first, last


def read_array(source: Union[PathLike, BinaryIO]) -> np.ndarray:
    """
    Load a whole SBET source into a structured numpy array.

    Args:
        source: Path to an SBET file or a binary readable

    Returns:
        Array of SBET_DTYPE records, one per point (read-only)

    Raises:
        TruncatedRecordError: If the data ends with a partial record
    """
    if isinstance(source, (str, os.PathLike)):
        with open(source, 'rb') as f:
            data = f.read()
    else:
        data = source.read()

    remainder = len(data) % RECORD_SIZE
    if remainder:
        raise TruncatedRecordError(remainder, offset=len(data) - remainder)

    records = np.frombuffer(data, dtype=SBET_DTYPE)
    logger.info(f"Loaded {len(records)} SBET records")
    return records
