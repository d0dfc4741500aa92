"""
SBET stream writer.
"""

import logging
import os
from typing import BinaryIO, Iterable, Union

from .codec import encode
from .point import Point

logger = logging.getLogger(__name__)


class Writer:
    """
    Appends encoded SBET points to a binary sink.

    The writer never flushes on its own; buffered data reaches the sink when
    the owned file is closed, or when the caller flushes its own sink.
    """

    def __init__(self, sink: BinaryIO, owns_sink: bool = False):
        """
        Initialize writer.

        Args:
            sink: Binary writable
            owns_sink: Close the sink when the writer is closed
        """
        self.sink = sink
        self.owns_sink = owns_sink
        self.points_written = 0

    @classmethod
    def from_path(cls, path: Union[str, os.PathLike]) -> 'Writer':
        """Create or truncate an SBET file for writing."""
        sink = open(path, 'wb')
        logger.debug(f"Opened SBET file {path} for writing")
        return cls(sink, owns_sink=True)

    def write_one(self, point: Point) -> None:
        """
        Encode and append one point.

        Raises:
            OSError: If the sink rejects the write
        """
        self.sink.write(encode(point))
        self.points_written += 1

    def write_all(self, points: Iterable[Point]) -> int:
        """Write every point, returning how many were written."""
        count = 0
        for point in points:
            self.write_one(point)
            count += 1
        return count

    def close(self) -> None:
        if self.owns_sink:
            self.sink.close()
            logger.debug(f"Closed SBET output after {self.points_written} points")

    def __enter__(self) -> 'Writer':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
