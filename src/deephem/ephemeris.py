"""
Reading DE ephemeris files.

An Ephemeris owns the open file and the single record buffer for as long as
it is open; use it as a context manager so both are released on every exit
path::

    with Ephemeris.open("linux_p1550p2650.440") as eph:
        for sample in eph.query(Query(item_id=2, start=2451545.0)):
            print(sample.jd, sample.values, sample.rates)
"""

import os
import sys
from typing import BinaryIO, Iterator, List, Union

from .errors import DateOutOfRange, FileOpenError
from .header import EphemerisHeader
from .interpolate import Interpolator, Sample
from .items import validate_item_id
from .locator import RecordLocator
from .logging import get_logger
from .query import Query

logger = get_logger(__name__)


class Ephemeris:
    """A DE ephemeris file opened for evaluation."""

    def __init__(
        self,
        stream: BinaryIO,
        max_seek_offset: int = sys.maxsize,
        owns_stream: bool = False,
    ):
        """
        Initialize an Ephemeris over an already open binary stream.

        Args:
            stream: Random-access binary stream positioned anywhere
            max_seek_offset: Largest offset passed to a single seek call
            owns_stream: Close the stream when the Ephemeris is closed
        """
        self.stream = stream
        self.owns_stream = owns_stream
        self.header = EphemerisHeader.from_stream(stream)
        self.locator = RecordLocator(self.header, stream, max_seek_offset=max_seek_offset)
        self.interpolator = Interpolator(self.header, self.locator)
        self.closed = False

    @classmethod
    def open(cls, path: Union[str, "os.PathLike[str]"], **kwargs) -> "Ephemeris":
        """Open a DE ephemeris file.

        Raises:
            FileOpenError: If the file cannot be opened
            FileReadError: If the header cannot be read
        """
        try:
            stream = open(path, "rb")
        except OSError as e:
            raise FileOpenError(f"{path}: {e.strerror or e}") from e

        try:
            eph = cls(stream, owns_stream=True, **kwargs)
        except BaseException:
            stream.close()
            raise
        logger.debug(f"Opened {path}")
        return eph

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        # Drop the record buffer along with the stream
        self.locator.record = None
        if self.owns_stream:
            self.stream.close()

    def __enter__(self) -> "Ephemeris":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def evaluate(self, item_id: int, jd: float) -> Sample:
        """Evaluate one item at one Julian Date."""
        self._check_open()
        return self.interpolator.evaluate(validate_item_id(item_id), jd)

    def query(self, query: Query) -> Iterator[Sample]:
        """Evaluate a query.

        The item and the whole date range are checked before any record is
        read; samples are then produced lazily in time order.

        Raises:
            ItemNotFound: If the item is invalid or has no data in the file
            DateOutOfRange: If the start or end lies outside the coverage
        """
        self._check_open()
        for jd in (query.start, query.stop):
            if not self.header.contains(jd):
                raise DateOutOfRange(
                    f"JD {jd} is outside {self.header.time_start} to {self.header.time_end}"
                )
        self.header.descriptor(query.item_id)
        points = query.time_points()
        logger.debug(f"Evaluating item {query.item_id} at {len(points)} time(s)")
        return self._samples(query.item_id, points)

    def _samples(self, item_id: int, points: List[float]) -> Iterator[Sample]:
        for jd in points:
            self._check_open()
            yield self.interpolator.evaluate(item_id, jd)

    def _check_open(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed Ephemeris")
