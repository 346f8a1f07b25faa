"""
Record addressing for DE ephemeris files.

Coefficient records are fixed-size and laid out back to back after the
header, so a Julian Date maps directly to a record index. The locator keeps
exactly one record resident and only touches the file when a query falls
into a different record.
"""

import io
import math
import sys
from typing import BinaryIO, Iterator

import numpy as np

from .errors import FileReadError
from .header import EphemerisHeader
from .logging import get_logger

logger = get_logger(__name__)


def seek_offsets(record_skip: int, record_byte_size: int, max_offset: int) -> Iterator[int]:
    """Split a relative move of whole records into expressible seek offsets.

    Each yielded offset is a multiple of record_byte_size whose magnitude
    does not exceed max_offset. Together they add up to exactly
    record_skip * record_byte_size. Nothing is yielded for a zero skip.

    Args:
        record_skip: Records to advance; negative moves backwards
        record_byte_size: Size of one record in bytes
        max_offset: Largest offset a single seek call can express

    Yields:
        Relative byte offsets for successive seek calls
    """
    if record_byte_size <= 0:
        raise ValueError("record_byte_size must be positive")
    max_records = max_offset // record_byte_size
    if max_records < 1:
        raise ValueError("max_offset is smaller than one record")

    direction = 1 if record_skip >= 0 else -1
    remaining = abs(record_skip)
    while remaining >= max_records:
        yield direction * max_records * record_byte_size
        remaining -= max_records
    if remaining:
        yield direction * remaining * record_byte_size


class CoefficientRecord:
    """The single record buffer owned by a RecordLocator.

    The buffer is allocated once and overwritten in place on every record
    change; index is -1 until the first record is loaded.
    """

    def __init__(self, size: int):
        self.coefficients = np.zeros(size, dtype=np.float64)
        self.index = -1

    @property
    def start_time(self) -> float:
        return float(self.coefficients[0])

    @property
    def end_time(self) -> float:
        return float(self.coefficients[1])

    def __len__(self) -> int:
        return len(self.coefficients)

    def __repr__(self) -> str:
        return (
            f"CoefficientRecord(index={self.index}, start={self.start_time}, "
            f"end={self.end_time}, size={len(self)})"
        )


class RecordLocator:
    """Maps Julian Dates to coefficient records and keeps one resident.

    The stream position always sits just past the resident record (or at the
    first record before anything is loaded), so every move is expressed as
    a relative skip of whole records.
    """

    def __init__(
        self,
        header: EphemerisHeader,
        stream: BinaryIO,
        max_seek_offset: int = sys.maxsize,
    ):
        self.header = header
        self.stream = stream
        if max_seek_offset < header.record_byte_size:
            raise ValueError(
                f"max_seek_offset {max_seek_offset} is smaller than one record "
                f"of {header.record_byte_size} bytes"
            )
        self.max_seek_offset = max_seek_offset
        self.record = CoefficientRecord(header.coeffs_per_record)
        self.read_count = 0
        self._dtype = header.byte_order.float64
        self._seek(header.records_offset, io.SEEK_SET)

    @property
    def current_index(self) -> int:
        return self.record.index

    def record_index(self, jd: float) -> int:
        """Absolute index of the record covering jd.

        The end of coverage belongs to the last record rather than to a
        record past the end of the file.
        """
        index = math.floor((jd - self.header.time_start) / self.header.record_span)
        return min(max(index, 0), self.header.record_count - 1)

    def locate(self, jd: float) -> CoefficientRecord:
        """Get the record covering jd, reading it only if not resident.

        Args:
            jd: Julian Date inside the file's coverage

        Returns:
            The resident record buffer

        Raises:
            FileReadError: If seeking or reading the record fails
        """
        target = self.record_index(jd)
        if target == self.record.index:
            return self.record

        skip = target - self.record.index - 1
        try:
            for offset in seek_offsets(
                skip, self.header.record_byte_size, self.max_seek_offset
            ):
                self._seek(offset, io.SEEK_CUR)
        except FileReadError:
            self._invalidate(target)
            raise
        self._read_into_buffer(target)
        return self.record

    def _read_into_buffer(self, target: int) -> None:
        size = self.header.record_byte_size
        try:
            data = self.stream.read(size)
        except OSError as e:
            self._invalidate(target)
            raise FileReadError(f"reading record {target}: {e}") from e
        if data is None or len(data) != size:
            got = 0 if data is None else len(data)
            self._invalidate(target)
            raise FileReadError(
                f"short read of record {target}: wanted {size} bytes, got {got}"
            )

        # Copy into the resident buffer, converting to host order
        self.record.coefficients[:] = np.frombuffer(data, dtype=self._dtype)
        self.record.index = target
        self.read_count += 1
        logger.debug(
            f"Loaded record {target} covering JD {self.record.start_time} "
            f"to {self.record.end_time}"
        )

    def _invalidate(self, target: int) -> None:
        # After a failed seek or read the stream position is unknown; rewind
        # to record 0, which is where index -1 expects the stream to be.
        self.record.index = -1
        start = self.header.records_offset
        try:
            self.stream.seek(start, io.SEEK_SET)
        except (OSError, ValueError):
            logger.debug(f"Could not rewind after failed read of record {target}")

    def _seek(self, offset: int, whence: int) -> None:
        try:
            self.stream.seek(offset, whence)
        except (OSError, ValueError, OverflowError) as e:
            raise FileReadError(f"seek by {offset} failed: {e}") from e
