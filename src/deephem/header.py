"""
Header parsing for binary DE ephemeris files.

The header is a fixed-offset layout shared by the whole DE family. Only the
fields needed to address and interpret coefficient records are decoded:

- the DE version number, which doubles as the byte-order sentinel
- the time coverage and the span of one record
- the number of named constants, which decides where the last two item
  descriptors live
- the 15 item descriptors (coefficient offset, coefficients per component,
  sub-intervals per record)
"""

import io
import math
import struct
import sys
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Tuple

import numpy as np

from .errors import FileReadError, ItemNotFound
from .items import COMPONENT_COUNTS, validate_item_id
from .logging import get_logger

logger = get_logger(__name__)

OFFSET_TIME = 0xA5C
OFFSET_TABLE1 = 0xA88
OFFSET_VERSION = 0xB18
OFFSET_TABLE2 = 0xB1C

# Constant names beyond this count are stored after the second table region
MAX_LEGACY_CONSTANTS = 400
CONSTANT_NAME_LENGTH = 6

DOUBLE_SIZE = 8
INT_SIZE = 4

TABLE1_ITEMS = 12
TABLE2_ITEMS = 1
TRAILING_ITEMS = 2


class ByteOrder(Enum):
    """Byte order of a file relative to the reading host."""

    NATIVE = "native"
    SWAPPED = "swapped"

    @property
    def struct_prefix(self) -> str:
        if self is ByteOrder.NATIVE:
            return "="
        return ">" if sys.byteorder == "little" else "<"

    @property
    def float64(self) -> np.dtype:
        """numpy dtype for doubles stored in this order."""
        return np.dtype(self.struct_prefix + "f8")


def infer_byte_order(raw_version_word: int) -> ByteOrder:
    """Infer the file byte order from the version word read in host order.

    DE version numbers are small integers, so a properly ordered word never
    has bits set in its upper half-word. Bits there mean the file was written
    with the opposite byte order.

    Args:
        raw_version_word: The 32-bit version field, unpacked in host order

    Returns:
        ByteOrder.SWAPPED if the upper half-word is non-zero, else NATIVE
    """
    if raw_version_word & 0xFFFF0000:
        return ByteOrder.SWAPPED
    return ByteOrder.NATIVE


@dataclass(frozen=True)
class ItemDescriptor:
    """Where one item's coefficients live inside every record."""

    coeff_offset: int
    coeffs_per_component: int
    subintervals_per_record: int
    component_count: int

    @property
    def present(self) -> bool:
        return self.subintervals_per_record != 0

    @property
    def coeffs_per_subinterval(self) -> int:
        return self.coeffs_per_component * self.component_count

    @property
    def last_coefficient(self) -> int:
        """1-based position of the item's last coefficient in a record."""
        return (
            self.coeff_offset
            + self.coeffs_per_subinterval * self.subintervals_per_record
            - 1
        )


@dataclass(frozen=True)
class EphemerisHeader:
    """Decoded header of a DE ephemeris file."""

    time_start: float
    time_end: float
    record_span: float
    version: int
    constant_count: int
    byte_order: ByteOrder
    items: Tuple[ItemDescriptor, ...]

    def __post_init__(self) -> None:
        if len(self.items) != len(COMPONENT_COUNTS):
            raise FileReadError(f"expected 15 item descriptors, got {len(self.items)}")
        if not all(map(math.isfinite, (self.time_start, self.time_end, self.record_span))):
            raise FileReadError("time coverage is not finite")
        if self.record_span <= 0:
            raise FileReadError(f"record span {self.record_span} is not positive")
        if self.time_end < self.time_start:
            raise FileReadError(
                f"coverage ends ({self.time_end}) before it starts ({self.time_start})"
            )
        for item_id, item in enumerate(self.items):
            if not item.present:
                continue
            if (
                item.coeff_offset < 1
                or item.coeffs_per_component < 1
                or item.subintervals_per_record < 0
            ):
                raise FileReadError(f"corrupt descriptor for item {item_id}: {item}")
        if self.coeffs_per_record < 2:
            raise FileReadError("records hold no coefficients")

    @property
    def coeffs_per_record(self) -> int:
        """Number of doubles in every record."""
        return max(item.last_coefficient for item in self.items)

    @property
    def record_byte_size(self) -> int:
        return self.coeffs_per_record * DOUBLE_SIZE

    @property
    def records_offset(self) -> int:
        """Byte offset of the first coefficient record."""
        return 2 * self.record_byte_size

    @property
    def record_count(self) -> int:
        """Number of records spanning the coverage."""
        return max(1, int(round((self.time_end - self.time_start) / self.record_span)))

    def contains(self, jd: float) -> bool:
        return self.time_start <= jd <= self.time_end

    def descriptor(self, item_id: int) -> ItemDescriptor:
        """Get the descriptor for an item that has data in this file.

        Raises:
            ItemNotFound: If the index is invalid or the item has no data
        """
        item = self.items[validate_item_id(item_id)]
        if not item.present:
            raise ItemNotFound(f"item {item_id} has no data in this file")
        return item

    @classmethod
    def from_stream(cls, stream: BinaryIO) -> "EphemerisHeader":
        """Read the header from a random-access binary stream.

        Args:
            stream: Binary stream supporting seek and read

        Returns:
            The decoded header

        Raises:
            FileReadError: If any read fails, comes up short, or the decoded
                fields are inconsistent
        """
        _seek(stream, OFFSET_VERSION)
        version_bytes = _read_exact(stream, INT_SIZE, "version number")
        (raw_version,) = struct.unpack("=I", version_bytes)
        byte_order = infer_byte_order(raw_version)
        prefix = byte_order.struct_prefix
        (version,) = struct.unpack(prefix + "i", version_bytes)

        _seek(stream, OFFSET_TIME)
        time_start, time_end, record_span = struct.unpack(
            prefix + "3d", _read_exact(stream, 3 * DOUBLE_SIZE, "time coverage")
        )
        (constant_count,) = struct.unpack(
            prefix + "i", _read_exact(stream, INT_SIZE, "constant count")
        )

        _seek(stream, OFFSET_TABLE1)
        table = list(_read_ints(stream, prefix, 3 * TABLE1_ITEMS, "item table"))
        _seek(stream, OFFSET_TABLE2)
        table.extend(_read_ints(stream, prefix, 3 * TABLE2_ITEMS, "item table"))
        if constant_count > MAX_LEGACY_CONSTANTS:
            extra_names = (constant_count - MAX_LEGACY_CONSTANTS) * CONSTANT_NAME_LENGTH
            logger.debug(f"Skipping {extra_names} bytes of relocated constant names")
            _seek(stream, extra_names, io.SEEK_CUR)
        table.extend(_read_ints(stream, prefix, 3 * TRAILING_ITEMS, "item table"))

        items = tuple(
            ItemDescriptor(
                coeff_offset=table[3 * i],
                coeffs_per_component=table[3 * i + 1],
                subintervals_per_record=table[3 * i + 2],
                component_count=COMPONENT_COUNTS[i],
            )
            for i in range(len(COMPONENT_COUNTS))
        )

        header = cls(
            time_start=time_start,
            time_end=time_end,
            record_span=record_span,
            version=version,
            constant_count=constant_count,
            byte_order=byte_order,
            items=items,
        )
        logger.info(
            f"DE{version} header: JD {time_start} to {time_end}, "
            f"{record_span}-day records of {header.coeffs_per_record} coefficients, "
            f"{byte_order.value} byte order"
        )
        return header


def _seek(stream: BinaryIO, offset: int, whence: int = io.SEEK_SET) -> None:
    try:
        stream.seek(offset, whence)
    except (OSError, ValueError, OverflowError) as e:
        raise FileReadError(f"seek to {offset} failed: {e}") from e


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    try:
        data = stream.read(size)
    except OSError as e:
        raise FileReadError(f"reading {what}: {e}") from e
    if data is None or len(data) != size:
        got = 0 if data is None else len(data)
        raise FileReadError(f"short read of {what}: wanted {size} bytes, got {got}")
    return data


def _read_ints(stream: BinaryIO, prefix: str, count: int, what: str) -> Tuple[int, ...]:
    data = _read_exact(stream, count * INT_SIZE, what)
    return struct.unpack(f"{prefix}{count}i", data)
