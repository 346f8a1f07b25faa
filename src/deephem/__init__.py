"""
Reader for JPL Development Ephemeris (DE) binary files.

The files store positions, orientations and time offsets as piecewise
Chebyshev polynomials in fixed-size records. This package decodes the
header, addresses records by Julian Date and evaluates values and rates.
"""

from .chebyshev import chebyshev, chebyshev_derivative
from .ephemeris import Ephemeris
from .errors import (
    EphemerisError,
    FileOpenError,
    FileReadError,
    InvalidArgument,
    ItemNotFound,
    DateOutOfRange,
)
from .header import ByteOrder, EphemerisHeader, ItemDescriptor, infer_byte_order
from .interpolate import Interpolator, Sample
from .items import COMPONENT_COUNTS, Item, component_count, has_rates, parse_item
from .locator import CoefficientRecord, RecordLocator, seek_offsets
from .query import Query

__all__ = [
    "chebyshev",
    "chebyshev_derivative",
    "Ephemeris",
    "EphemerisError",
    "FileOpenError",
    "FileReadError",
    "InvalidArgument",
    "ItemNotFound",
    "DateOutOfRange",
    "ByteOrder",
    "EphemerisHeader",
    "ItemDescriptor",
    "infer_byte_order",
    "Interpolator",
    "Sample",
    "COMPONENT_COUNTS",
    "Item",
    "component_count",
    "has_rates",
    "parse_item",
    "CoefficientRecord",
    "RecordLocator",
    "seek_offsets",
    "Query",
]
