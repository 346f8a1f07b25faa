"""
Per-sample interpolation of DE coefficient records.

For one Julian Date the interpolator finds the record, picks the item's
sub-interval inside it, maps the date onto the Chebyshev domain [-1, 1] and
evaluates every component, plus its rate for items that report one.
"""

import math
from typing import NamedTuple, Optional, Tuple

from .chebyshev import chebyshev, chebyshev_derivative
from .errors import DateOutOfRange, FileReadError
from .header import EphemerisHeader
from .items import RATE_ITEMS, validate_item_id
from .locator import RecordLocator


class Sample(NamedTuple):
    """One evaluated sample: values per component, and rates per Julian day."""

    jd: float
    values: Tuple[float, ...]
    rates: Optional[Tuple[float, ...]]


class Interpolator:
    def __init__(self, header: EphemerisHeader, locator: RecordLocator):
        self.header = header
        self.locator = locator

    def evaluate(self, item_id: int, jd: float) -> Sample:
        """Evaluate an item at a Julian Date.

        Args:
            item_id: Item index in [0, 14]
            jd: Julian Date inside the file's coverage

        Returns:
            The sample at jd

        Raises:
            ItemNotFound: If the item is invalid or has no data in the file
            DateOutOfRange: If jd lies outside the file's coverage
            FileReadError: If the record cannot be read
        """
        item_id = validate_item_id(item_id)
        item = self.header.descriptor(item_id)
        if not self.header.contains(jd):
            raise DateOutOfRange(
                f"JD {jd} is outside {self.header.time_start} to {self.header.time_end}"
            )

        record = self.locator.locate(jd)
        if not math.isfinite(record.start_time):
            raise FileReadError(f"record {record.index} has no valid start time")
        duration = self.header.record_span / item.subintervals_per_record
        index = math.floor((jd - record.start_time) / duration)
        index = min(max(index, 0), item.subintervals_per_record - 1)
        subinterval_start = record.start_time + index * duration
        t = (jd - subinterval_start) / duration * 2.0 - 1.0

        n = item.coeffs_per_component
        base = item.coeff_offset - 1 + index * item.coeffs_per_subinterval
        if base < 0 or base + item.coeffs_per_subinterval > len(record):
            raise FileReadError(
                f"item {item_id} coefficients [{base}, "
                f"{base + item.coeffs_per_subinterval}) exceed record of {len(record)}"
            )
        runs = [
            record.coefficients[base + c * n : base + (c + 1) * n]
            for c in range(item.component_count)
        ]

        values = tuple(chebyshev(run, t) for run in runs)
        rates = None
        if item_id in RATE_ITEMS:
            # d/djd = d/dt * dt/djd
            scale = 2.0 / duration
            rates = tuple(chebyshev_derivative(run, t) * scale for run in runs)
        return Sample(jd, values, rates)
