"""Time queries: which Julian Dates to sample for an item."""

import math
from dataclasses import dataclass
from typing import List, Optional

from .errors import InvalidArgument
from .items import validate_item_id


@dataclass(frozen=True)
class Query:
    """An item and the evenly spaced Julian Dates to evaluate it at.

    With no end the query is the single point ``start``. With an end,
    ``resolution`` samples are spread from start to end inclusive; a
    resolution of 1 samples the midpoint, and equal start and end always
    collapse to one sample.
    """

    item_id: int
    start: float
    end: Optional[float] = None
    resolution: Optional[int] = None

    def __post_init__(self) -> None:
        validate_item_id(self.item_id)
        if not math.isfinite(self.start):
            raise InvalidArgument(f"start time {self.start} is not finite")
        if self.end is not None and not math.isfinite(self.end):
            raise InvalidArgument(f"end time {self.end} is not finite")
        if self.resolution is not None:
            if isinstance(self.resolution, bool) or not isinstance(self.resolution, int):
                raise InvalidArgument(f"resolution {self.resolution!r} is not an integer")
            if self.resolution <= 0:
                raise InvalidArgument(f"resolution {self.resolution} must be positive")

    @property
    def stop(self) -> float:
        return self.start if self.end is None else self.end

    def time_points(self) -> List[float]:
        """Get the Julian Dates this query samples.

        Returns:
            Sample times in generation order, start first
        """
        start, stop = self.start, self.stop
        resolution = self.resolution or 1
        if start == stop:
            return [start]
        if resolution == 1:
            return [(start + stop) * 0.5]

        step = (stop - start) / (resolution - 1)
        points = [start + step * i for i in range(resolution)]
        # Pin the final sample so rounding never pushes it past the end
        points[-1] = stop
        return points
