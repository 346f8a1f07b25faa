"""CLI command that evaluates an item over a range of Julian Dates."""

import sys
from typing import Optional

import click

from ..ephemeris import Ephemeris
from ..errors import EphemerisError, InvalidArgument
from ..interpolate import Sample
from ..items import parse_item
from ..logging import get_logger
from ..query import Query
from .common import parse_julian_date, parse_resolution

logger = get_logger(__name__)

# Digits needed to round-trip a double
DECIMAL_DIGITS = 17


def format_sample(sample: Sample) -> str:
    """Format a sample as one comma-separated line.

    The Julian Date comes first in fixed notation, then every value and,
    when present, every rate in exponent notation.
    """
    fields = [f"{sample.jd:.{DECIMAL_DIGITS}f}"]
    fields.extend(f"{v:.{DECIMAL_DIGITS}e}" for v in sample.values)
    if sample.rates is not None:
        fields.extend(f"{r:.{DECIMAL_DIGITS}e}" for r in sample.rates)
    return ",".join(fields)


def build_query(
    item: str, t0: str, t1: Optional[str], resolution: Optional[str]
) -> Query:
    """Turn command-line arguments into a Query.

    Raises:
        InvalidArgument: If an argument cannot be parsed, or only one of
            t1 and resolution is given
        ItemNotFound: If the item index is outside [0, 14]
    """
    if (t1 is None) != (resolution is None):
        raise InvalidArgument("t1 and resolution must be given together")
    item_id = parse_item(item)
    start = parse_julian_date(t0)
    if t1 is None:
        return Query(item_id=item_id, start=start)
    return Query(
        item_id=item_id,
        start=start,
        end=parse_julian_date(t1),
        resolution=parse_resolution(resolution),
    )


# Negative item indices must reach parse_item instead of being read as options
@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("file")
@click.argument("item")
@click.argument("t0")
@click.argument("t1", required=False)
@click.argument("resolution", required=False)
def evaluate(
    file: str, item: str, t0: str, t1: Optional[str], resolution: Optional[str]
) -> None:
    """Evaluate ITEM from a DE ephemeris FILE.

    ITEM is an index 0-14 or a name such as "mars" or "earth-moon-barycenter".
    With only T0 a single sample is printed. With T1 and RESOLUTION,
    RESOLUTION samples are spread evenly from T0 to T1 inclusive.

    Each output line is the Julian Date, the item's components and, for
    items 0-12, their rates per day.
    """
    try:
        query = build_query(item, t0, t1, resolution)
        with Ephemeris.open(file) as eph:
            for sample in eph.query(query):
                click.echo(format_sample(sample))
    except EphemerisError as e:
        logger.debug(f"{type(e).__name__} while evaluating {file}")
        click.echo(f"error: {e}", err=True)
        sys.exit(1)
