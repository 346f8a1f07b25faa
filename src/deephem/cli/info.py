"""CLI command that describes the header of a DE ephemeris file."""

import sys

import click

from ..ephemeris import Ephemeris
from ..errors import EphemerisError
from ..items import Item


@click.command()
@click.argument("file")
def info(file: str) -> None:
    """Show the decoded header of a DE ephemeris FILE."""
    try:
        with Ephemeris.open(file) as eph:
            header = eph.header
    except EphemerisError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    click.echo(f"DE version:       {header.version}")
    click.echo(f"Coverage:         JD {header.time_start} to {header.time_end}")
    click.echo(f"Record span:      {header.record_span} days")
    click.echo(f"Records:          {header.record_count}")
    click.echo(
        f"Record size:      {header.coeffs_per_record} coefficients "
        f"({header.record_byte_size} bytes)"
    )
    click.echo(f"Constants:        {header.constant_count}")
    click.echo(f"Byte order:       {header.byte_order.value}")
    click.echo("")
    click.echo(f"{'ID':>2}  {'ITEM':<30} {'OFFSET':>6} {'COEFFS':>6} {'SUBINT':>6} {'COMP':>4}")
    for item in Item:
        descriptor = header.items[item.value]
        if not descriptor.present:
            continue
        click.echo(
            f"{item.value:>2}  {item.name.lower():<30} {descriptor.coeff_offset:>6} "
            f"{descriptor.coeffs_per_component:>6} "
            f"{descriptor.subintervals_per_record:>6} {descriptor.component_count:>4}"
        )
