import logging

import click

from trio_booking.infrastructure.cli.booking_commands import (
    booking_cancel,
    booking_create,
    booking_quote,
    booking_show,
)
from trio_booking.infrastructure.cli.extension_commands import (
    extension_approve,
    extension_cancel,
    extension_decline,
    extension_request,
)
from trio_booking.infrastructure.cli.listing_commands import (
    listing_add,
    listing_list,
    listing_update_price,
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Trio: rental bookings, fees and extensions"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def listing() -> None:
    """Manage listings."""


@cli.group()
def booking() -> None:
    """Quote and manage bookings."""


@cli.group()
def extension() -> None:
    """Request and answer booking extensions."""


# Register subcommands
listing.add_command(listing_add)
listing.add_command(listing_list)
listing.add_command(listing_update_price)
booking.add_command(booking_cancel)
booking.add_command(booking_create)
booking.add_command(booking_quote)
booking.add_command(booking_show)
extension.add_command(extension_approve)
extension.add_command(extension_cancel)
extension.add_command(extension_decline)
extension.add_command(extension_request)
