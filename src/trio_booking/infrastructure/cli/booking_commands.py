"""CLI commands for quoting and managing bookings."""

from __future__ import annotations

import click

from trio_booking.application.cancel_booking import CancelBookingHandler
from trio_booking.application.create_booking import CreateBookingHandler
from trio_booking.application.dto import AddonSelection, FeeBreakdownDTO
from trio_booking.application.quote_booking import QuoteBookingHandler
from trio_booking.application.show_booking import ShowBookingHandler
from trio_booking.domain.exceptions import DomainException
from trio_booking.domain.model.value_objects import FeeSchedule
from trio_booking.infrastructure.bootstrap import (
    booking_repository,
    fee_schedule,
    listing_repository,
)

DATE = click.DateTime(formats=["%Y-%m-%d"])


def configured_fees() -> FeeSchedule:
    try:
        return fee_schedule()
    except DomainException as exc:
        raise click.ClickException(f"Invalid fee configuration: {exc}")


def _parse_addons(raw: str | None) -> list[AddonSelection]:
    """Parse 'Helmet:1,Chalk:3' into AddonSelection list (qty optional)."""
    if not raw:
        return []
    selections: list[AddonSelection] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            selections.append(AddonSelection(item=pair))
            continue
        name, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(f"Invalid quantity '{qty_str}' for addon '{name}'.")
        selections.append(AddonSelection(item=name.strip(), qty=qty))
    return selections


def _display_breakdown(bd: FeeBreakdownDTO) -> None:
    """Shared formatting for a booking's cost lines."""
    click.echo(f"  {'Item':<28} {'Qty':>5} {'Cost':>12} {'Insurance':>12}")
    click.echo(f"  {'-'*60}")
    click.echo(
        f"  {'Daily rate x ' + str(bd.total_days) + ' day(s)':<28} {'':>5} "
        f"{bd.daily_total:>12} {bd.listing_insurance_total:>12}"
    )
    for line in bd.addons:
        label = line.item if not line.style else f"{line.item} ({line.style})"
        if line.consumable:
            label += " *"
        click.echo(f"  {label:<28} {line.qty:>5} {line.line_total:>12} {line.insurance:>12}")
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Daily total':<34} {bd.daily_total:>12}")
    click.echo(f"  {'Listing insurance':<34} {bd.listing_insurance_total:>12}")
    click.echo(f"  {'Addons':<34} {bd.addon_item_total:>12}")
    click.echo(f"  {'Addon insurance':<34} {bd.addon_insurance_total:>12}")
    click.echo(f"  {'Subtotal':<34} {bd.subtotal:>12}")
    click.echo(f"  {'Host payout':<34} {bd.host_payout:>12}")
    if any(line.consumable for line in bd.addons):
        click.echo("  * consumable, not insured")


@click.command("quote")
@click.option("--listing", "listing_id", required=True, help="Listing ID.")
@click.option("--start", required=True, type=DATE, help="First day (YYYY-MM-DD).")
@click.option("--end", required=True, type=DATE, help="Last day, inclusive (YYYY-MM-DD).")
@click.option("--addons", default=None, help="Addons as 'Item:Qty,Item:Qty'.")
def booking_quote(listing_id: str, start, end, addons: str | None) -> None:
    """Price a booking without making it."""
    handler = QuoteBookingHandler(listing_repo=listing_repository(), fees=configured_fees())

    try:
        dto = handler.handle(listing_id, start.date(), end.date(), _parse_addons(addons))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Quote for '{dto.listing_title}'  {dto.start_date} to {dto.end_date}")
    click.echo()
    _display_breakdown(dto.breakdown)


@click.command("create")
@click.option("--renter", required=True, help="Renter name.")
@click.option("--listing", "listing_id", required=True, help="Listing ID.")
@click.option("--start", required=True, type=DATE, help="First day (YYYY-MM-DD).")
@click.option("--end", required=True, type=DATE, help="Last day, inclusive (YYYY-MM-DD).")
@click.option("--addons", default=None, help="Addons as 'Item:Qty,Item:Qty'.")
def booking_create(renter: str, listing_id: str, start, end, addons: str | None) -> None:
    """Book a listing."""
    handler = CreateBookingHandler(
        booking_repo=booking_repository(),
        listing_repo=listing_repository(),
        fees=configured_fees(),
    )

    try:
        dto = handler.handle(renter, listing_id, start.date(), end.date(), _parse_addons(addons))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Booking #{dto.id} created  (status={dto.status})")
    click.echo(f"Renter:  {dto.renter_name}")
    click.echo(f"Listing: {dto.listing_title}  {dto.start_date} to {dto.end_date}")
    click.echo()
    _display_breakdown(dto.breakdown)


@click.command("show")
@click.option("--id", "booking_id", required=True, type=int, help="Booking ID to display.")
def booking_show(booking_id: int) -> None:
    """Show details of an existing booking."""
    handler = ShowBookingHandler(booking_repo=booking_repository())

    try:
        dto = handler.handle(booking_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Booking #{dto.id}  (status={dto.status})")
    click.echo(f"Renter:  {dto.renter_name}")
    click.echo(f"Listing: {dto.listing_title}  {dto.start_date} to {dto.end_date}")
    click.echo(f"Created: {dto.created_at}")
    click.echo()
    _display_breakdown(dto.breakdown)

    if dto.extensions:
        click.echo()
        click.echo(f"  {'Ext':<5} {'Dates':<26} {'Days':>5} {'Status':<10} {'Total':>12}")
        click.echo(f"  {'-'*62}")
        for ext in dto.extensions:
            dates = f"{ext.start_date} to {ext.end_date}"
            click.echo(
                f"  {'#' + str(ext.id):<5} {dates:<26} {ext.total_days:>5} "
                f"{ext.status:<10} {ext.total:>12}"
            )


@click.command("cancel")
@click.option("--id", "booking_id", required=True, type=int, help="Booking ID to cancel.")
def booking_cancel(booking_id: int) -> None:
    """Cancel a booking (frees its dates)."""
    handler = CancelBookingHandler(booking_repo=booking_repository())

    try:
        handler.handle(booking_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Booking #{booking_id} cancelled.")
