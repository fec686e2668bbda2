"""CLI commands for booking extensions."""

from __future__ import annotations

import click

from trio_booking.application.cancel_extension import CancelExtensionHandler
from trio_booking.application.dto import ExtensionDTO
from trio_booking.application.request_extension import RequestExtensionHandler
from trio_booking.application.respond_extension import RespondExtensionHandler
from trio_booking.domain.exceptions import DomainException
from trio_booking.infrastructure.bootstrap import booking_repository
from trio_booking.infrastructure.cli.booking_commands import DATE


def _display_extension(dto: ExtensionDTO) -> None:
    click.echo(
        f"Extension #{dto.id} on booking #{dto.booking_id}  (status={dto.status})"
    )
    click.echo(f"Dates: {dto.start_date} to {dto.end_date}  ({dto.total_days} day(s))")
    click.echo()
    click.echo(f"  {'Daily total':<28} {dto.daily_total:>12}")
    click.echo(f"  {'Addons':<28} {dto.addon_total:>12}")
    click.echo(f"  {'Listing insurance':<28} {dto.listing_insurance_total:>12}")
    click.echo(f"  {'Addon insurance':<28} {dto.addon_insurance_total:>12}")
    click.echo(f"  {'-'*41}")
    click.echo(f"  {'Extension total':<28} {dto.total:>12}")


@click.command("request")
@click.option("--booking", "booking_id", required=True, type=int, help="Booking ID to extend.")
@click.option("--end", required=True, type=DATE, help="New last day (YYYY-MM-DD).")
def extension_request(booking_id: int, end) -> None:
    """Request more days on a booking (starts the day after it ends)."""
    handler = RequestExtensionHandler(booking_repo=booking_repository())

    try:
        dto = handler.handle(booking_id, end.date())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_extension(dto)


def _respond(booking_id: int, extension_id: int, approve: bool) -> ExtensionDTO:
    handler = RespondExtensionHandler(booking_repo=booking_repository())
    try:
        return handler.handle(booking_id, extension_id, approve=approve)
    except DomainException as exc:
        raise click.ClickException(str(exc))


@click.command("approve")
@click.option("--booking", "booking_id", required=True, type=int, help="Booking ID.")
@click.option("--extension", "extension_id", required=True, type=int, help="Extension ID.")
def extension_approve(booking_id: int, extension_id: int) -> None:
    """Approve a pending extension (host)."""
    dto = _respond(booking_id, extension_id, approve=True)
    click.echo(f"Extension #{dto.id} approved; booking #{booking_id} now ends {dto.end_date}.")


@click.command("decline")
@click.option("--booking", "booking_id", required=True, type=int, help="Booking ID.")
@click.option("--extension", "extension_id", required=True, type=int, help="Extension ID.")
def extension_decline(booking_id: int, extension_id: int) -> None:
    """Decline a pending extension (host)."""
    dto = _respond(booking_id, extension_id, approve=False)
    click.echo(f"Extension #{dto.id} declined.")


@click.command("cancel")
@click.option("--booking", "booking_id", required=True, type=int, help="Booking ID.")
@click.option("--extension", "extension_id", required=True, type=int, help="Extension ID.")
def extension_cancel(booking_id: int, extension_id: int) -> None:
    """Withdraw a pending extension (renter)."""
    handler = CancelExtensionHandler(booking_repo=booking_repository())

    try:
        dto = handler.handle(booking_id, extension_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Extension #{dto.id} cancelled.")
