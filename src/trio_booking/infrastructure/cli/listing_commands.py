"""CLI commands for the Listing aggregate."""

from __future__ import annotations

import click

from trio_booking.application.add_listing import AddListingHandler
from trio_booking.application.dto import AddonSpec
from trio_booking.application.update_listing_price import UpdateListingPriceHandler
from trio_booking.domain.exceptions import DomainException
from trio_booking.infrastructure.bootstrap import listing_repository


def _parse_addon(raw: str, consumable: bool) -> AddonSpec:
    """Parse 'Helmet:10.00' or 'Helmet:10.00:Red' ('free' for no price)."""
    parts = [p.strip() for p in raw.split(":")]
    if len(parts) not in (2, 3) or not parts[0]:
        raise click.BadParameter(
            f"Invalid addon format '{raw}'. Expected 'Item:Price' or 'Item:Price:Style'."
        )
    price = None if parts[1].lower() == "free" else parts[1]
    style = parts[2] if len(parts) == 3 else None
    return AddonSpec(item=parts[0], price=price, consumable=consumable, style=style)


@click.command("add")
@click.option("--title", required=True, help="Listing title.")
@click.option("--price", required=True, help="Daily price (e.g. 45.00).")
@click.option("--addon", "addons", multiple=True, help="Non-consumable addon 'Item:Price[:Style]'.")
@click.option(
    "--consumable-addon", "consumables", multiple=True,
    help="Consumable addon 'Item:Price[:Style]'.",
)
def listing_add(title: str, price: str, addons: tuple[str, ...], consumables: tuple[str, ...]) -> None:
    """Add a new listing with its addon catalog."""
    specs = [_parse_addon(a, consumable=False) for a in addons]
    specs += [_parse_addon(c, consumable=True) for c in consumables]

    handler = AddListingHandler(listing_repo=listing_repository())

    try:
        listing = handler.handle(title=title, daily_price=price, addon_specs=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Listing #{listing.id} '{listing.title}' added at {listing.daily_price}/day")
    for addon in listing.addons:
        kind = "consumable" if addon.consumable else "non-consumable"
        price_str = str(addon.price) if addon.price is not None else "free"
        click.echo(f"  + {addon.item} ({kind}) {price_str}")


@click.command("list")
def listing_list() -> None:
    """List all listings."""
    listings = listing_repository().list_all()

    if not listings:
        click.echo("No listings found.")
        return

    click.echo(f"{'ID':<6} {'Title':<30} {'Daily':>10} {'Addons':>7}")
    click.echo("-" * 56)
    for lst in listings:
        click.echo(f"{lst.id:<6} {lst.title:<30} {str(lst.daily_price):>10} {len(lst.addons):>7}")


@click.command("update-price")
@click.option("--id", "listing_id", required=True, help="Listing ID.")
@click.option("--price", required=True, help="New daily price (e.g. 50.00).")
def listing_update_price(listing_id: str, price: str) -> None:
    """Update a listing's daily price."""
    handler = UpdateListingPriceHandler(listing_repo=listing_repository())

    try:
        listing = handler.handle(listing_id=listing_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Listing #{listing.id} daily price updated to {listing.daily_price}")
