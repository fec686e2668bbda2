"""Listing aggregate.

Listings live independently of bookings. Hosts change their daily price
and addon catalog over time; bookings keep their own price snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from trio_booking.domain.exceptions import ValidationError
from trio_booking.domain.model.addon import Addon
from trio_booking.domain.model.value_objects import Money


@dataclass
class Listing:
    """A rentable item and the addons offered with it."""

    id: str
    title: str
    daily_price: Money
    addons: list[Addon] = field(default_factory=list)

    @staticmethod
    def create(
        listing_id: str,
        title: str,
        daily_price: Money,
        addons: list[Addon] | None = None,
    ) -> Listing:
        """Create a new listing, enforcing all invariants."""
        if not title or not title.strip():
            raise ValidationError("Listing title is required")
        if daily_price.cents <= 0:
            raise ValidationError("Daily price must be greater than zero")

        seen: set[str] = set()
        for addon in addons or []:
            key = addon.item.lower()
            if key in seen:
                raise ValidationError(f"Duplicate addon '{addon.item}'")
            seen.add(key)

        return Listing(
            id=listing_id,
            title=title.strip(),
            daily_price=daily_price,
            addons=list(addons or []),
        )

    def update_price(self, new_price: Money) -> None:
        """Change the daily price.

        Existing bookings are unaffected; they captured the price at
        booking time.
        """
        if new_price.cents <= 0:
            raise ValidationError("Daily price must be greater than zero")
        self.daily_price = new_price

    def find_addon(self, item: str) -> Addon | None:
        for addon in self.addons:
            if addon.item.lower() == item.strip().lower():
                return addon
        return None
