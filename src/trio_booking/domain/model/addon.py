"""Addon: an extra item a renter can bundle with a listing.

Consumable addons (chalk, batteries, ...) are used up during the rental
and priced per unit. Non-consumable addons (helmets, cases, ...) come
back with the listing; they are insured and priced per item.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from trio_booking.domain.exceptions import InvalidInput
from trio_booking.domain.model.value_objects import Money


@dataclass(frozen=True)
class Addon:

    id: str
    item: str
    style: str | None
    price: Money | None  # None means the addon is free
    consumable: bool
    qty: int = 1

    def __post_init__(self) -> None:
        if not self.item or not self.item.strip():
            raise InvalidInput("Addon item name is required")
        if isinstance(self.qty, bool) or not isinstance(self.qty, int):
            raise InvalidInput(f"Addon quantity must be an integer, got {self.qty!r}")
        if self.qty < 1:
            raise InvalidInput(f"Addon quantity must be at least 1, got {self.qty}")

    @property
    def is_free(self) -> bool:
        return self.price is None

    @property
    def item_cost(self) -> Money:
        """Cost of this addon's line in a booking summary.

        Only consumables are multiplied by ``qty``; a non-consumable line
        is always a single unit's price.
        """
        if self.price is None:
            return Money.zero()
        if self.consumable:
            return self.price * self.qty
        return self.price

    def with_qty(self, qty: int) -> Addon:
        return replace(self, qty=qty)
