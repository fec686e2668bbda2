"""Application service: Add Listing use case."""

from __future__ import annotations

import logging

from trio_booking.application.dto import AddonSpec
from trio_booking.domain.model.addon import Addon
from trio_booking.domain.model.listing import Listing
from trio_booking.domain.model.value_objects import Money
from trio_booking.domain.repository.listing_repository import ListingRepository

logger = logging.getLogger(__name__)


class AddListingHandler:

    def __init__(self, listing_repo: ListingRepository) -> None:
        self._listing_repo = listing_repo

    def handle(
        self,
        title: str,
        daily_price: str,
        addon_specs: list[AddonSpec] | None = None,
    ) -> Listing:
        """Add a new listing with its addon catalog."""
        addons = [
            Addon(
                id=str(index),
                item=spec.item.strip(),
                style=spec.style,
                price=Money.of(spec.price) if spec.price is not None else None,
                consumable=spec.consumable,
            )
            for index, spec in enumerate(addon_specs or [], start=1)
        ]

        # Auto-assign ID based on existing numeric listing ids
        numeric_ids = [int(lst.id) for lst in self._listing_repo.list_all() if lst.id.isdecimal()]
        next_id = str(max(numeric_ids) + 1) if numeric_ids else "1"

        listing = Listing.create(
            listing_id=next_id,
            title=title,
            daily_price=Money.of(daily_price),
            addons=addons,
        )
        self._listing_repo.save(listing)
        logger.info("Listing %s '%s' added at %s/day", listing.id, listing.title, listing.daily_price)
        return listing
