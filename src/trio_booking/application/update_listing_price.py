"""Application service: Update Listing Price use case."""

from __future__ import annotations

import logging

from trio_booking.domain.exceptions import EntityNotFoundError
from trio_booking.domain.model.listing import Listing
from trio_booking.domain.model.value_objects import Money
from trio_booking.domain.repository.listing_repository import ListingRepository

logger = logging.getLogger(__name__)


class UpdateListingPriceHandler:

    def __init__(self, listing_repo: ListingRepository) -> None:
        self._listing_repo = listing_repo

    def handle(self, listing_id: str, new_price: str) -> Listing:
        listing = self._listing_repo.get_by_id(listing_id)
        if listing is None:
            raise EntityNotFoundError(f"Listing #{listing_id} not found")

        listing.update_price(Money.of(new_price))
        self._listing_repo.save(listing)
        logger.info("Listing %s daily price set to %s", listing.id, listing.daily_price)
        return listing
