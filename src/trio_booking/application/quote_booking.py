"""Application service: Quote Booking use case (query).

Prices a prospective booking without reserving anything. The same
addon resolution is reused by CreateBookingHandler.
"""

from __future__ import annotations

import logging
from datetime import date

from trio_booking.application.dto import AddonSelection, QuoteDTO
from trio_booking.application.mappers import breakdown_to_dto
from trio_booking.domain.exceptions import EntityNotFoundError, ValidationError
from trio_booking.domain.model.addon import Addon
from trio_booking.domain.model.listing import Listing
from trio_booking.domain.model.value_objects import DateRange, FeeSchedule
from trio_booking.domain.repository.listing_repository import ListingRepository
from trio_booking.domain.service.pricing import DEFAULT_FEES, compute_booking_summary

logger = logging.getLogger(__name__)


def resolve_addons(listing: Listing, selections: list[AddonSelection]) -> list[Addon]:
    """Match the renter's picks against the listing's addon catalog."""
    addons: list[Addon] = []
    seen: set[str] = set()
    for selection in selections:
        key = selection.item.strip().lower()
        if key in seen:
            raise ValidationError(f"Addon '{selection.item}' selected more than once")
        seen.add(key)
        addon = listing.find_addon(selection.item)
        if addon is None:
            raise EntityNotFoundError(
                f"Addon '{selection.item}' is not offered with listing #{listing.id}"
            )
        addons.append(addon.with_qty(selection.qty))
    return addons


class QuoteBookingHandler:

    def __init__(
        self,
        listing_repo: ListingRepository,
        fees: FeeSchedule = DEFAULT_FEES,
    ) -> None:
        self._listing_repo = listing_repo
        self._fees = fees

    def handle(
        self,
        listing_id: str,
        start: date,
        end: date,
        selections: list[AddonSelection] | None = None,
    ) -> QuoteDTO:
        listing = self._listing_repo.get_by_id(listing_id)
        if listing is None:
            raise EntityNotFoundError(f"Listing #{listing_id} not found")

        dates = DateRange(start, end)
        addons = resolve_addons(listing, selections or [])
        breakdown = compute_booking_summary(
            listing.daily_price, dates.total_days, addons, self._fees
        )
        logger.debug(
            "Quoted listing %s for %s: subtotal %s", listing.id, dates, breakdown.subtotal
        )

        return QuoteDTO(
            listing_id=listing.id,
            listing_title=listing.title,
            start_date=dates.start.isoformat(),
            end_date=dates.end.isoformat(),
            breakdown=breakdown_to_dto(
                listing.daily_price, dates.total_days, addons, breakdown, self._fees
            ),
        )
