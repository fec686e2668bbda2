"""Application service: Create Booking use case.

Orchestrates the flow between repositories and the domain model. This
is the only place that coordinates a Listing lookup, the availability
check against other bookings, and Booking creation.
"""

from __future__ import annotations

import logging
from datetime import date

from trio_booking.application.dto import AddonSelection, BookingDTO
from trio_booking.application.mappers import booking_to_dto
from trio_booking.application.quote_booking import resolve_addons
from trio_booking.domain.exceptions import EntityNotFoundError, ValidationError
from trio_booking.domain.model.booking import Booking
from trio_booking.domain.model.value_objects import DateRange, FeeSchedule
from trio_booking.domain.repository.booking_repository import BookingRepository
from trio_booking.domain.repository.listing_repository import ListingRepository
from trio_booking.domain.service.pricing import DEFAULT_FEES

logger = logging.getLogger(__name__)


class CreateBookingHandler:

    def __init__(
        self,
        booking_repo: BookingRepository,
        listing_repo: ListingRepository,
        fees: FeeSchedule = DEFAULT_FEES,
    ) -> None:
        self._booking_repo = booking_repo
        self._listing_repo = listing_repo
        self._fees = fees

    def handle(
        self,
        renter_name: str,
        listing_id: str,
        start: date,
        end: date,
        selections: list[AddonSelection] | None = None,
    ) -> BookingDTO:
        """Book a listing.

        Steps:
        1. Resolve the listing and the selected addons (fail if unknown).
        2. Refuse dates another booking already holds.
        3. Let the Booking aggregate price itself with the *current*
           daily price (snapshot).
        4. Persist and return a DTO.
        """
        listing = self._listing_repo.get_by_id(listing_id)
        if listing is None:
            raise EntityNotFoundError(f"Listing #{listing_id} not found")

        dates = DateRange(start, end)
        addons = resolve_addons(listing, selections or [])

        for other in self._booking_repo.list_for_listing(listing.id):
            for blocked in other.blocked_ranges():
                if dates.overlaps(blocked):
                    raise ValidationError(
                        f"Listing #{listing.id} is already booked {blocked}"
                    )

        booking = Booking.create(
            listing_id=listing.id,
            listing_title=listing.title,
            renter_name=renter_name,
            dates=dates,
            daily_price=listing.daily_price,  # <-- price snapshot
            addons=addons,
            fees=self._fees,
        )
        self._booking_repo.save(booking)
        logger.info(
            "Booking #%s created for listing %s (%s), subtotal %s",
            booking.id, listing.id, dates, booking.breakdown.subtotal,
        )

        return booking_to_dto(booking)
