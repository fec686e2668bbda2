"""Application service: Request Extension use case.

The extension always starts the day after the booking currently ends;
the renter only chooses the new end date. Other bookings of the same
listing (including their pending extensions) are the conflicting ranges.
The extension is priced under the fee schedule the booking was made with,
so later fee configuration changes never reprice an existing booking.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from trio_booking.application.dto import ExtensionDTO
from trio_booking.application.mappers import extension_to_dto
from trio_booking.domain.exceptions import EntityNotFoundError, ValidationError
from trio_booking.domain.model.booking import Booking
from trio_booking.domain.model.value_objects import DateRange
from trio_booking.domain.repository.booking_repository import BookingRepository
from trio_booking.domain.service.extension_rules import (
    earliest_extension_start,
    is_valid_extension_date_range,
)
from trio_booking.domain.service.pricing import compute_extension_breakdown

logger = logging.getLogger(__name__)


def conflicting_ranges(booking_repo: BookingRepository, booking: Booking) -> list[DateRange]:
    """Every range held by the *other* bookings of the booking's listing."""
    ranges: list[DateRange] = []
    for other in booking_repo.list_for_listing(booking.listing_id):
        if other.id == booking.id:
            continue
        ranges.extend(other.blocked_ranges())
    return ranges


class RequestExtensionHandler:

    def __init__(self, booking_repo: BookingRepository, today: date | None = None) -> None:
        self._booking_repo = booking_repo
        self._today = today

    def handle(self, booking_id: int, end: date) -> ExtensionDTO:
        booking = self._booking_repo.get_by_id(booking_id)
        if booking is None:
            raise EntityNotFoundError(f"Booking #{booking_id} not found")

        today = self._today or date.today()
        start = earliest_extension_start(booking.end_date)

        check = is_valid_extension_date_range(
            required_start=start,
            candidate_end=end,
            original_order_end=booking.end_date,
            conflicting_ranges=conflicting_ranges(self._booking_repo, booking),
            not_before=today + timedelta(days=1),
        )
        if not check.valid:
            raise ValidationError(check.reason)

        breakdown = compute_extension_breakdown(
            booking.daily_price,
            start,
            end,
            booking.nonconsumable_addon_daily_total,
            booking.fees,
        )
        ext = booking.request_extension(DateRange(start, end), breakdown)
        self._booking_repo.save(booking)
        logger.info(
            "Extension #%s requested on booking #%s (%s), total %s",
            ext.id, booking.id, ext.dates, ext.total,
        )

        return extension_to_dto(booking.id, ext)  # type: ignore[arg-type]
