"""Application service: Cancel Booking use case.

Cancelling frees the booked dates for other renters and withdraws any
extension still awaiting the host's answer.
"""

from __future__ import annotations

import logging

from trio_booking.domain.exceptions import EntityNotFoundError
from trio_booking.domain.repository.booking_repository import BookingRepository

logger = logging.getLogger(__name__)


class CancelBookingHandler:

    def __init__(self, booking_repo: BookingRepository) -> None:
        self._booking_repo = booking_repo

    def handle(self, booking_id: int) -> None:
        booking = self._booking_repo.get_by_id(booking_id)
        if booking is None:
            raise EntityNotFoundError(f"Booking #{booking_id} not found")

        booking.cancel()
        self._booking_repo.save(booking)
        logger.info("Booking #%s cancelled", booking_id)
