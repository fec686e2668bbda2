"""Application service: Show Booking use case (query)."""

from __future__ import annotations

from trio_booking.application.dto import BookingDTO
from trio_booking.application.mappers import booking_to_dto
from trio_booking.domain.exceptions import EntityNotFoundError
from trio_booking.domain.repository.booking_repository import BookingRepository


class ShowBookingHandler:

    def __init__(self, booking_repo: BookingRepository) -> None:
        self._booking_repo = booking_repo

    def handle(self, booking_id: int) -> BookingDTO:
        booking = self._booking_repo.get_by_id(booking_id)
        if booking is None:
            raise EntityNotFoundError(f"Booking #{booking_id} not found")
        return booking_to_dto(booking)
