"""Application service: Cancel Extension use case (renter withdraws a request)."""

from __future__ import annotations

import logging

from trio_booking.application.dto import ExtensionDTO
from trio_booking.application.mappers import extension_to_dto
from trio_booking.domain.exceptions import EntityNotFoundError
from trio_booking.domain.repository.booking_repository import BookingRepository

logger = logging.getLogger(__name__)


class CancelExtensionHandler:

    def __init__(self, booking_repo: BookingRepository) -> None:
        self._booking_repo = booking_repo

    def handle(self, booking_id: int, extension_id: int) -> ExtensionDTO:
        booking = self._booking_repo.get_by_id(booking_id)
        if booking is None:
            raise EntityNotFoundError(f"Booking #{booking_id} not found")

        ext = booking.cancel_extension(extension_id)
        self._booking_repo.save(booking)
        logger.info("Extension #%s on booking #%s cancelled", ext.id, booking_id)
        return extension_to_dto(booking_id, ext)
