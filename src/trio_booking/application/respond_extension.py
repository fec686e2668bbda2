"""Application service: Respond to Extension use case.

The host approves or declines a pending extension. Approval re-checks
availability, since another booking may have been made for those days
while the request was waiting.
"""

from __future__ import annotations

import logging

from trio_booking.application.dto import ExtensionDTO
from trio_booking.application.mappers import extension_to_dto
from trio_booking.application.request_extension import conflicting_ranges
from trio_booking.domain.exceptions import EntityNotFoundError, ValidationError
from trio_booking.domain.repository.booking_repository import BookingRepository

logger = logging.getLogger(__name__)


class RespondExtensionHandler:

    def __init__(self, booking_repo: BookingRepository) -> None:
        self._booking_repo = booking_repo

    def handle(self, booking_id: int, extension_id: int, approve: bool) -> ExtensionDTO:
        booking = self._booking_repo.get_by_id(booking_id)
        if booking is None:
            raise EntityNotFoundError(f"Booking #{booking_id} not found")

        if approve:
            pending = booking.pending_extension
            if pending is not None and pending.id == extension_id:
                for blocked in conflicting_ranges(self._booking_repo, booking):
                    if pending.dates.overlaps(blocked):
                        raise ValidationError(
                            f"Dates overlap with an existing booking ({blocked})."
                        )
            ext = booking.approve_extension(extension_id)
        else:
            ext = booking.decline_extension(extension_id)

        self._booking_repo.save(booking)
        logger.info(
            "Extension #%s on booking #%s %s", ext.id, booking_id, ext.status.value.lower()
        )
        return extension_to_dto(booking_id, ext)
