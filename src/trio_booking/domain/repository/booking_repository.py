"""Abstract repository for Booking aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from trio_booking.domain.model.booking import Booking


class BookingRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique booking ID."""

    @abstractmethod
    def get_by_id(self, booking_id: int) -> Booking | None:
        """Return a booking by its ID, or None if not found."""

    @abstractmethod
    def list_for_listing(self, listing_id: str) -> list[Booking]:
        """Return every booking (any status) of a listing."""

    @abstractmethod
    def save(self, booking: Booking) -> None:
        """Persist a new or updated booking."""
