"""Abstract repository for Listing aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from trio_booking.domain.model.listing import Listing


class ListingRepository(ABC):

    @abstractmethod
    def get_by_id(self, listing_id: str) -> Listing | None:
        """Return a listing by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Listing]:
        """Return every listing."""

    @abstractmethod
    def save(self, listing: Listing) -> None:
        """Persist a new or updated listing."""
