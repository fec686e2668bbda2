"""JSON-file-backed implementation of ListingRepository."""

from __future__ import annotations

import json
from pathlib import Path

from trio_booking.domain.model.listing import Listing
from trio_booking.domain.model.value_objects import Money
from trio_booking.domain.repository.listing_repository import ListingRepository
from trio_booking.infrastructure.persistence.addon_codec import (
    addon_ids,
    decode_addons,
    encode_addons,
)


class JsonListingRepository(ListingRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ListingRepository interface ------------------------------------------

    def get_by_id(self, listing_id: str) -> Listing | None:
        for raw in self._load_raw():
            if raw["id"] == listing_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Listing]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, listing: Listing) -> None:
        records = self._load_raw()
        replaced = False
        for i, raw in enumerate(records):
            if raw["id"] == listing.id:
                records[i] = self._to_raw(listing)
                replaced = True
                break
        if not replaced:
            records.append(self._to_raw(listing))
        self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(listing: Listing) -> dict:
        return {
            "id": listing.id,
            "title": listing.title,
            "daily_price_cents": listing.daily_price.cents,
            "currency": listing.daily_price.currency,
            "addons": encode_addons(listing.addons),
            "addon_ids": addon_ids(listing.addons),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Listing:
        return Listing(
            id=raw["id"],
            title=raw["title"],
            daily_price=Money(raw["daily_price_cents"], raw.get("currency", "USD")),
            addons=decode_addons(raw.get("addons"), raw.get("addon_ids")),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
