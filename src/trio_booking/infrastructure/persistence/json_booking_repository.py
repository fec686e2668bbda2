"""JSON-file-backed implementation of BookingRepository."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

from trio_booking.domain.model.booking import (
    Booking,
    BookingStatus,
    Extension,
    ExtensionStatus,
)
from trio_booking.domain.model.value_objects import DateRange, FeeSchedule, Money
from trio_booking.domain.repository.booking_repository import BookingRepository
from trio_booking.domain.service.pricing import ExtensionBreakdown, FeeBreakdown
from trio_booking.infrastructure.persistence.addon_codec import (
    addon_ids,
    decode_addons,
    encode_addons,
)

logger = logging.getLogger(__name__)


class JsonBookingRepository(BookingRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- BookingRepository interface ------------------------------------------

    def next_id(self) -> int:
        bookings = self._load_raw()
        if not bookings:
            return 1
        return max(b["id"] for b in bookings) + 1

    def get_by_id(self, booking_id: int) -> Booking | None:
        for raw in self._load_raw():
            if raw["id"] == booking_id:
                return self._to_domain(raw)
        return None

    def list_for_listing(self, listing_id: str) -> list[Booking]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["listing_id"] == listing_id
        ]

    def save(self, booking: Booking) -> None:
        bookings = self._load_raw()

        if booking.id is None:
            booking.id = self.next_id()

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(bookings):
            if raw["id"] == booking.id:
                bookings[i] = self._to_raw(booking)
                replaced = True
                break
        if not replaced:
            bookings.append(self._to_raw(booking))

        self._persist_raw(bookings)
        logger.debug("Saved booking #%s to %s", booking.id, self._file_path)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(booking: Booking) -> dict:
        bd = booking.breakdown
        return {
            "id": booking.id,
            "listing_id": booking.listing_id,
            "listing_title": booking.listing_title,
            "renter_name": booking.renter_name,
            "status": booking.status.value,
            "start_date": booking.dates.start.isoformat(),
            "end_date": booking.dates.end.isoformat(),
            "daily_price_cents": booking.daily_price.cents,
            "addons": encode_addons(booking.addons),
            "addon_ids": addon_ids(booking.addons),
            "fees": {
                "renter_fee": str(booking.fees.renter_fee),
                "subsequent_daily_fee": str(booking.fees.subsequent_daily_fee),
                "host_fee": str(booking.fees.host_fee),
            },
            "breakdown": {
                "daily_total": bd.daily_total.cents,
                "listing_insurance_total": bd.listing_insurance_total.cents,
                "addon_item_total": bd.addon_item_total.cents,
                "addon_insurance_total": bd.addon_insurance_total.cents,
            },
            "extensions": [
                {
                    "id": ext.id,
                    "start_date": ext.dates.start.isoformat(),
                    "end_date": ext.dates.end.isoformat(),
                    "status": ext.status.value,
                    "requested_at": ext.requested_at.isoformat(),
                    "daily_total": ext.breakdown.daily_total.cents,
                    "addon_total": ext.breakdown.addon_total.cents,
                    "listing_insurance_total": ext.breakdown.listing_insurance_total.cents,
                    "addon_insurance_total": ext.breakdown.addon_insurance_total.cents,
                }
                for ext in booking.extensions
            ],
            "created_at": booking.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Booking:
        bd = raw["breakdown"]
        fees = raw.get("fees") or {}
        return Booking(
            id=raw["id"],
            listing_id=raw["listing_id"],
            listing_title=raw["listing_title"],
            renter_name=raw["renter_name"],
            dates=DateRange(
                date.fromisoformat(raw["start_date"]),
                date.fromisoformat(raw["end_date"]),
            ),
            daily_price=Money(raw["daily_price_cents"]),
            addons=decode_addons(raw.get("addons"), raw.get("addon_ids")),
            breakdown=FeeBreakdown(
                daily_total=Money(bd["daily_total"]),
                listing_insurance_total=Money(bd["listing_insurance_total"]),
                addon_item_total=Money(bd["addon_item_total"]),
                addon_insurance_total=Money(bd["addon_insurance_total"]),
            ),
            fees=FeeSchedule(**{k: Decimal(v) for k, v in fees.items()}),
            status=BookingStatus(raw["status"]),
            extensions=[
                JsonBookingRepository._extension_to_domain(e)
                for e in raw.get("extensions", [])
            ],
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

    @staticmethod
    def _extension_to_domain(raw: dict) -> Extension:
        dates = DateRange(
            date.fromisoformat(raw["start_date"]),
            date.fromisoformat(raw["end_date"]),
        )
        return Extension(
            id=raw["id"],
            dates=dates,
            breakdown=ExtensionBreakdown(
                total_days=dates.total_days,
                daily_total=Money(raw["daily_total"]),
                addon_total=Money(raw["addon_total"]),
                listing_insurance_total=Money(raw["listing_insurance_total"]),
                addon_insurance_total=Money(raw["addon_insurance_total"]),
            ),
            status=ExtensionStatus(raw["status"]),
            requested_at=datetime.fromisoformat(raw["requested_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, bookings: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(bookings, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
