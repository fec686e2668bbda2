"""Booking aggregate: the core of the domain.

A Booking owns its extensions. ``dates`` is the originally booked
period; approved extensions lengthen it (see ``end_date``) and are priced
on their own. The booking snapshots the listing's daily price and
the fee breakdown at booking time, so later price changes never alter
what the renter agreed to pay.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from trio_booking.domain.exceptions import EntityNotFoundError, ValidationError
from trio_booking.domain.model.addon import Addon
from trio_booking.domain.model.value_objects import DateRange, FeeSchedule, Money
from trio_booking.domain.service.extension_rules import earliest_extension_start
from trio_booking.domain.service.pricing import (
    DEFAULT_FEES,
    ExtensionBreakdown,
    FeeBreakdown,
    compute_booking_summary,
)


class BookingStatus(Enum):
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class ExtensionStatus(Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    DECLINED = "DECLINED"
    CANCELLED = "CANCELLED"


@dataclass
class Extension:
    """A renter's request to keep the listing for more days."""

    id: int
    dates: DateRange
    breakdown: ExtensionBreakdown
    status: ExtensionStatus = ExtensionStatus.PENDING
    requested_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total(self) -> Money:
        return self.breakdown.total

    @property
    def is_pending(self) -> bool:
        return self.status == ExtensionStatus.PENDING


@dataclass
class Booking:
    """Aggregate root for rentals.

    Use ``Booking.create()`` for new bookings; it computes the fee
    breakdown. The ``__init__`` is intentionally simple so the repository
    can reconstitute persisted bookings without re-pricing them.
    """

    id: int | None
    listing_id: str
    listing_title: str
    renter_name: str
    dates: DateRange
    daily_price: Money  # locked at booking time
    addons: list[Addon]
    breakdown: FeeBreakdown  # locked at booking time
    fees: FeeSchedule = DEFAULT_FEES
    status: BookingStatus = BookingStatus.CONFIRMED
    extensions: list[Extension] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW bookings only) ---------------------------------

    @staticmethod
    def create(
        listing_id: str,
        listing_title: str,
        renter_name: str,
        dates: DateRange,
        daily_price: Money,
        addons: list[Addon],
        fees: FeeSchedule = DEFAULT_FEES,
    ) -> Booking:
        if not renter_name or not renter_name.strip():
            raise ValidationError("Renter name is required")

        breakdown = compute_booking_summary(daily_price, dates.total_days, addons, fees)
        return Booking(
            id=None,
            listing_id=listing_id,
            listing_title=listing_title,
            renter_name=renter_name.strip(),
            dates=dates,
            daily_price=daily_price,
            addons=list(addons),
            breakdown=breakdown,
            fees=fees,
        )

    # --- State transitions ----------------------------------------------------

    def cancel(self) -> None:
        """Transition CONFIRMED -> CANCELLED, withdrawing any pending extension."""
        if self.status == BookingStatus.CANCELLED:
            raise ValidationError("Booking is already cancelled")
        for ext in self.extensions:
            if ext.is_pending:
                ext.status = ExtensionStatus.CANCELLED
        self.status = BookingStatus.CANCELLED

    def request_extension(self, dates: DateRange, breakdown: ExtensionBreakdown) -> Extension:
        """Record a PENDING extension starting the day after the current end."""
        if self.status != BookingStatus.CONFIRMED:
            raise ValidationError(
                f"Cannot extend booking in {self.status.value} status"
            )
        if self.pending_extension is not None:
            raise ValidationError(
                f"Extension #{self.pending_extension.id} is still awaiting a response"
            )
        if dates.start != earliest_extension_start(self.end_date):
            raise ValidationError(
                "Extension must start the day after the original booking ends"
            )

        ext = Extension(id=len(self.extensions) + 1, dates=dates, breakdown=breakdown)
        self.extensions.append(ext)
        return ext

    def approve_extension(self, extension_id: int) -> Extension:
        """Transition PENDING -> APPROVED; the booking now ends with the extension."""
        ext = self._pending(extension_id)
        ext.status = ExtensionStatus.APPROVED
        return ext

    def decline_extension(self, extension_id: int) -> Extension:
        ext = self._pending(extension_id)
        ext.status = ExtensionStatus.DECLINED
        return ext

    def cancel_extension(self, extension_id: int) -> Extension:
        ext = self._pending(extension_id)
        ext.status = ExtensionStatus.CANCELLED
        return ext

    # --- Computed properties --------------------------------------------------

    @property
    def nonconsumable_addon_daily_total(self) -> Money:
        """Per-day addon base for extensions: one unit of each non-consumable addon."""
        total = Money.zero()
        for addon in self.addons:
            if not addon.consumable and addon.price is not None:
                total = total + addon.price
        return total

    @property
    def end_date(self) -> date:
        """Last rented day, including approved extensions."""
        end = self.dates.end
        for ext in self.extensions:
            if ext.status == ExtensionStatus.APPROVED and ext.dates.end > end:
                end = ext.dates.end
        return end

    @property
    def pending_extension(self) -> Extension | None:
        for ext in self.extensions:
            if ext.is_pending:
                return ext
        return None

    @property
    def extension_total(self) -> Money:
        """Sum of all approved extensions."""
        total = Money.zero()
        for ext in self.extensions:
            if ext.status == ExtensionStatus.APPROVED:
                total = total + ext.total
        return total

    def blocked_ranges(self) -> list[DateRange]:
        """Dates this booking keeps the listing unavailable for others."""
        if self.status == BookingStatus.CANCELLED:
            return []
        ranges = [DateRange(self.dates.start, self.end_date)]
        if self.pending_extension is not None:
            ranges.append(self.pending_extension.dates)
        return ranges

    # --- Internal helpers -----------------------------------------------------

    def _find_extension(self, extension_id: int) -> Extension:
        for ext in self.extensions:
            if ext.id == extension_id:
                return ext
        raise EntityNotFoundError(
            f"Extension #{extension_id} not found on booking #{self.id}"
        )

    def _pending(self, extension_id: int) -> Extension:
        ext = self._find_extension(extension_id)
        if not ext.is_pending:
            raise ValidationError(
                f"Extension #{extension_id} is {ext.status.value}, expected PENDING"
            )
        return ext
