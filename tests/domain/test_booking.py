"""Unit tests for the Booking aggregate and its lifecycle rules."""

from datetime import date
from decimal import Decimal

import pytest

from trio_booking.domain.exceptions import EntityNotFoundError, InvalidInput, ValidationError
from trio_booking.domain.model.addon import Addon
from trio_booking.domain.model.booking import Booking, BookingStatus, ExtensionStatus
from trio_booking.domain.model.value_objects import DateRange, FeeSchedule, Money
from trio_booking.domain.service.pricing import compute_extension_breakdown

FEES_10_2 = FeeSchedule(renter_fee=Decimal("10"), subsequent_daily_fee=Decimal("2"))


def _addons() -> list[Addon]:
    return [
        Addon(id="1", item="Helmet", style="Red", price=Money(1000), consumable=False, qty=2),
        Addon(id="2", item="Chalk", style=None, price=Money(500), consumable=True, qty=3),
        Addon(id="3", item="Bag", style=None, price=None, consumable=False),
    ]


def _make_booking(start=date(2026, 3, 2), end=date(2026, 3, 4), addons=None) -> Booking:
    booking = Booking.create(
        listing_id="1",
        listing_title="Climbing kit",
        renter_name="Alice",
        dates=DateRange(start, end),
        daily_price=Money(4500),
        addons=_addons() if addons is None else addons,
        fees=FEES_10_2,
    )
    booking.id = 1
    return booking


def _extension(booking: Booking, start: date, end: date):
    breakdown = compute_extension_breakdown(
        booking.daily_price, start, end, booking.nonconsumable_addon_daily_total, FEES_10_2
    )
    return booking.request_extension(DateRange(start, end), breakdown)


class TestBookingCreation:

    def test_prices_itself(self):
        booking = _make_booking()
        assert booking.status == BookingStatus.CONFIRMED
        assert booking.breakdown.daily_total == Money(13500)
        # Helmet once (quantity ignored) + 3 x Chalk; Bag is free
        assert booking.breakdown.addon_item_total == Money(1000 + 1500)
        assert booking.breakdown.addon_insurance_total == Money(140)
        assert booking.fees == FEES_10_2

    def test_id_is_none_for_new_bookings(self):
        booking = Booking.create(
            "1", "Kit", "Alice", DateRange(date(2026, 3, 2), date(2026, 3, 2)), Money(4500), []
        )
        assert booking.id is None  # assigned by repository

    def test_renter_name_required(self):
        with pytest.raises(ValidationError, match="Renter name is required"):
            Booking.create(
                "1", "Kit", "  ", DateRange(date(2026, 3, 2), date(2026, 3, 2)), Money(4500), []
            )

    def test_renter_name_is_stripped(self):
        booking = Booking.create(
            "1", "Kit", " Bob ", DateRange(date(2026, 3, 2), date(2026, 3, 2)), Money(4500), []
        )
        assert booking.renter_name == "Bob"

    def test_nonconsumable_addon_daily_total_counts_one_unit_each(self):
        assert _make_booking().nonconsumable_addon_daily_total == Money(1000)


class TestAddon:

    def test_zero_quantity_rejected(self):
        with pytest.raises(InvalidInput, match="at least 1"):
            Addon(id="1", item="Chalk", style=None, price=Money(500), consumable=True, qty=0)

    def test_item_required(self):
        with pytest.raises(InvalidInput, match="item name is required"):
            Addon(id="1", item=" ", style=None, price=None, consumable=True)

    def test_with_qty(self):
        chalk = Addon(id="1", item="Chalk", style=None, price=Money(500), consumable=True)
        assert chalk.with_qty(4).item_cost == Money(2000)
        assert chalk.item_cost == Money(500)


class TestBookingCancel:

    def test_cancel(self):
        booking = _make_booking()
        booking.cancel()
        assert booking.status == BookingStatus.CANCELLED
        assert booking.blocked_ranges() == []

    def test_cancel_twice_rejected(self):
        booking = _make_booking()
        booking.cancel()
        with pytest.raises(ValidationError, match="already cancelled"):
            booking.cancel()

    def test_cancel_withdraws_pending_extension(self):
        booking = _make_booking()
        ext = _extension(booking, date(2026, 3, 5), date(2026, 3, 6))
        booking.cancel()
        assert ext.status == ExtensionStatus.CANCELLED


class TestBookingExtensions:

    def test_request_creates_pending_extension(self):
        booking = _make_booking()
        ext = _extension(booking, date(2026, 3, 5), date(2026, 3, 6))
        assert ext.id == 1
        assert ext.status == ExtensionStatus.PENDING
        assert booking.pending_extension is ext
        # 9000 + 2000 addons + (450 + 90) + round(1000 * 2% * 2)
        assert ext.total == Money(11580)

    def test_pending_extension_blocks_dates(self):
        booking = _make_booking()
        _extension(booking, date(2026, 3, 5), date(2026, 3, 6))
        assert booking.blocked_ranges() == [
            DateRange(date(2026, 3, 2), date(2026, 3, 4)),
            DateRange(date(2026, 3, 5), date(2026, 3, 6)),
        ]

    def test_second_request_while_pending_rejected(self):
        booking = _make_booking()
        _extension(booking, date(2026, 3, 5), date(2026, 3, 6))
        with pytest.raises(ValidationError, match="still awaiting a response"):
            _extension(booking, date(2026, 3, 5), date(2026, 3, 7))

    def test_must_start_day_after_end(self):
        booking = _make_booking()
        with pytest.raises(ValidationError, match="day after"):
            _extension(booking, date(2026, 3, 6), date(2026, 3, 7))

    def test_cancelled_booking_cannot_be_extended(self):
        booking = _make_booking()
        booking.cancel()
        with pytest.raises(ValidationError, match="CANCELLED"):
            _extension(booking, date(2026, 3, 5), date(2026, 3, 6))

    def test_approve_moves_end_date(self):
        booking = _make_booking()
        _extension(booking, date(2026, 3, 5), date(2026, 3, 6))
        booking.approve_extension(1)
        assert booking.end_date == date(2026, 3, 6)
        assert booking.dates.end == date(2026, 3, 4)  # original period kept
        assert booking.pending_extension is None
        assert booking.extension_total == Money(11580)

    def test_chained_extensions(self):
        booking = _make_booking()
        _extension(booking, date(2026, 3, 5), date(2026, 3, 6))
        booking.approve_extension(1)
        ext = _extension(booking, date(2026, 3, 7), date(2026, 3, 7))
        assert ext.id == 2

    def test_decline(self):
        booking = _make_booking()
        _extension(booking, date(2026, 3, 5), date(2026, 3, 6))
        ext = booking.decline_extension(1)
        assert ext.status == ExtensionStatus.DECLINED
        assert booking.end_date == date(2026, 3, 4)
        assert booking.extension_total == Money(0)

    def test_cancel_extension(self):
        booking = _make_booking()
        _extension(booking, date(2026, 3, 5), date(2026, 3, 6))
        ext = booking.cancel_extension(1)
        assert ext.status == ExtensionStatus.CANCELLED

    def test_answering_twice_rejected(self):
        booking = _make_booking()
        _extension(booking, date(2026, 3, 5), date(2026, 3, 6))
        booking.approve_extension(1)
        with pytest.raises(ValidationError, match="expected PENDING"):
            booking.decline_extension(1)

    def test_unknown_extension(self):
        booking = _make_booking()
        with pytest.raises(EntityNotFoundError, match="Extension #9 not found"):
            booking.approve_extension(9)
