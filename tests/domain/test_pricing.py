"""Unit tests for the booking cost and insurance calculator."""

import random
from datetime import date
from decimal import Decimal

import pytest

from trio_booking.domain.exceptions import InvalidInput
from trio_booking.domain.model.addon import Addon
from trio_booking.domain.model.value_objects import FeeSchedule, Money
from trio_booking.domain.service.pricing import (
    DEFAULT_FEES,
    RENTER_FEE,
    SUBSEQUENT_DAILY_FEE,
    compute_addon_fee,
    compute_booking_summary,
    compute_extension_breakdown,
    compute_extension_total,
    compute_host_payout,
    compute_listing_insurance,
)

# Round numbers that make hand-checked scenarios easy to follow.
FEES_10_2 = FeeSchedule(
    renter_fee=Decimal("10"), subsequent_daily_fee=Decimal("2"), host_fee=Decimal("12")
)


def _addon(price: int | None, consumable: bool = False, qty: int = 1, item: str = "Helmet") -> Addon:
    return Addon(
        id="1",
        item=item,
        style=None,
        price=Money(price) if price is not None else None,
        consumable=consumable,
        qty=qty,
    )


class TestConstants:

    def test_platform_rates(self):
        assert RENTER_FEE == Decimal("10")
        assert SUBSEQUENT_DAILY_FEE == Decimal("1.5")
        assert DEFAULT_FEES.renter_fee == RENTER_FEE
        assert DEFAULT_FEES.subsequent_daily_fee == SUBSEQUENT_DAILY_FEE


# ── Listing insurance ────────────────────────────────────────────────────────


class TestListingInsurance:

    def test_single_day_is_first_day_rate_only(self):
        assert compute_listing_insurance(Money(4500), 1) == Money(450)

    @pytest.mark.parametrize("price", [0, 1, 5, 999, 1033, 4500, 123457])
    def test_single_day_matches_rounded_renter_fee(self, price):
        expected = Money(price).percent(RENTER_FEE)
        assert compute_listing_insurance(Money(price), 1) == expected

    def test_multi_day_adds_subsequent_term(self):
        # 450 + round(4500 * 2% * 2) = 450 + 180
        assert compute_listing_insurance(Money(4500), 3, FEES_10_2) == Money(630)

    def test_subsequent_days_rounded_once_on_aggregate(self):
        # Per day: 1033 * 1.5% = 15.495 -> 15, so per-day rounding gives 30.
        # On the aggregate: 30.99 -> 31.
        first_day = Money(103)
        assert compute_listing_insurance(Money(1033), 3) == first_day + Money(31)
        assert compute_listing_insurance(Money(1033), 3) != first_day + Money(15) * 2

    def test_zero_price_is_zero(self):
        assert compute_listing_insurance(Money(0), 5) == Money(0)

    def test_zero_days_rejected(self):
        with pytest.raises(InvalidInput, match="at least 1"):
            compute_listing_insurance(Money(4500), 0)

    def test_non_integer_days_rejected(self):
        with pytest.raises(InvalidInput, match="must be an integer"):
            compute_listing_insurance(Money(4500), 2.5)


# ── Addon fee ────────────────────────────────────────────────────────────────


class TestAddonFee:

    @pytest.mark.parametrize("days", [1, 2, 7, 30])
    def test_consumable_is_never_insured(self, days):
        assert compute_addon_fee(Money(5000), True, days) == Money(0)

    @pytest.mark.parametrize("consumable", [True, False])
    def test_free_addon_is_never_insured(self, consumable):
        assert compute_addon_fee(None, consumable, 4) == Money(0)

    def test_non_consumable_uses_listing_formula(self):
        # round(1000 * 10%) + round(1000 * 2% * 2) = 100 + 40
        assert compute_addon_fee(Money(1000), False, 3, FEES_10_2) == Money(140)

    def test_zero_days_rejected(self):
        with pytest.raises(InvalidInput):
            compute_addon_fee(Money(1000), False, 0)


# ── Booking summary ──────────────────────────────────────────────────────────


class TestBookingSummary:

    def test_three_day_booking_with_non_consumable_addon(self):
        summary = compute_booking_summary(Money(4500), 3, [_addon(1000)], FEES_10_2)
        assert summary.daily_total == Money(13500)
        assert summary.listing_insurance_total == Money(630)
        assert summary.addon_item_total == Money(1000)
        assert summary.addon_insurance_total == Money(140)
        assert summary.subtotal == Money(15270)

    def test_consumable_addon_priced_by_quantity(self):
        for days in (1, 4, 10):
            summary = compute_booking_summary(
                Money(4500), days, [_addon(500, consumable=True, qty=3, item="Chalk")]
            )
            assert summary.addon_item_total == Money(1500)
            assert summary.addon_insurance_total == Money(0)

    def test_non_consumable_quantity_not_multiplied(self):
        summary = compute_booking_summary(Money(4500), 3, [_addon(1000, qty=3)], FEES_10_2)
        assert summary.addon_item_total == Money(1000)
        assert summary.addon_insurance_total == Money(140)

    def test_free_addons_contribute_nothing(self):
        summary = compute_booking_summary(
            Money(4500),
            2,
            [_addon(None, item="Case"), _addon(None, consumable=True, qty=4, item="Bag")],
        )
        assert summary.addon_item_total == Money(0)
        assert summary.addon_insurance_total == Money(0)

    def test_mixed_addons(self):
        addons = [
            _addon(1000, item="Helmet"),
            _addon(2500, item="Rack"),
            _addon(500, consumable=True, qty=2, item="Chalk"),
        ]
        summary = compute_booking_summary(Money(4500), 3, addons, FEES_10_2)
        # Helmet 100 + 40, Rack 250 + 100
        assert summary.addon_item_total == Money(1000 + 2500 + 1000)
        assert summary.addon_insurance_total == Money(140 + 350)

    def test_no_addons(self):
        summary = compute_booking_summary(Money(4500), 1, [])
        assert summary.subtotal == Money(4500 + 450)

    def test_accepts_any_iterable(self):
        summary = compute_booking_summary(Money(4500), 3, iter([_addon(1000)]), FEES_10_2)
        assert summary.subtotal == Money(15270)

    def test_idempotent(self):
        addons = [_addon(1000), _addon(500, consumable=True, qty=3, item="Chalk")]
        first = compute_booking_summary(Money(1033), 5, addons)
        second = compute_booking_summary(Money(1033), 5, addons)
        assert first == second

    def test_zero_days_rejected(self):
        with pytest.raises(InvalidInput):
            compute_booking_summary(Money(4500), 0, [])


class TestBookingSummaryProperties:
    """Invariants checked over a seeded random sample of bookings."""

    @staticmethod
    def _random_booking(rng: random.Random):
        addons = []
        for index in range(rng.randint(0, 4)):
            addons.append(
                Addon(
                    id=str(index),
                    item=f"Addon {index}",
                    style=None,
                    price=rng.choice([None, Money(rng.randint(0, 20000))]),
                    consumable=rng.random() < 0.5,
                    qty=rng.randint(1, 5),
                )
            )
        return Money(rng.randint(0, 100000)), rng.randint(1, 60), addons

    @pytest.mark.parametrize("seed", range(25))
    def test_subtotal_is_sum_of_lines(self, seed):
        rng = random.Random(seed)
        for _ in range(20):
            price, days, addons = self._random_booking(rng)
            s = compute_booking_summary(price, days, addons)
            assert s.subtotal.cents == (
                s.daily_total.cents
                + s.listing_insurance_total.cents
                + s.addon_item_total.cents
                + s.addon_insurance_total.cents
            )

    @pytest.mark.parametrize("seed", range(10))
    def test_listing_insurance_has_exactly_two_terms(self, seed):
        rng = random.Random(seed)
        for _ in range(20):
            price, days, _ = self._random_booking(rng)
            first_day = price.percent(RENTER_FEE)
            later = price.percent(SUBSEQUENT_DAILY_FEE, days - 1) if days > 1 else Money(0)
            assert compute_listing_insurance(price, days) == first_day + later


# ── Extension total ──────────────────────────────────────────────────────────


class TestExtensionTotal:

    def test_two_day_extension_with_addons(self):
        total = compute_extension_total(
            Money(4500), date(2026, 3, 4), date(2026, 3, 5), Money(1000)
        )
        # 9000 daily + 2000 addons + (450 + 68) listing insurance + 30 addon insurance
        assert total == Money(11548)

    def test_breakdown_lines(self):
        bd = compute_extension_breakdown(
            Money(4500), date(2026, 3, 4), date(2026, 3, 5), Money(1000), FEES_10_2
        )
        assert bd.total_days == 2
        assert bd.daily_total == Money(9000)
        assert bd.addon_total == Money(2000)
        assert bd.listing_insurance_total == Money(540)
        assert bd.addon_insurance_total == Money(40)
        assert bd.total == Money(11580)

    def test_addon_insurance_uses_subsequent_rate_for_every_day(self):
        bd = compute_extension_breakdown(
            Money(4500), date(2026, 3, 4), date(2026, 3, 4), Money(1000), FEES_10_2
        )
        # One day: 2% of 1000, never the 10% first-day rate
        assert bd.addon_insurance_total == Money(20)

    def test_differs_from_initial_booking_rule(self):
        ext = compute_extension_breakdown(
            Money(4500), date(2026, 3, 4), date(2026, 3, 6), Money(1000), FEES_10_2
        )
        booking = compute_booking_summary(Money(4500), 3, [_addon(1000)], FEES_10_2)
        assert ext.addon_insurance_total == Money(60)
        assert booking.addon_insurance_total == Money(140)

    def test_single_day_no_addons(self):
        total = compute_extension_total(Money(4500), date(2026, 3, 4), date(2026, 3, 4), Money(0))
        assert total == Money(4950)

    def test_reversed_dates_rejected(self):
        with pytest.raises(InvalidInput, match="before start date"):
            compute_extension_total(Money(4500), date(2026, 3, 5), date(2026, 3, 4), Money(0))


# ── Host payout ──────────────────────────────────────────────────────────────


class TestHostPayout:

    def test_insurance_excluded_from_host_gross(self):
        summary = compute_booking_summary(Money(4500), 3, [_addon(1000)], FEES_10_2)
        payout = compute_host_payout(summary, FEES_10_2)
        assert payout.gross == Money(14500)
        assert payout.host_fee == Money(1740)
        assert payout.payout == Money(12760)

    def test_zero_host_fee(self):
        summary = compute_booking_summary(Money(4500), 1, [])
        payout = compute_host_payout(summary, FeeSchedule(host_fee=Decimal("0")))
        assert payout.payout == Money(4500)
