"""Domain service: booking cost and insurance calculator.

Pure functions, no I/O and no state. Every function takes the fee
percentages as an explicit ``FeeSchedule`` (defaulting to the platform's
standard rates) so callers can price under a configured schedule.

Two billing rules live here as separate functions:

- an initial booking charges ``renter_fee`` on the first day and
  ``subsequent_daily_fee`` on every later day, for the listing and for
  each non-consumable addon (``compute_booking_summary``);
- an extension charges addon insurance at ``subsequent_daily_fee`` for
  every extended day (``compute_extension_breakdown``).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from trio_booking.domain.exceptions import InvalidInput
from trio_booking.domain.model.addon import Addon
from trio_booking.domain.model.value_objects import DateRange, FeeSchedule, Money

# ---------------------------------------------------------------------------
# Standard platform rates, in percent
# ---------------------------------------------------------------------------
RENTER_FEE = Decimal("10")
SUBSEQUENT_DAILY_FEE = Decimal("1.5")
HOST_FEE = Decimal("12")

DEFAULT_FEES = FeeSchedule(
    renter_fee=RENTER_FEE,
    subsequent_daily_fee=SUBSEQUENT_DAILY_FEE,
    host_fee=HOST_FEE,
)


@dataclass(frozen=True)
class FeeBreakdown:
    """Itemized cost of an initial booking."""

    daily_total: Money
    listing_insurance_total: Money
    addon_item_total: Money
    addon_insurance_total: Money

    @property
    def subtotal(self) -> Money:
        return (
            self.daily_total
            + self.listing_insurance_total
            + self.addon_item_total
            + self.addon_insurance_total
        )


@dataclass(frozen=True)
class ExtensionBreakdown:
    """Itemized cost of extending an existing booking."""

    total_days: int
    daily_total: Money
    addon_total: Money
    listing_insurance_total: Money
    addon_insurance_total: Money

    @property
    def total(self) -> Money:
        return (
            self.daily_total
            + self.addon_total
            + self.listing_insurance_total
            + self.addon_insurance_total
        )


@dataclass(frozen=True)
class HostPayout:
    """What the host earns from a booking after the platform's cut."""

    gross: Money
    host_fee: Money

    @property
    def payout(self) -> Money:
        return self.gross - self.host_fee


# ---------------------------------------------------------------------------
# Fee functions
# ---------------------------------------------------------------------------


def compute_listing_insurance(
    daily_price: Money,
    total_days: int,
    fees: FeeSchedule = DEFAULT_FEES,
) -> Money:
    """Insurance on the listing itself for a ``total_days`` rental.

    Rounded twice: once for the first day and once for all subsequent
    days together, never per day.
    """
    _require_days(total_days)
    first_day = daily_price.percent(fees.renter_fee)
    if total_days == 1:
        return first_day
    return first_day + daily_price.percent(fees.subsequent_daily_fee, total_days - 1)


def compute_addon_fee(
    addon_price: Money | None,
    consumable: bool,
    total_days: int,
    fees: FeeSchedule = DEFAULT_FEES,
) -> Money:
    """Insurance on one non-consumable addon. Consumable and free addons are never insured."""
    _require_days(total_days)
    if consumable or addon_price is None:
        return Money.zero()
    return compute_listing_insurance(addon_price, total_days, fees)


def compute_booking_summary(
    daily_price: Money,
    total_days: int,
    addons: Iterable[Addon],
    fees: FeeSchedule = DEFAULT_FEES,
) -> FeeBreakdown:
    """Itemize an initial booking of ``total_days`` days."""
    _require_days(total_days)

    addon_item_total = Money.zero()
    addon_insurance_total = Money.zero()
    for addon in addons:
        addon_item_total = addon_item_total + addon.item_cost
        addon_insurance_total = addon_insurance_total + compute_addon_fee(
            addon.price, addon.consumable, total_days, fees
        )

    return FeeBreakdown(
        daily_total=daily_price * total_days,
        listing_insurance_total=compute_listing_insurance(daily_price, total_days, fees),
        addon_item_total=addon_item_total,
        addon_insurance_total=addon_insurance_total,
    )


def compute_extension_breakdown(
    daily_price: Money,
    extension_start: date,
    extension_end: date,
    nonconsumable_addon_daily_total: Money,
    fees: FeeSchedule = DEFAULT_FEES,
) -> ExtensionBreakdown:
    """Itemize an extension running from ``extension_start`` to ``extension_end`` inclusive."""
    days = DateRange(extension_start, extension_end).total_days
    return ExtensionBreakdown(
        total_days=days,
        daily_total=daily_price * days,
        addon_total=nonconsumable_addon_daily_total * days,
        listing_insurance_total=compute_listing_insurance(daily_price, days, fees),
        addon_insurance_total=nonconsumable_addon_daily_total.percent(
            fees.subsequent_daily_fee, days
        ),
    )


def compute_extension_total(
    daily_price: Money,
    extension_start: date,
    extension_end: date,
    nonconsumable_addon_daily_total: Money,
    fees: FeeSchedule = DEFAULT_FEES,
) -> Money:
    return compute_extension_breakdown(
        daily_price,
        extension_start,
        extension_end,
        nonconsumable_addon_daily_total,
        fees,
    ).total


def compute_host_payout(
    breakdown: FeeBreakdown,
    fees: FeeSchedule = DEFAULT_FEES,
) -> HostPayout:
    """Split a booking's rental revenue between host and platform.

    Insurance lines are collected by the platform and are not part of
    the host's gross.
    """
    gross = breakdown.daily_total + breakdown.addon_item_total
    return HostPayout(gross=gross, host_fee=gross.percent(fees.host_fee))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _require_days(total_days: int) -> None:
    if isinstance(total_days, bool) or not isinstance(total_days, int):
        raise InvalidInput(f"Total days must be an integer, got {total_days!r}")
    if total_days < 1:
        raise InvalidInput(f"Total days must be at least 1, got {total_days}")
