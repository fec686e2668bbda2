"""Domain -> DTO mapping shared by the booking use cases."""

from __future__ import annotations

from trio_booking.application.dto import (
    AddonLineDTO,
    BookingDTO,
    ExtensionDTO,
    FeeBreakdownDTO,
)
from trio_booking.domain.model.addon import Addon
from trio_booking.domain.model.booking import Booking, Extension
from trio_booking.domain.model.value_objects import FeeSchedule, Money
from trio_booking.domain.service.pricing import (
    FeeBreakdown,
    compute_addon_fee,
    compute_host_payout,
)


def breakdown_to_dto(
    daily_price: Money,
    total_days: int,
    addons: list[Addon],
    breakdown: FeeBreakdown,
    fees: FeeSchedule,
) -> FeeBreakdownDTO:
    return FeeBreakdownDTO(
        total_days=total_days,
        daily_price=str(daily_price),
        daily_total=str(breakdown.daily_total),
        listing_insurance_total=str(breakdown.listing_insurance_total),
        addon_item_total=str(breakdown.addon_item_total),
        addon_insurance_total=str(breakdown.addon_insurance_total),
        subtotal=str(breakdown.subtotal),
        host_payout=str(compute_host_payout(breakdown, fees).payout),
        addons=[
            AddonLineDTO(
                item=addon.item,
                style=addon.style,
                consumable=addon.consumable,
                qty=addon.qty,
                unit_price=str(addon.price or Money.zero()),
                line_total=str(addon.item_cost),
                insurance=str(
                    compute_addon_fee(addon.price, addon.consumable, total_days, fees)
                ),
            )
            for addon in addons
        ],
    )


def extension_to_dto(booking_id: int, ext: Extension) -> ExtensionDTO:
    return ExtensionDTO(
        id=ext.id,
        booking_id=booking_id,
        start_date=ext.dates.start.isoformat(),
        end_date=ext.dates.end.isoformat(),
        total_days=ext.breakdown.total_days,
        status=ext.status.value,
        daily_total=str(ext.breakdown.daily_total),
        addon_total=str(ext.breakdown.addon_total),
        listing_insurance_total=str(ext.breakdown.listing_insurance_total),
        addon_insurance_total=str(ext.breakdown.addon_insurance_total),
        total=str(ext.total),
    )


def booking_to_dto(booking: Booking) -> BookingDTO:
    return BookingDTO(
        id=booking.id,  # type: ignore[arg-type]
        listing_id=booking.listing_id,
        listing_title=booking.listing_title,
        renter_name=booking.renter_name,
        status=booking.status.value,
        start_date=booking.dates.start.isoformat(),
        end_date=booking.end_date.isoformat(),
        breakdown=breakdown_to_dto(
            booking.daily_price,
            booking.dates.total_days,
            booking.addons,
            booking.breakdown,
            booking.fees,
        ),
        extensions=[extension_to_dto(booking.id, ext) for ext in booking.extensions],  # type: ignore[arg-type]
        created_at=booking.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )

