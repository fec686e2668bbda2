"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals. Money values are pre-formatted (e.g.
``"$45.00"``).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AddonSpec:
    """Input: an addon a host offers with a listing."""

    item: str
    price: str | None  # None for a free addon
    consumable: bool = False
    style: str | None = None


@dataclass(frozen=True)
class AddonSelection:
    """Input: an addon a renter picked, and how many."""

    item: str
    qty: int = 1


@dataclass(frozen=True)
class AddonLineDTO:
    item: str
    style: str | None
    consumable: bool
    qty: int
    unit_price: str
    line_total: str
    insurance: str


@dataclass(frozen=True)
class FeeBreakdownDTO:
    total_days: int
    daily_price: str
    daily_total: str
    listing_insurance_total: str
    addon_item_total: str
    addon_insurance_total: str
    subtotal: str
    host_payout: str
    addons: list[AddonLineDTO]


@dataclass(frozen=True)
class QuoteDTO:
    """Output: a priced booking that has not been made."""

    listing_id: str
    listing_title: str
    start_date: str
    end_date: str
    breakdown: FeeBreakdownDTO


@dataclass(frozen=True)
class ExtensionDTO:
    id: int
    booking_id: int
    start_date: str
    end_date: str
    total_days: int
    status: str
    daily_total: str
    addon_total: str
    listing_insurance_total: str
    addon_insurance_total: str
    total: str


@dataclass(frozen=True)
class BookingDTO:
    """Output: a complete booking as displayed to the user."""

    id: int
    listing_id: str
    listing_title: str
    renter_name: str
    status: str
    start_date: str
    end_date: str
    breakdown: FeeBreakdownDTO
    extensions: list[ExtensionDTO]
    created_at: str
