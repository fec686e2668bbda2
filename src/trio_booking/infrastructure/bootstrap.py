"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Environment:
    TRIO_DATA_DIR               directory holding listings.json / bookings.json
    TRIO_RENTER_FEE             first-day fee percentage (default 10)
    TRIO_SUBSEQUENT_DAILY_FEE   per-day fee after the first (default 1.5)
    TRIO_HOST_FEE               platform share of host revenue (default 12)
"""

from __future__ import annotations

import os
from pathlib import Path

from trio_booking.domain.model.value_objects import FeeSchedule
from trio_booking.domain.service.pricing import HOST_FEE, RENTER_FEE, SUBSEQUENT_DAILY_FEE
from trio_booking.infrastructure.persistence.json_booking_repository import (
    JsonBookingRepository,
)
from trio_booking.infrastructure.persistence.json_listing_repository import (
    JsonListingRepository,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir() -> Path:
    return Path(os.environ.get("TRIO_DATA_DIR", str(_DEFAULT_DATA_DIR)))


def fee_schedule() -> FeeSchedule:
    return FeeSchedule(
        renter_fee=os.environ.get("TRIO_RENTER_FEE", RENTER_FEE),
        subsequent_daily_fee=os.environ.get("TRIO_SUBSEQUENT_DAILY_FEE", SUBSEQUENT_DAILY_FEE),
        host_fee=os.environ.get("TRIO_HOST_FEE", HOST_FEE),
    )


def listing_repository() -> JsonListingRepository:
    return JsonListingRepository(data_dir() / "listings.json")


def booking_repository() -> JsonBookingRepository:
    return JsonBookingRepository(data_dir() / "bookings.json")
