"""Domain service: extension date rules.

An extension always starts the day after the booking it extends ends.
The renter only picks the end date; ``is_valid_extension_date_range``
checks that choice and reports a human-readable reason instead of
raising, because a bad date pick is an expected user mistake.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from trio_booking.domain.model.value_objects import DateRange


@dataclass(frozen=True)
class ExtensionDateCheck:
    valid: bool
    reason: str | None = None


def earliest_extension_start(order_end: date) -> date:
    """The first day an extension of a booking ending on ``order_end`` can cover."""
    return order_end + timedelta(days=1)


def is_valid_extension_date_range(
    required_start: date,
    candidate_end: date,
    original_order_end: date,
    conflicting_ranges: Iterable[DateRange | tuple[date, date]] = (),
    not_before: date | None = None,
) -> ExtensionDateCheck:
    """Validate an extension ending on ``candidate_end``. First failed rule wins.

    ``not_before`` is the earliest start the platform accepts (the day
    after today, for the 24-hour lead time); omit it to skip that rule.
    """
    if not_before is not None and required_start < not_before:
        return ExtensionDateCheck(
            False, "Extension must start at least 24 hours from now."
        )

    if candidate_end < required_start:
        return ExtensionDateCheck(False, "End date must be on or after the start date.")

    if required_start != earliest_extension_start(original_order_end):
        return ExtensionDateCheck(
            False, "Extension must start the day after the original booking ends."
        )

    for conflict in conflicting_ranges:
        range_start, range_end = _bounds(conflict)
        if required_start <= range_end and candidate_end >= range_start:
            return ExtensionDateCheck(
                False,
                "Dates overlap with an existing booking "
                f"({range_start.isoformat()} to {range_end.isoformat()}).",
            )

    return ExtensionDateCheck(True)


def _bounds(conflict: DateRange | tuple[date, date]) -> tuple[date, date]:
    if isinstance(conflict, DateRange):
        return conflict.start, conflict.end
    start, end = conflict
    return start, end
