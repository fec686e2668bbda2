"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from trio_booking.domain.exceptions import InvalidInput

_CENTS_PER_DOLLAR = 100


@dataclass(frozen=True)
class Money:
    """Monetary amount as an integer number of cents.

    All fee percentages are applied through ``percent()``, which is the
    only place where a fractional cent is rounded away.
    """

    cents: int
    currency: str = "USD"

    def __post_init__(self) -> None:
        if isinstance(self.cents, bool) or not isinstance(self.cents, int):
            raise InvalidInput(
                f"Money must be a whole number of cents, got {type(self.cents).__name__}"
            )
        if self.cents < 0:
            raise InvalidInput(f"Money amount cannot be negative, got {self.cents} cents")

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.cents + other.cents, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.cents - other.cents
        if result < 0:
            raise InvalidInput("Money subtraction would result in a negative amount")
        return Money(result, self.currency)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.cents * factor, self.currency)

    def percent(self, rate: Decimal, days: int = 1) -> Money:
        """Return ``rate`` percent of this amount over ``days`` days.

        The product is computed exactly and rounded once, half-up, to
        the nearest cent.
        """
        exact = Decimal(self.cents) * Decimal(rate) / 100 * days
        rounded = exact.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return Money(int(rounded), self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.cents < other.cents

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.cents <= other.cents

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.cents > other.cents

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.cents >= other.cents

    # --- Display --------------------------------------------------------------

    @property
    def amount(self) -> Decimal:
        return Decimal(self.cents) / _CENTS_PER_DOLLAR

    def __str__(self) -> str:
        return f"${self.amount:,.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise InvalidInput(f"Cannot combine {self.currency} with {other.currency}")

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(0)

    @staticmethod
    def of(amount: str | int | Decimal) -> Money:
        """Parse a dollar amount such as ``"45.00"`` into cents."""
        try:
            dollars = Decimal(str(amount).strip().lstrip("$").replace(",", ""))
        except (InvalidOperation, ValueError) as exc:
            raise InvalidInput(f"Invalid money amount: {amount!r}") from exc
        if not dollars.is_finite():
            raise InvalidInput(f"Invalid money amount: {amount!r}")
        cents = dollars * _CENTS_PER_DOLLAR
        if cents != cents.to_integral_value():
            raise InvalidInput(f"Money amount has sub-cent precision: {amount!r}")
        return Money(int(cents))


@dataclass(frozen=True)
class DateRange:
    """A rental period, inclusive of both ``start`` and ``end``."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise InvalidInput(
                f"End date {self.end.isoformat()} is before start date "
                f"{self.start.isoformat()}"
            )

    @property
    def total_days(self) -> int:
        return (self.end - self.start).days + 1

    def overlaps(self, other: DateRange) -> bool:
        return self.start <= other.end and self.end >= other.start

    def __str__(self) -> str:
        return f"{self.start.isoformat()} to {self.end.isoformat()}"


@dataclass(frozen=True)
class FeeSchedule:
    """Platform fee percentages (``10`` means 10%).

    - ``renter_fee``: first rental day, on the daily price and on each
      non-consumable addon.
    - ``subsequent_daily_fee``: every day after the first, and every
      extended day.
    - ``host_fee``: share of the host's revenue kept by the platform.
    """

    renter_fee: Decimal = Decimal("10")
    subsequent_daily_fee: Decimal = Decimal("1.5")
    host_fee: Decimal = Decimal("12")

    def __post_init__(self) -> None:
        for name in ("renter_fee", "subsequent_daily_fee", "host_fee"):
            try:
                value = Decimal(str(getattr(self, name)))
            except (InvalidOperation, ValueError) as exc:
                raise InvalidInput(f"Invalid {name}: {getattr(self, name)!r}") from exc
            if not value.is_finite() or value < 0:
                raise InvalidInput(f"{name} must be a non-negative percentage, got {value}")
            object.__setattr__(self, name, value)
        if self.host_fee > 100:
            raise InvalidInput(f"host_fee cannot exceed 100 percent, got {self.host_fee}")
