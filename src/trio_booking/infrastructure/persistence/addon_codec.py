"""Addon collections in Trio's order storage format.

Orders keep their addons as a JSON object keyed by item name::

    {"Helmet": ["Red", 1000, "false", 1], "Chalk": ["null", 500, "true", 3]}

Each value is ``[style, price_cents, consumable, qty]``: ``"null"`` means
no style, a non-numeric price means a free addon (a whole-number float
counts as cents, a fractional one is rejected), the consumable flag is the
string ``"true"`` or ``"false"``, and ``qty`` is optional (default 1).
Entries with fewer than three elements are skipped.
"""

from __future__ import annotations

import json
from typing import Any

from trio_booking.domain.exceptions import InvalidInput
from trio_booking.domain.model.addon import Addon
from trio_booking.domain.model.value_objects import Money


def decode_addons(raw: str | dict | None, ids: dict[str, str] | None = None) -> list[Addon]:
    """Parse the stored addon mapping (a JSON string or an already-loaded dict)."""
    if raw is None or raw == "":
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise InvalidInput(f"Malformed addon data: {exc}") from exc
    if not isinstance(raw, dict):
        raise InvalidInput(f"Addon data must be an object, got {type(raw).__name__}")

    ids = ids or {}
    addons: list[Addon] = []
    for index, (item, value) in enumerate(raw.items(), start=1):
        if not isinstance(value, list) or len(value) < 3:
            continue
        style, price, consumable = value[0], value[1], value[2]
        qty = value[3] if len(value) > 3 else 1
        addons.append(
            Addon(
                id=ids.get(item, str(index)),
                item=item,
                style=None if style in (None, "null") else str(style),
                price=_decode_price(item, price),
                consumable=consumable == "true",
                qty=qty if _is_cents(qty) and qty >= 1 else 1,
            )
        )
    return addons


def encode_addons(addons: list[Addon]) -> dict[str, list[Any]]:
    return {
        addon.item: [
            addon.style if addon.style is not None else "null",
            addon.price.cents if addon.price is not None else None,
            "true" if addon.consumable else "false",
            addon.qty,
        ]
        for addon in addons
    }


def addon_ids(addons: list[Addon]) -> dict[str, str]:
    return {addon.item: addon.id for addon in addons}


def _is_cents(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _decode_price(item: str, price: Any) -> Money | None:
    if isinstance(price, float):
        if not price.is_integer():
            raise InvalidInput(f"Addon '{item}' has a fractional price in cents: {price}")
        price = int(price)
    return Money(price) if _is_cents(price) else None
