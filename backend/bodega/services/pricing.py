# Overview: Totals and payment-status rules shared by sales and purchases.

"""
Money is summed and compared in integer cents and stored as dollars
rounded to two decimals, so a balance paid to the cent always settles.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ValidationError
from ..validation import coerce_number


STATUS_PAID = "paid"
STATUS_PENDING = "pending"


@dataclass(frozen=True)
class Totals:
    subtotal_usd: float
    discount_usd: float
    total_usd: float
    total_bs: float
    exchange_rate: float
    paid_amount_usd: float
    status: str


def to_cents(amount: float) -> int:
    return int(round(amount * 100))


def from_cents(cents: int) -> float:
    return cents / 100


def round_money(amount: float) -> float:
    return from_cents(to_cents(amount))


def derive_status(paid_amount_usd: float, total_usd: float) -> str:
    return STATUS_PAID if to_cents(paid_amount_usd) >= to_cents(total_usd) else STATUS_PENDING


def compute_totals(
    line_amounts: list[float],
    *,
    exchange_rate,
    discount_usd=0,
    is_credit: bool = False,
    initial_payment=0,
) -> Totals:
    """
    Freeze the money fields of a transaction.

    - each line is rounded to cents before summing
    - total_usd = sum(lines) - discount; a discount larger than the
      subtotal is rejected, never clamped
    - total_bs = total_usd * exchange_rate (rate captured by value)
    - cash transactions are paid in full; credit ones start at the
      initial payment, which may not exceed the total
    """
    rate = coerce_number(exchange_rate, "exchange_rate", positive=True)
    discount_cents = to_cents(coerce_number(discount_usd or 0, "discount_usd", minimum=0))

    subtotal_cents = sum(to_cents(amount) for amount in line_amounts)
    total_cents = subtotal_cents - discount_cents
    if total_cents < 0:
        raise ValidationError(
            "discount_usd cannot exceed the subtotal",
            details={"subtotal_usd": from_cents(subtotal_cents), "discount_usd": from_cents(discount_cents)},
        )

    if is_credit:
        paid_cents = to_cents(coerce_number(initial_payment or 0, "initial_payment", minimum=0))
        if paid_cents > total_cents:
            raise ValidationError(
                "initial_payment cannot exceed the total",
                details={"total_usd": from_cents(total_cents), "initial_payment": from_cents(paid_cents)},
            )
    else:
        paid_cents = total_cents

    total = from_cents(total_cents)
    paid = from_cents(paid_cents)
    return Totals(
        subtotal_usd=from_cents(subtotal_cents),
        discount_usd=from_cents(discount_cents),
        total_usd=total,
        total_bs=round_money(total * rate),
        exchange_rate=rate,
        paid_amount_usd=paid,
        status=derive_status(paid, total),
    )


def apply_totals(record: dict, totals: Totals) -> dict:
    """Copy frozen totals onto a sale/purchase record."""
    record.update({
        "total_usd": totals.total_usd,
        "total_bs": totals.total_bs,
        "exchange_rate": totals.exchange_rate,
        "discount_usd": totals.discount_usd,
        "status": totals.status,
        "initial_payment_usd": totals.paid_amount_usd,
        "paid_amount_usd": totals.paid_amount_usd,
    })
    return record
