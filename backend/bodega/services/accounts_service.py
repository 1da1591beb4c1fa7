# Overview: Service-layer operations for receivables (CxC) and payables (CxP).

"""
Accounts Service

CxC are pending sales (customers owe us); CxP are pending purchases
(we owe suppliers). A payment adds to paid_amount_usd and re-derives the
status.

DESIGN PRINCIPLES:
- paid_amount_usd is the cumulative sum of payments, kept to the cent.
  Overpayment is accepted and stored as-is; it is never clamped to total_usd.
- status is "paid" once paid_amount_usd >= total_usd and never goes back.
- Receipts are display records only; they are not persisted.
"""

from __future__ import annotations

from flask import current_app

from ..errors import NotFoundError, ValidationError
from ..time_utils import now_z
from ..validation import coerce_number
from . import storage_service as store
from .pricing import STATUS_PAID, STATUS_PENDING, derive_status, from_cents, round_money, to_cents


# =============================================================================
# ACCOUNT KINDS (CONSTANTS)
# =============================================================================

KIND_RECEIVABLE = "cxc"
KIND_PAYABLE = "cxp"

KINDS = {
    KIND_RECEIVABLE: store.SALES,
    KIND_PAYABLE: store.PURCHASES,
}


def _collection(kind: str) -> str:
    collection = KINDS.get(kind)
    if collection is None:
        raise ValidationError(f"Invalid account kind: {kind}. Must be one of {sorted(KINDS)}")
    return collection


def outstanding_balance(tx: dict) -> float:
    """total_usd minus everything paid so far; an overpaid record owes 0."""
    owed = to_cents(tx["total_usd"]) - to_cents(tx.get("paid_amount_usd") or 0)
    return from_cents(max(owed, 0))


def list_pending(kind: str) -> list[dict]:
    """Pending sales (cxc) or purchases (cxp), newest first."""
    records = store.get_all(_collection(kind))
    pending = [r for r in records if r.get("status") == STATUS_PENDING]
    return sorted(reversed(pending), key=lambda r: r["date"], reverse=True)


def total_pending(kind: str) -> float:
    return from_cents(sum(to_cents(outstanding_balance(r)) for r in list_pending(kind)))


def _payment_cents(amount_usd) -> int:
    cents = to_cents(coerce_number(amount_usd, "amount_usd", positive=True))
    if cents <= 0:
        raise ValidationError("amount_usd must be at least 0.01")
    return cents


def apply_payment(tx_id: str, kind: str, amount_usd) -> dict:
    """
    Apply a payment against a sale (cxc) or purchase (cxp).

    Raises:
        ValidationError: amount is not a positive number of cents, bad kind
        NotFoundError: no such transaction
        PersistenceError: the store failed
    """
    collection = _collection(kind)
    amount_cents = _payment_cents(amount_usd)

    tx = store.get(collection, tx_id)
    if tx is None:
        raise NotFoundError(f"{kind.upper()} transaction {tx_id} not found")

    new_paid = from_cents(to_cents(tx.get("paid_amount_usd") or 0) + amount_cents)
    tx["paid_amount_usd"] = new_paid
    if tx.get("status") != STATUS_PAID:
        tx["status"] = derive_status(new_paid, tx["total_usd"])

    saved = store.put(collection, tx)

    current_app.logger.info(
        "Payment of %.2f applied to %s %s: paid_amount_usd=%.2f status=%s",
        from_cents(amount_cents), kind, tx_id, saved["paid_amount_usd"], saved["status"],
    )
    return saved


def payment_receipt(tx: dict, amount_usd, exchange_rate) -> dict:
    """
    Printable receipt for one payment.

    The kind follows from the record: sales carry a customer, purchases a
    supplier. Uses the exchange rate at payment time, which is independent
    of the rate frozen into the transaction.
    """
    amount = from_cents(_payment_cents(amount_usd))
    rate = coerce_number(exchange_rate, "exchange_rate", positive=True)

    if "customer_id" in tx:
        kind, counterparty = KIND_RECEIVABLE, tx.get("customer_name")
    else:
        kind, counterparty = KIND_PAYABLE, tx.get("supplier_name")

    return {
        "transaction_id": tx["id"],
        "kind": kind,
        "counterparty_name": counterparty,
        "date": now_z(),
        "amount_usd": amount,
        "amount_bs": round_money(amount * rate),
        "exchange_rate": rate,
        "balance_usd": outstanding_balance(tx),
        "status": tx["status"],
    }
