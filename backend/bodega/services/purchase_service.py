# Overview: Service-layer operations for purchases; adds stock and resets catalog cost/price.

"""
Purchase Service

Committing a purchase adds every line's quantity to stock and overwrites
the product's live cost_usd and price_usd with the line's values: the
latest purchase sets the market price.

EDITING: commit_purchase(editing_id=...) overwrites an existing purchase
(same id and date, new lines, new totals, exchange rate frozen again) and
re-applies the stock/cost/price effects of the NEW lines. The stock added
by the original commit is not reversed, so editing adds stock a second
time. This is the current, documented behaviour until product owners
decide otherwise.
"""

from __future__ import annotations

from flask import current_app

from ..errors import NotFoundError, ValidationError
from ..time_utils import now_z
from ..validation import coerce_number, require_payload
from . import catalog_service
from . import storage_service as store
from .pricing import apply_totals, compute_totals


def _build_lines(items: list) -> list[dict]:
    lines = []
    for i, raw in enumerate(items, start=1):
        item = require_payload(raw)
        product_id = item.get("product_id")
        if not product_id:
            raise ValidationError(f"Line {i}: product_id is required")

        product = catalog_service.get_product(product_id)
        quantity = coerce_number(item.get("quantity"), f"Line {i} quantity", positive=True)

        if item.get("cost_usd") is None:
            cost = product["cost_usd"]
        else:
            cost = coerce_number(item["cost_usd"], f"Line {i} cost_usd", minimum=0)

        if item.get("new_sale_price_usd") is None:
            new_price = product["price_usd"]
        else:
            new_price = coerce_number(item["new_sale_price_usd"], f"Line {i} new_sale_price_usd", minimum=0)

        lines.append({
            "product_id": product["id"],
            "name": product["name"],
            "quantity": quantity,
            "cost_usd": cost,
            "new_sale_price_usd": new_price,
        })
    return lines


def _receive_line(line: dict) -> None:
    product = catalog_service.adjust_stock(line["product_id"], line["quantity"], commit=False)
    product["cost_usd"] = line["cost_usd"]
    product["price_usd"] = line["new_sale_price_usd"]
    store.put(store.PRODUCTS, product, commit=False)


def commit_purchase(
    supplier_id: str,
    items: list,
    *,
    exchange_rate,
    discount_usd=0,
    is_credit: bool = False,
    initial_payment=0,
    editing_id: str | None = None,
) -> dict:
    """
    Commit (or re-commit) a purchase and apply its catalog effects.

    Raises:
        ValidationError: empty cart, missing supplier, bad numbers
        NotFoundError: unknown supplier, product or editing_id
        PersistenceError: the store failed; nothing was kept
    """
    if not supplier_id:
        raise ValidationError("supplier_id is required")
    if not items:
        raise ValidationError("Cannot commit a purchase with no items")

    existing = get_purchase(editing_id) if editing_id else None
    supplier = catalog_service.get_contact("supplier", supplier_id)

    lines = _build_lines(items)
    totals = compute_totals(
        [line["quantity"] * line["cost_usd"] for line in lines],
        exchange_rate=exchange_rate,
        discount_usd=discount_usd,
        is_credit=is_credit,
        initial_payment=initial_payment,
    )

    purchase = {
        "id": existing["id"] if existing else catalog_service.new_id(),
        "date": existing["date"] if existing else now_z(),
        "supplier_id": supplier["id"],
        "supplier_name": supplier["name"],
        "items": lines,
    }
    apply_totals(purchase, totals)

    with store.unit_of_work(f"purchase {purchase['id']}"):
        saved = store.put(store.PURCHASES, purchase, commit=False)
        for line in lines:
            _receive_line(line)

    current_app.logger.info(
        "Purchase %s %s: total_usd=%.2f status=%s",
        saved["id"],
        "re-committed" if existing else "committed",
        saved["total_usd"],
        saved["status"],
    )
    return saved


def list_purchases() -> list[dict]:
    """Purchase history, newest first."""
    return sorted(reversed(store.get_all(store.PURCHASES)), key=lambda p: p["date"], reverse=True)


def get_purchase(purchase_id: str) -> dict:
    purchase = store.get(store.PURCHASES, purchase_id)
    if purchase is None:
        raise NotFoundError(f"Purchase {purchase_id} not found")
    return purchase
