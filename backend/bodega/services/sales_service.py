# Overview: Service-layer operations for sales; computes totals and deducts stock.

"""
Sales Service

A sale is committed in one step from a cart: the cart never exists
server-side. Committing freezes prices, names and the exchange rate into
the sale record and deducts stock for every line.

GUARANTEE: the sale record and all stock deductions are written in a
single unit of work. Stock availability is checked for the whole cart
before anything is written; if any write fails nothing is kept.
"""

from __future__ import annotations

from flask import current_app

from ..errors import InsufficientStockError, NotFoundError, ValidationError
from ..time_utils import now_z
from ..validation import coerce_number, require_payload
from . import catalog_service
from . import storage_service as store
from .pricing import apply_totals, compute_totals


def _build_lines(items: list) -> list[dict]:
    """Resolve cart entries against the catalog and snapshot name/price."""
    lines = []
    for i, raw in enumerate(items, start=1):
        item = require_payload(raw)
        product_id = item.get("product_id")
        if not product_id:
            raise ValidationError(f"Line {i}: product_id is required")

        product = catalog_service.get_product(product_id)
        quantity = coerce_number(item.get("quantity"), f"Line {i} quantity", positive=True)

        if item.get("price_usd") is None:
            price = product["price_usd"]
        else:
            price = coerce_number(item["price_usd"], f"Line {i} price_usd", minimum=0)

        lines.append({
            "product_id": product["id"],
            "name": product["name"],
            "quantity": quantity,
            "price_usd": price,
        })
    return lines


def _validate_on_hand(lines: list[dict]) -> None:
    product_totals: dict[str, float] = {}
    for line in lines:
        product_totals[line["product_id"]] = product_totals.get(line["product_id"], 0) + line["quantity"]

    for product_id, qty in product_totals.items():
        product = catalog_service.get_product(product_id)
        if qty > product["stock"]:
            raise InsufficientStockError(
                f"Insufficient stock for {product['name']}",
                details={
                    "product_id": product_id,
                    "name": product["name"],
                    "requested_quantity": qty,
                    "on_hand": product["stock"],
                },
            )


def commit_sale(
    customer_id: str,
    items: list,
    *,
    exchange_rate,
    seller_id: str | None = None,
    discount_usd=0,
    is_credit: bool = False,
    initial_payment=0,
) -> dict:
    """
    Commit a sale and deduct stock.

    Raises:
        ValidationError: empty cart, missing customer, bad numbers
        NotFoundError: unknown customer, seller or product
        InsufficientStockError: a line asks for more than is on hand
        PersistenceError: the store failed; nothing was kept
    """
    if not customer_id:
        raise ValidationError("customer_id is required")
    if not items:
        raise ValidationError("Cannot commit a sale with no items")

    customer = catalog_service.get_contact("customer", customer_id)
    seller = catalog_service.get_contact("seller", seller_id) if seller_id else None

    lines = _build_lines(items)
    _validate_on_hand(lines)

    totals = compute_totals(
        [line["quantity"] * line["price_usd"] for line in lines],
        exchange_rate=exchange_rate,
        discount_usd=discount_usd,
        is_credit=is_credit,
        initial_payment=initial_payment,
    )

    sale = {
        "id": catalog_service.new_id(),
        "date": now_z(),
        "customer_id": customer["id"],
        "customer_name": customer["name"],
        "seller_id": seller["id"] if seller else None,
        "seller_name": seller["name"] if seller else None,
        "items": lines,
    }
    apply_totals(sale, totals)

    with store.unit_of_work(f"sale {sale['id']}"):
        saved = store.put(store.SALES, sale, commit=False)
        for line in lines:
            catalog_service.adjust_stock(line["product_id"], -line["quantity"], commit=False)

    current_app.logger.info(
        "Sale %s committed: total_usd=%.2f status=%s", saved["id"], saved["total_usd"], saved["status"]
    )
    return saved


def list_sales() -> list[dict]:
    """Sales history, newest first."""
    return sorted(reversed(store.get_all(store.SALES)), key=lambda s: s["date"], reverse=True)


def get_sale(sale_id: str) -> dict:
    sale = store.get(store.SALES, sale_id)
    if sale is None:
        raise NotFoundError(f"Sale {sale_id} not found")
    return sale
