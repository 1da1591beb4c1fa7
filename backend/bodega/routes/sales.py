# Overview: Flask API routes for sales operations; parses input and returns JSON responses.

# backend/bodega/routes/sales.py
"""Sales API routes"""

from flask import Blueprint, request, jsonify

from ..decorators import json_errors
from ..services import sales_service, settings_service
from ..validation import bool_field, require_payload


sales_bp = Blueprint("sales", __name__, url_prefix="/api/sales")


@sales_bp.get("/")
@json_errors("list sales")
def list_sales_route():
    sales = sales_service.list_sales()
    return jsonify({"items": sales, "count": len(sales)}), 200


@sales_bp.get("/<sale_id>")
@json_errors("get sale")
def get_sale_route(sale_id: str):
    return jsonify({"sale": sales_service.get_sale(sale_id)}), 200


@sales_bp.post("/")
@json_errors("commit sale")
def commit_sale_route():
    """
    Commit a cart as a sale at today's exchange rate.

    Request body:
    {
        "customer_id": "...",
        "seller_id": "...",             (optional)
        "items": [{"product_id": "...", "quantity": 2, "price_usd": 5.0}],
        "discount_usd": 0,              (optional)
        "is_credit": false,             (optional)
        "initial_payment": 0            (optional, credit only)
    }

    Returns:
        201: Sale committed
        400: Invalid input
        404: Unknown customer, seller or product
        409: Insufficient stock (details name the product)
    """
    data = require_payload(request.get_json(silent=True))

    sale = sales_service.commit_sale(
        data.get("customer_id"),
        data.get("items"),
        exchange_rate=settings_service.get_exchange_rate(),
        seller_id=data.get("seller_id"),
        discount_usd=data.get("discount_usd", 0),
        is_credit=bool_field(data, "is_credit"),
        initial_payment=data.get("initial_payment", 0),
    )
    return jsonify({"sale": sale}), 201
