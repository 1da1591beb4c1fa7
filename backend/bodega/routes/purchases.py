# Overview: Flask API routes for purchase operations; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify

from ..decorators import json_errors
from ..services import purchase_service, settings_service
from ..validation import bool_field, require_payload


purchases_bp = Blueprint("purchases", __name__, url_prefix="/api/purchases")


def _commit(data: dict, editing_id: str | None = None) -> dict:
    return purchase_service.commit_purchase(
        data.get("supplier_id"),
        data.get("items"),
        exchange_rate=settings_service.get_exchange_rate(),
        discount_usd=data.get("discount_usd", 0),
        is_credit=bool_field(data, "is_credit"),
        initial_payment=data.get("initial_payment", 0),
        editing_id=editing_id,
    )


@purchases_bp.get("/")
@json_errors("list purchases")
def list_purchases_route():
    purchases = purchase_service.list_purchases()
    return jsonify({"items": purchases, "count": len(purchases)}), 200


@purchases_bp.get("/<purchase_id>")
@json_errors("get purchase")
def get_purchase_route(purchase_id: str):
    return jsonify({"purchase": purchase_service.get_purchase(purchase_id)}), 200


@purchases_bp.post("/")
@json_errors("commit purchase")
def commit_purchase_route():
    """
    Commit a purchase. Each item may carry cost_usd and
    new_sale_price_usd; both overwrite the product's live values.
    """
    purchase = _commit(require_payload(request.get_json(silent=True)))
    return jsonify({"purchase": purchase}), 201


@purchases_bp.put("/<purchase_id>")
@json_errors("edit purchase")
def edit_purchase_route(purchase_id: str):
    """
    Re-commit an existing purchase with a new cart.

    NOTE: stock from the original commit is not reversed.
    """
    purchase = _commit(require_payload(request.get_json(silent=True)), editing_id=purchase_id)
    return jsonify({"purchase": purchase}), 200
