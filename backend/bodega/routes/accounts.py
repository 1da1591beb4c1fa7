# Overview: Flask API routes for receivables/payables; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify

from ..decorators import json_errors
from ..services import accounts_service, settings_service
from ..validation import require_payload


accounts_bp = Blueprint("accounts", __name__, url_prefix="/api/accounts")


@accounts_bp.get("/<kind>")
@json_errors("list pending accounts")
def list_pending_route(kind: str):
    """Pending sales (cxc) or purchases (cxp) with their balances."""
    items = accounts_service.list_pending(kind)
    for item in items:
        item["balance_usd"] = accounts_service.outstanding_balance(item)
    return jsonify({
        "items": items,
        "count": len(items),
        "total_pending_usd": accounts_service.total_pending(kind),
    }), 200


@accounts_bp.post("/<kind>/<tx_id>/payments")
@json_errors("apply payment")
def apply_payment_route(kind: str, tx_id: str):
    """
    Request body: {"amount_usd": 6.0}

    Returns the updated transaction and a receipt priced at today's rate.
    """
    data = require_payload(request.get_json(silent=True))
    amount = data.get("amount_usd")

    tx = accounts_service.apply_payment(tx_id, kind, amount)
    receipt = accounts_service.payment_receipt(
        tx, amount, settings_service.get_exchange_rate()
    )
    return jsonify({"transaction": tx, "receipt": receipt}), 200
