# Overview: Flask API routes for settings; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify

from ..decorators import json_errors
from ..services import settings_service
from ..validation import require_payload


settings_bp = Blueprint("settings", __name__, url_prefix="/api/settings")


@settings_bp.get("/")
@json_errors("load settings")
def get_settings_route():
    return jsonify({"settings": settings_service.get_settings()}), 200


@settings_bp.put("/exchange-rate")
@json_errors("update exchange rate")
def update_rate_route():
    data = require_payload(request.get_json(silent=True))
    settings = settings_service.update_exchange_rate(data.get("exchange_rate"))
    return jsonify({"settings": settings}), 200


@settings_bp.put("/ticket")
@json_errors("update ticket options")
def update_ticket_route():
    settings = settings_service.update_ticket_options(request.get_json(silent=True))
    return jsonify({"settings": settings}), 200


@settings_bp.get("/company")
@json_errors("load company info")
def get_company_route():
    return jsonify({"company": settings_service.get_company_info()}), 200


@settings_bp.put("/company")
@json_errors("save company info")
def save_company_route():
    company = settings_service.save_company_info(request.get_json(silent=True))
    return jsonify({"company": company}), 200
