# Overview: Flask API routes for dashboard and totals reports.

from flask import Blueprint, request, jsonify

from ..decorators import json_errors
from ..errors import ValidationError
from ..services import reporting_service
from ..time_utils import parse_iso_datetime


reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")


@reports_bp.get("/dashboard")
@json_errors("build dashboard")
def dashboard_route():
    """Optional ?date=YYYY-MM-DD picks the day to summarize (UTC)."""
    raw = request.args.get("date")
    today = None
    if raw is not None:
        try:
            parsed = parse_iso_datetime(raw)
        except ValueError:
            parsed = None
        if parsed is None:
            raise ValidationError("date must be an ISO-8601 date")
        today = parsed.date()
    return jsonify(reporting_service.dashboard_summary(today)), 200


@reports_bp.get("/totals")
@json_errors("build totals report")
def totals_route():
    return jsonify(reporting_service.totals_report()), 200
