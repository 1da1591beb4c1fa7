# Overview: Flask API routes for health, backup, restore and reset.

# backend/bodega/routes/system.py
"""
System endpoints

Backup/restore move every collection as one JSON object:
{"products": [...], "customers": [...], ...}
"""

from flask import Blueprint, request, jsonify, current_app

from ..decorators import json_errors
from ..services import storage_service


system_bp = Blueprint("system", __name__)


@system_bp.get("/health")
def health():
    return jsonify({"ok": True})


@system_bp.get("/api/system/backup")
@json_errors("export backup")
def backup_route():
    snapshot = storage_service.export_all()
    current_app.logger.info("Backup exported")
    return jsonify(snapshot), 200


@system_bp.post("/api/system/restore")
@json_errors("restore backup")
def restore_route():
    """
    Replace every collection present in the body with its contents.

    Returns:
        200: {"restored": {"products": 12, ...}}
        400: Malformed backup (nothing written)
    """
    counts = storage_service.import_all(request.get_json(silent=True))
    current_app.logger.info("Backup restored: %s", counts)
    return jsonify({"restored": counts}), 200


@system_bp.post("/api/system/reset")
@json_errors("reset data")
def reset_route():
    storage_service.reset_all()
    current_app.logger.info("All collections cleared")
    return jsonify({"success": True}), 200
