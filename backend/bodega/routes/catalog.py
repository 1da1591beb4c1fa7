# Overview: Flask API routes for products and contacts; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify

from ..decorators import json_errors
from ..services import catalog_service


catalog_bp = Blueprint("catalog", __name__, url_prefix="/api")


@catalog_bp.get("/products")
@json_errors("list products")
def list_products_route():
    products = catalog_service.list_products()
    return jsonify({"items": products, "count": len(products)}), 200


@catalog_bp.get("/products/low-stock")
@json_errors("list low stock products")
def low_stock_route():
    products = catalog_service.low_stock_products()
    return jsonify({"items": products, "count": len(products)}), 200


@catalog_bp.post("/products")
@json_errors("save product")
def save_product_route():
    product = catalog_service.upsert_product(request.get_json(silent=True))
    return jsonify({"product": product}), 200


@catalog_bp.delete("/products/<product_id>")
@json_errors("delete product")
def delete_product_route(product_id: str):
    catalog_service.delete_product(product_id)
    return jsonify({"success": True}), 200


@catalog_bp.get("/contacts/<contact_type>")
@json_errors("list contacts")
def list_contacts_route(contact_type: str):
    contacts = catalog_service.list_contacts(contact_type)
    return jsonify({"items": contacts, "count": len(contacts)}), 200


@catalog_bp.post("/contacts/<contact_type>")
@json_errors("save contact")
def save_contact_route(contact_type: str):
    contact = catalog_service.upsert_contact(contact_type, request.get_json(silent=True))
    return jsonify({"contact": contact}), 200


@catalog_bp.delete("/contacts/<contact_type>/<contact_id>")
@json_errors("delete contact")
def delete_contact_route(contact_type: str, contact_id: str):
    catalog_service.delete_contact(contact_type, contact_id)
    return jsonify({"success": True}), 200
