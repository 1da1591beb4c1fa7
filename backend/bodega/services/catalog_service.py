# Overview: Service-layer operations for products and contacts; encapsulates catalog rules.

"""
Catalog Service

Products carry the live price/cost/stock that sales and purchases read
and mutate. Contacts (customers, suppliers, sellers) are referenced from
transactions by id plus a copied name, so deleting or renaming a contact
never touches history.

SKU uniqueness is not enforced.
"""

from __future__ import annotations

import uuid

from ..errors import NotFoundError, ValidationError
from ..validation import number_field, require_payload, text_field
from . import storage_service as store


CONTACT_COLLECTIONS = {
    "customer": store.CUSTOMERS,
    "supplier": store.SUPPLIERS,
    "seller": store.SELLERS,
}

SELLER_STATUSES = {"active", "inactive"}


def new_id() -> str:
    return str(uuid.uuid4())


# =============================================================================
# PRODUCTS
# =============================================================================

def upsert_product(product: dict) -> dict:
    """
    Validate and store a product. A missing id means create.

    Stock may be any finite number; price, cost and min_stock must be >= 0.
    Editing a product without sending stock or min_stock keeps the stored
    values.
    """
    payload = require_payload(product)
    product_id = str(payload.get("id") or new_id())
    existing = store.get(store.PRODUCTS, product_id) or {}

    record = {
        "id": product_id,
        "name": text_field(payload, "name"),
        "sku": text_field(payload, "sku", max_length=64),
        "category": text_field(payload, "category", required=False, max_length=64),
        "price_usd": number_field(payload, "price_usd", minimum=0),
        "cost_usd": number_field(payload, "cost_usd", minimum=0),
        "stock": number_field(payload, "stock", default=existing.get("stock", 0.0)),
        "min_stock": number_field(payload, "min_stock", default=existing.get("min_stock", 0.0), minimum=0),
    }
    return store.put(store.PRODUCTS, record)


def get_product(product_id: str) -> dict:
    product = store.get(store.PRODUCTS, product_id)
    if product is None:
        raise NotFoundError(f"Product {product_id} not found")
    return product


def list_products() -> list[dict]:
    return sorted(store.get_all(store.PRODUCTS), key=lambda p: p["name"].lower())


def delete_product(product_id: str) -> None:
    get_product(product_id)
    store.delete(store.PRODUCTS, product_id)


def adjust_stock(product_id: str, delta: float, commit: bool = True) -> dict:
    """stock += delta. Availability is the caller's responsibility."""
    product = get_product(product_id)
    product["stock"] = product["stock"] + delta
    return store.put(store.PRODUCTS, product, commit=commit)


def low_stock_products() -> list[dict]:
    """Products at or below their reorder threshold."""
    return [p for p in list_products() if p["stock"] <= p.get("min_stock", 0)]


# =============================================================================
# CONTACTS
# =============================================================================

def _contact_collection(contact_type: str) -> str:
    collection = CONTACT_COLLECTIONS.get(contact_type)
    if collection is None:
        raise ValidationError(
            f"Invalid contact type: {contact_type}. Must be one of {sorted(CONTACT_COLLECTIONS)}"
        )
    return collection


def upsert_contact(contact_type: str, contact: dict) -> dict:
    collection = _contact_collection(contact_type)
    payload = require_payload(contact)

    record = {
        "id": str(payload.get("id") or new_id()),
        "name": text_field(payload, "name"),
        "phone": text_field(payload, "phone", max_length=32),
    }

    if contact_type in ("customer", "supplier"):
        record["rif"] = text_field(payload, "rif", max_length=32)

    if contact_type == "customer":
        record["email"] = text_field(payload, "email", required=False, max_length=120)
        record["address"] = text_field(payload, "address", required=False)
        if record["email"] and "@" not in record["email"]:
            raise ValidationError("email must be a valid address")

    if contact_type == "seller":
        status = payload.get("status") or "active"
        if status not in SELLER_STATUSES:
            raise ValidationError(f"Invalid seller status: {status}")
        record["status"] = status

    return store.put(collection, record)


def get_contact(contact_type: str, contact_id: str) -> dict:
    contact = store.get(_contact_collection(contact_type), contact_id)
    if contact is None:
        raise NotFoundError(f"{contact_type.capitalize()} {contact_id} not found")
    return contact


def list_contacts(contact_type: str) -> list[dict]:
    contacts = store.get_all(_contact_collection(contact_type))
    return sorted(contacts, key=lambda c: c["name"].lower())


def delete_contact(contact_type: str, contact_id: str) -> None:
    """Remove a contact. Sales and purchases keep their copied names."""
    get_contact(contact_type, contact_id)
    store.delete(_contact_collection(contact_type), contact_id)
