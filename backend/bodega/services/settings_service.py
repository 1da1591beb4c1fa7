# Overview: Service-layer operations for application settings (exchange rate, company info).

"""
Settings Service

The exchange rate lives in the settings collection and is read by the
HTTP/CLI layer, then handed to the sales/purchase/accounts services by
value. Those services never read settings themselves, so changing the
rate can't alter a transaction that is already being committed or any
historical one.
"""

from __future__ import annotations

from flask import current_app

from ..errors import ValidationError
from ..time_utils import now_z
from ..validation import coerce_number, require_payload, text_field
from . import storage_service as store


APP_SETTINGS_ID = "app_settings"
COMPANY_INFO_ID = "company_info"

COMPANY_OPTIONAL_FIELDS = (
    "rif", "address", "phone", "owner_name", "email", "bank",
    "mobile_phone", "dni", "slogan",
)

TICKET_FLAGS = ("show_logo_on_ticket", "show_iva_on_ticket", "include_qr")


def _defaults() -> dict:
    return {
        "id": APP_SETTINGS_ID,
        "exchange_rate": current_app.config.get("DEFAULT_EXCHANGE_RATE", 1.0),
        "last_rate_update": None,
        "show_logo_on_ticket": True,
        "show_iva_on_ticket": False,
        "include_qr": False,
        "ticket_header": "",
        "ticket_footer": "",
    }


def get_settings() -> dict:
    stored = store.get(store.SETTINGS, APP_SETTINGS_ID) or {}
    return {**_defaults(), **stored}


def get_exchange_rate() -> float:
    return get_settings()["exchange_rate"]


def update_exchange_rate(rate) -> dict:
    """Set the day's Bs/USD rate and stamp when it changed."""
    settings = get_settings()
    settings["exchange_rate"] = coerce_number(rate, "exchange_rate", positive=True)
    settings["last_rate_update"] = now_z()
    saved = store.put(store.SETTINGS, settings)
    current_app.logger.info("Exchange rate set to %s", saved["exchange_rate"])
    return saved


def update_ticket_options(options: dict) -> dict:
    payload = require_payload(options)
    settings = get_settings()

    for flag in TICKET_FLAGS:
        if flag in payload:
            if not isinstance(payload[flag], bool):
                raise ValidationError(f"{flag} must be true or false")
            settings[flag] = payload[flag]

    for field in ("ticket_header", "ticket_footer"):
        if field in payload:
            settings[field] = text_field(payload, field, required=False, max_length=500)

    return store.put(store.SETTINGS, settings)


def get_company_info() -> dict:
    return store.get(store.SETTINGS, COMPANY_INFO_ID) or {"id": COMPANY_INFO_ID, "name": ""}


def save_company_info(info: dict) -> dict:
    payload = require_payload(info)
    record = {"id": COMPANY_INFO_ID, "name": text_field(payload, "name")}
    for field in COMPANY_OPTIONAL_FIELDS:
        record[field] = text_field(payload, field, required=False)
    return store.put(store.SETTINGS, record)
