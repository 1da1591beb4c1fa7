# Overview: Service-layer operations for the collection store; every other service persists through here.

"""
Collection Store

A generic named-collection document store on top of one SQLAlchemy table.
Records are JSON documents keyed by their "id" field.

UNIT OF WORK:
- put/delete commit immediately by default.
- commit=False joins the caller's unit of work; the caller finishes it
  with commit() or rollback().
- Any SQLAlchemy failure rolls the session back and surfaces as
  PersistenceError. Nothing is retried.
"""

from __future__ import annotations

import copy
from contextlib import contextmanager
from functools import wraps

from flask import current_app

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..errors import PersistenceError, ValidationError
from ..models import Record


PRODUCTS = "products"
CUSTOMERS = "customers"
SUPPLIERS = "suppliers"
SELLERS = "sellers"
SALES = "sales"
PURCHASES = "purchases"
SETTINGS = "settings"

COLLECTIONS = (PRODUCTS, CUSTOMERS, SUPPLIERS, SELLERS, SALES, PURCHASES, SETTINGS)


def _guarded(func_):
    @wraps(func_)
    def wrapper(*args, **kwargs):
        try:
            return func_(*args, **kwargs)
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise PersistenceError(
                f"Store operation {func_.__name__} failed: {exc.__class__.__name__}",
                details={"operation": func_.__name__, "error": exc.__class__.__name__},
            ) from exc
    return wrapper


def _check_collection(collection: str) -> None:
    if collection not in COLLECTIONS:
        raise ValidationError(f"Unknown collection: {collection}")


def _record_id(record: dict) -> str:
    if not isinstance(record, dict):
        raise ValidationError("Record must be an object")
    record_id = record.get("id")
    if record_id is None or str(record_id).strip() == "":
        raise ValidationError("Record must have an id")
    return str(record_id)


def _clear(collection: str) -> None:
    for row in db.session.query(Record).filter(Record.collection == collection).all():
        db.session.delete(row)
    db.session.flush()


def _next_seq(collection: str) -> int:
    current = (
        db.session.query(func.max(Record.seq))
        .filter(Record.collection == collection)
        .scalar()
    )
    return (current or 0) + 1


@_guarded
def get_all(collection: str) -> list[dict]:
    """Whole collection in insertion order."""
    _check_collection(collection)
    rows = (
        db.session.query(Record)
        .filter(Record.collection == collection)
        .order_by(Record.seq.asc())
        .all()
    )
    return [row.to_dict() for row in rows]


@_guarded
def get(collection: str, record_id: str) -> dict | None:
    _check_collection(collection)
    row = db.session.get(Record, (collection, str(record_id)))
    return row.to_dict() if row else None


@_guarded
def put(collection: str, record: dict, commit: bool = True) -> dict:
    """Upsert keyed by record["id"]. Returns the stored copy."""
    _check_collection(collection)
    record_id = _record_id(record)

    row = db.session.get(Record, (collection, record_id))
    if row is None:
        row = Record(collection=collection, id=record_id, seq=_next_seq(collection))
        db.session.add(row)
    row.data = {**copy.deepcopy(record), "id": record_id}
    db.session.flush()

    if commit:
        db.session.commit()
    return row.to_dict()


@_guarded
def delete(collection: str, record_id: str, commit: bool = True) -> None:
    _check_collection(collection)
    row = db.session.get(Record, (collection, str(record_id)))
    if row is not None:
        db.session.delete(row)
        db.session.flush()
    if commit:
        db.session.commit()


@_guarded
def export_all() -> dict[str, list[dict]]:
    """Snapshot of every collection, suitable for JSON backup."""
    return {collection: get_all(collection) for collection in COLLECTIONS}


@_guarded
def import_all(snapshot: dict) -> dict[str, int]:
    """
    Restore a snapshot produced by export_all().

    Each collection present in the snapshot replaces the stored one;
    collections absent from it are left alone. All-or-nothing.

    Returns the number of records written per collection.
    """
    if not isinstance(snapshot, dict):
        raise ValidationError("Backup must be an object of collections")

    for collection, records in snapshot.items():
        _check_collection(collection)
        if not isinstance(records, list):
            raise ValidationError(f"Backup collection {collection} must be a list")
        seen: set[str] = set()
        for record in records:
            record_id = _record_id(record)
            if record_id in seen:
                raise ValidationError(f"Backup collection {collection} repeats id {record_id}")
            seen.add(record_id)

    counts: dict[str, int] = {}
    for collection, records in snapshot.items():
        _clear(collection)
        for seq, record in enumerate(records, start=1):
            record_id = _record_id(record)
            db.session.add(Record(
                collection=collection,
                id=record_id,
                seq=seq,
                data={**copy.deepcopy(record), "id": record_id},
            ))
        counts[collection] = len(records)

    db.session.commit()
    return counts


@_guarded
def reset_all() -> None:
    """Empty every collection. The table itself stays."""
    for collection in COLLECTIONS:
        _clear(collection)
    db.session.commit()


@_guarded
def commit() -> None:
    db.session.commit()


def rollback() -> None:
    db.session.rollback()


@contextmanager
def unit_of_work(label: str):
    """
    Group several put/delete calls (made with commit=False) into one commit.

    On any error the whole unit is rolled back and the error propagates.
    """
    try:
        yield
        commit()
    except Exception:
        rollback()
        current_app.logger.error("Rolled back %s", label)
        raise
