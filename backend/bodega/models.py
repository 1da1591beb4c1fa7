# backend/bodega/models.py
from __future__ import annotations
import copy

from .extensions import db


class Record(db.Model):
    """
    One JSON document inside a named collection.

    Every business entity (products, contacts, sales, purchases, settings)
    is stored here; the collection name plays the role of a table.
    """
    __tablename__ = "records"

    collection = db.Column(db.String(32), primary_key=True)
    id = db.Column(db.String(64), primary_key=True)
    data = db.Column(db.JSON, nullable=False)
    seq = db.Column(db.Integer, nullable=False, default=0, index=True)
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def __repr__(self) -> str:
        return f"<Record {self.collection}/{self.id}>"

    def to_dict(self) -> dict:
        return copy.deepcopy(self.data)
