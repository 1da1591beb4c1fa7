# backend/bodega/config.py
from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored next to the process working directory
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///bodega.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Bs per USD used until an operator sets the day's rate
    DEFAULT_EXCHANGE_RATE = float(os.environ.get("DEFAULT_EXCHANGE_RATE", "1.0"))
