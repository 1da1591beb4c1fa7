# Overview: Exception taxonomy shared by services and routes.

"""
Service errors

Services raise these; routes translate them into JSON responses.
Nothing here is retried automatically.
"""


class BodegaError(Exception):
    """Base class for every error the core raises on purpose."""
    status_code = 500

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


class ValidationError(BodegaError, ValueError):
    """400-level input problem."""
    status_code = 400


class NotFoundError(BodegaError, LookupError):
    """Referenced product, contact or transaction does not exist."""
    status_code = 404


class InsufficientStockError(BodegaError):
    """A sale would drive a product's stock below zero."""
    status_code = 409


class PersistenceError(BodegaError):
    """The backing store failed to read or write."""
    status_code = 503
