# Overview: Request decorators for API routes.

from functools import wraps
from flask import jsonify, current_app

from .errors import BodegaError, PersistenceError


def json_errors(action: str):
    """
    Translate service errors into JSON responses.

    - BodegaError subclasses map to their status_code with details
    - PersistenceError is also logged with its traceback
    - anything else is logged and hidden behind a 500
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except BodegaError as e:
                if isinstance(e, PersistenceError):
                    current_app.logger.exception("Store failure while trying to %s", action)
                return jsonify({"error": str(e), "details": e.details}), e.status_code
            except Exception:
                current_app.logger.exception("Failed to %s", action)
                return jsonify({"error": "Internal server error"}), 500

        return decorated_function

    return decorator
