from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..tracker.session import TrackerSession

logger = logging.getLogger(__name__)

SESSION_KEY = "tracker"


def load_tracker_session(default_year: int) -> TrackerSession:
    return TrackerSession.from_dict(session.get(SESSION_KEY), default_year=default_year)


def save_tracker_session(ts: TrackerSession) -> None:
    session[SESSION_KEY] = ts.to_dict()


def error_response(e: Exception):
    """Map domain errors to JSON error responses."""
    if isinstance(e, ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400
    if isinstance(e, AuthenticationError):
        return jsonify({"success": False, "message": str(e)}), 401
    if isinstance(e, AuthorizationError):
        return jsonify({"success": False, "message": str(e)}), 403
    logger.exception("Unhandled error in request")
    return jsonify({"success": False, "message": "Internal error"}), 500


def admin_required(default_year: int):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not load_tracker_session(default_year).is_admin:
                return jsonify({"success": False, "message": "Admin access required"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator
