from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.web import admin_required, error_response, load_tracker_session, save_tracker_session
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    tracker = container.tracker_service
    year = container.tracker_year
    admin_only = admin_required(year)

    def _roster_payload(ts):
        return {
            "success": True,
            "users": [u.to_dict() for u in tracker.list_users()],
            "selected_user_id": ts.selected_user_id,
            "role": ts.role.value,
        }

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            role = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        except AuthenticationError as e:
            logger.info("Admin login refused for %r", data.get("username", ""))
            return error_response(e)
        except Exception as e:
            return error_response(e)

        ts = load_tracker_session(year)
        ts.role = role
        save_tracker_session(ts)
        logger.info("Admin logged in")
        return jsonify({"success": True, "role": role.value})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        ts = load_tracker_session(year)
        ts.role = Role.AGENT
        save_tracker_session(ts)
        return jsonify({"success": True, "role": ts.role.value})

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    def list_users():
        ts = load_tracker_session(year)
        try:
            tracker.load(ts)
        except Exception as e:
            return error_response(e)
        save_tracker_session(ts)
        return jsonify(_roster_payload(ts))

    @app.route("/api/users", methods=["POST"], endpoint="add_user")
    @admin_only
    def add_user():
        data = request.get_json(silent=True) or {}
        ts = load_tracker_session(year)
        try:
            tracker.load(ts)
            user = tracker.add_user(ts, data.get("name"))
        except Exception as e:
            return error_response(e)
        save_tracker_session(ts)
        payload = _roster_payload(ts)
        payload["user"] = user.to_dict()
        return jsonify(payload), 201

    @app.route("/api/users/<user_id>", methods=["PATCH"], endpoint="rename_user")
    def rename_user(user_id: str):
        data = request.get_json(silent=True) or {}
        ts = load_tracker_session(year)
        try:
            tracker.load(ts)
            user = tracker.rename_user(ts, user_id, str(data.get("name", "")))
        except Exception as e:
            return error_response(e)
        save_tracker_session(ts)
        if user is None:
            return jsonify({"success": False, "message": "User not found"}), 404
        return jsonify({"success": True, "user": user.to_dict()})

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="remove_user")
    @admin_only
    def remove_user(user_id: str):
        confirmed = request.args.get("confirm", "") in {"1", "true", "yes"}
        if not confirmed:
            return jsonify({"success": False, "message": "Removing a user deletes all their data; pass confirm=1"}), 400

        ts = load_tracker_session(year)
        try:
            tracker.load(ts)
            removed = tracker.remove_user(ts, user_id, confirmed=True)
        except Exception as e:
            return error_response(e)
        if not removed:
            return jsonify({"success": False, "message": "User not found"}), 404
        save_tracker_session(ts)
        return jsonify(_roster_payload(ts))

    @app.route("/api/users/<user_id>/select", methods=["POST"], endpoint="select_user")
    def select_user(user_id: str):
        ts = load_tracker_session(year)
        try:
            tracker.load(ts)
        except Exception as e:
            return error_response(e)
        if not tracker.select_user(ts, user_id):
            return jsonify({"success": False, "message": "User not found"}), 404
        save_tracker_session(ts)
        return jsonify(_roster_payload(ts))
