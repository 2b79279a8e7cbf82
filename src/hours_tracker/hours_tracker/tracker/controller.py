from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import error_response, load_tracker_session, save_tracker_session
from ..container import Container


def register(app: Flask, container: Container) -> None:
    tracker = container.tracker_service
    year = container.tracker_year

    def _backend_unavailable():
        return jsonify({"success": False, "message": "Stored data could not be read", "sync_status": tracker.sync_status.value}), 503

    @app.route("/api/period", methods=["GET"], endpoint="period_view")
    def period_view():
        ts = load_tracker_session(year)
        try:
            tracker.load(ts)
            if "month" in request.args:
                tracker.select_month(ts, int(request.args["month"]))
            if "period" in request.args:
                tracker.select_period(ts, request.args["period"])
            view = tracker.period_view(ts)
        except ValueError as e:
            # int() on a bad month query parameter
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception as e:
            return error_response(e)
        save_tracker_session(ts)
        return jsonify({"success": True, "role": ts.role.value, **view})

    @app.route("/api/period/entries/<int:row_index>", methods=["PATCH"], endpoint="update_entry")
    def update_entry(row_index: int):
        data = request.get_json(silent=True) or {}
        ts = load_tracker_session(year)
        try:
            tracker.load(ts)
            entry = tracker.update_entry_field(ts, row_index, str(data.get("field", "")), str(data.get("value", "") or ""))
        except Exception as e:
            return error_response(e)
        save_tracker_session(ts)
        if entry is None:
            if tracker.period_data(ts) is None and ts.selected_user_id:
                return _backend_unavailable()
            return jsonify({"success": False, "message": "No entry at this row"}), 404
        return jsonify(
            {
                "success": True,
                "entry": entry.to_dict(),
                "total_hours": tracker.total_hours(ts),
                "sync_status": tracker.sync_status.value,
            }
        )

    @app.route("/api/period/lock", methods=["POST"], endpoint="toggle_lock")
    def toggle_lock():
        ts = load_tracker_session(year)
        try:
            tracker.load(ts)
            status = tracker.toggle_lock(ts)
        except Exception as e:
            return error_response(e)
        save_tracker_session(ts)
        if status is None:
            if ts.selected_user_id:
                return _backend_unavailable()
            return jsonify({"success": False, "message": "No user selected"}), 404
        return jsonify({"success": True, "status": status.value, "sync_status": tracker.sync_status.value})

    @app.route("/api/period/save", methods=["POST"], endpoint="save_period")
    def save_period():
        ts = load_tracker_session(year)
        try:
            tracker.load(ts)
            results = tracker.save_period(ts)
        except Exception as e:
            return error_response(e)
        save_tracker_session(ts)
        if not results and ts.selected_user_id:
            return _backend_unavailable()
        failed = [r.to_dict() for r in results if not r.ok]
        return jsonify(
            {
                "success": not failed,
                "saved": len(results) - len(failed),
                "failed": failed,
                "sync_status": tracker.sync_status.value,
            }
        )
