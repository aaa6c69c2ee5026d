from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import format_duration, parse_iso_date
from ..container import Container
from ..core.exceptions import MalformedSessionError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/<int:user_id>/<work_date>/sessions", methods=["GET"], endpoint="api_attendance_sessions")
    def api_attendance_sessions(user_id: int, work_date: str):
        """Session details for one day: durations, breaks and totals."""
        try:
            day = parse_iso_date(work_date)
        except ValueError:
            return jsonify({"success": False, "message": "Ngày không hợp lệ (YYYY-MM-DD)"}), 400

        record = container.attendance_service.get_record(user_id, day)
        if not record:
            return jsonify({"success": False, "message": "Không tìm thấy bản ghi chấm công của ngày này"}), 404

        try:
            summary = container.attendance_service.get_session_summary(user_id, day)
        except MalformedSessionError as e:
            app.logger.warning("Malformed sessions for user %s on %s: %s", user_id, day, e)
            return jsonify({"success": False, "message": str(e)}), 422

        return jsonify(
            {
                "success": True,
                "date": day.isoformat(),
                "status": record.status,
                "notes": record.notes,
                "total_hours": format_duration(record.total_hours) if record.total_hours is not None else None,
                "summary": summary.to_dict() if summary else None,
            }
        ), 200
