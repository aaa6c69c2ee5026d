from __future__ import annotations

import asyncio

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/calendar/<int:user_id>", methods=["GET"], endpoint="api_month_calendar")
    def api_month_calendar(user_id: int):
        year = request.args.get("year", type=int)
        month = request.args.get("month", type=int)
        try:
            calendar = asyncio.run(container.calendar_builder.build(user_id, year, month))
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400

        return jsonify({"success": not calendar.errors, "calendar": calendar.to_dict()}), 200

    @app.route("/api/holidays", methods=["GET"], endpoint="api_holidays")
    def api_holidays():
        holidays = container.holidays_repo.list_all()
        return jsonify(
            {
                "success": True,
                "holidays": [{"date": h.date.isoformat(), "title": h.title} for h in holidays],
            }
        ), 200
