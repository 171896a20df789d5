from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_for_store
from ..common.http import json_body
from ..container import Container
from .model import AttendanceRecord


def _record_payload(record: AttendanceRecord) -> dict:
    return {
        "id": record.record_id,
        "personName": record.person_name,
        "clockIn": format_for_store(record.clock_in),
        "clockOut": format_for_store(record.clock_out) if record.clock_out else None,
        "totalHours": record.total_hours,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/clock-in", methods=["POST"], endpoint="api_clock_in")
    def api_clock_in():
        data = json_body()
        record = container.attendance_service.clock_in(data.get("personName"), data.get("timestamp"))
        return jsonify(
            {
                "success": True,
                "message": "Entrada registrada correctamente",
                "data": _record_payload(record),
            }
        )

    @app.route("/api/clock-out", methods=["POST"], endpoint="api_clock_out")
    def api_clock_out():
        data = json_body()
        record = container.attendance_service.clock_out(data.get("personName"), data.get("timestamp"))
        return jsonify(
            {
                "success": True,
                "message": "Salida registrada correctamente",
                "data": _record_payload(record),
            }
        )

    @app.route("/api/clock-out/preview", methods=["GET"], endpoint="api_clock_out_preview")
    def api_clock_out_preview():
        preview = container.attendance_service.preview_clock_out(
            request.args.get("personName", ""),
            request.args.get("timestamp") or None,
        )
        return jsonify(
            {
                "personName": preview.person_name,
                "clockIn": format_for_store(preview.clock_in),
                "hours": round(preview.hours, 2),
                "isLong": preview.is_long,
            }
        )

    @app.route("/api/historical-entry", methods=["POST"], endpoint="api_historical_entry")
    def api_historical_entry():
        data = json_body()
        record = container.attendance_service.add_historical_entry(
            data.get("personName"),
            data.get("clockIn"),
            data.get("clockOut"),
        )
        return jsonify(
            {
                "success": True,
                "message": "Entrada histórica agregada correctamente",
                "data": _record_payload(record),
            }
        )

    @app.route("/api/time-entries", methods=["GET"], endpoint="api_time_entries")
    def api_time_entries():
        history = container.attendance_service.history(request.args.get("personName"))
        return jsonify(
            {
                "entries": [
                    {
                        "id": e.id,
                        "personName": e.person_name,
                        "clockIn": e.clock_in,
                        "clockOut": e.clock_out,
                        "totalHours": e.total_hours,
                        "date": e.date,
                    }
                    for e in history.entries
                ],
                "totalHours": history.total_hours,
                "count": history.count,
            }
        )
