from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/people", methods=["GET"], endpoint="api_people")
    def api_people():
        people = container.caregiver_service.list_people()
        return jsonify(
            [
                {"name": p.name, "isActive": p.is_active, "lastClockIn": p.last_clock_in}
                for p in people
            ]
        )
