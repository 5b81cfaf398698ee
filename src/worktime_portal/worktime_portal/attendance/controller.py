from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.guard import bearer_required
from ..common.http import internal_error, json_error, upstream_error
from ..container import Container
from ..core.constants import MSG_ATTENDANCE_UPDATE_ERROR, MSG_INVALID_BODY
from ..core.exceptions import UpstreamError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/admin/<attendance_id>", methods=["PUT"], endpoint="api_attendance_admin_update")
    @bearer_required
    def update_attendance(attendance_id: str):
        body = request.get_json(silent=True)
        if body is None:
            body = {}
        if not isinstance(body, dict):
            return json_error(MSG_INVALID_BODY, 400)

        try:
            result = container.attendance_edit_service.update_record(
                attendance_id, body, authorization=g.authorization
            )
        except ValidationError as e:
            return json_error(str(e), 400)
        except UpstreamError as e:
            return upstream_error(e)
        except Exception as e:
            return internal_error(e, message=MSG_ATTENDANCE_UPDATE_ERROR)
        return jsonify(result)
