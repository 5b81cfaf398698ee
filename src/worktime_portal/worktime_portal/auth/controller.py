from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import internal_error, json_error
from ..container import Container
from ..core.constants import MSG_LOGIN_MISSING_FIELDS, MSG_LOGIN_OK, MSG_TOKEN_MISSING
from ..core.exceptions import AuthenticationError
from .guard import bearer_token


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="api_auth_login")
    def login():
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return json_error(MSG_LOGIN_MISSING_FIELDS, 400)
        username = data.get("username")
        password = data.get("password")

        if not isinstance(username, str) or not isinstance(password, str) or not username.strip() or not password:
            return json_error(MSG_LOGIN_MISSING_FIELDS, 400)

        try:
            token, user = container.auth_service.login(username, password)
        except AuthenticationError as e:
            return json_error(str(e), 401)
        except Exception as e:
            return internal_error(e, message="Lỗi server (kiểm tra kết nối CSDL và cấu hình DB_*)")

        return jsonify(
            {
                "success": True,
                "message": MSG_LOGIN_OK,
                "token": token,
                "user": user.to_public_dict(),
            }
        )

    @app.route("/api/auth/verify", methods=["GET"], endpoint="api_auth_verify")
    def verify():
        token = bearer_token()
        if not token:
            return json_error(MSG_TOKEN_MISSING, 401)

        try:
            user = container.auth_service.resolve_session(token)
        except AuthenticationError as e:
            return json_error(str(e), 401)
        except Exception as e:
            return internal_error(e)

        return jsonify({"success": True, "user": user.to_public_dict(include_last_login=False)})
