from __future__ import annotations

import os

from flask import Flask, jsonify

from ..common.datetime_utils import now_utc, to_iso_utc
from ..common.http import json_error
from ..container import Container
from ..core.constants import MSG_METHOD_NOT_ALLOWED, MSG_NOT_FOUND, MSG_SERVER_ERROR


def get_build_id() -> str:
    """Deployed build identifier used by clients to detect a new release."""

    version = os.getenv("APP_VERSION")
    if version:
        return version
    commit_sha = os.getenv("GIT_COMMIT_SHA")
    if commit_sha:
        return commit_sha[:12]
    return to_iso_utc(now_utc())


def register(app: Flask, container: Container) -> None:
    @app.route("/api/version", methods=["GET"], endpoint="api_version")
    def version():
        return jsonify({"version": get_build_id()})

    @app.errorhandler(404)
    def not_found(_e):
        return json_error(MSG_NOT_FOUND, 404)

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return json_error(MSG_METHOD_NOT_ALLOWED, 405)

    @app.errorhandler(500)
    def server_error(_e):
        return json_error(MSG_SERVER_ERROR, 500)
