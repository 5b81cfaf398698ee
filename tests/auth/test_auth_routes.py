from __future__ import annotations

import pytest

from src.worktime_portal.worktime_portal.core.constants import (
    MSG_LOGIN_DENIED,
    MSG_LOGIN_MISSING_FIELDS,
    MSG_TOKEN_INVALID,
    MSG_TOKEN_MISSING,
)


@pytest.mark.parametrize("body", [{}, {"username": "admin"}, {"password": "x"}, {"username": "", "password": ""}])
def test_login_requires_both_fields(client, body):
    resp = client.post("/api/auth/login", json=body)

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": MSG_LOGIN_MISSING_FIELDS}


@pytest.mark.parametrize("body", [["admin", "secret123"], "admin", 42])
def test_login_rejects_non_object_body(client, body):
    resp = client.post("/api/auth/login", json=body)

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": MSG_LOGIN_MISSING_FIELDS}


def test_login_bad_credentials(client):
    resp = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": MSG_LOGIN_DENIED}


def test_login_inactive_account(client):
    resp = client.post("/api/auth/login", json={"username": "disabled", "password": "secret123"})

    assert resp.status_code == 401
    assert resp.get_json()["message"] == MSG_LOGIN_DENIED


def test_login_success_returns_token_and_user(client, token_service):
    resp = client.post("/api/auth/login", json={"username": "admin", "password": "secret123"})

    data = resp.get_json()
    assert resp.status_code == 200
    assert data["success"] is True
    assert data["user"]["id"] == 1
    assert data["user"]["name"] == "Quản trị"
    assert data["user"]["role"] == "admin"
    assert data["user"]["lastLogin"] is not None
    assert token_service.verify(data["token"]).username == "admin"


def test_verify_without_header(client):
    resp = client.get("/api/auth/verify")

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": MSG_TOKEN_MISSING}


def test_verify_with_invalid_token(client):
    resp = client.get("/api/auth/verify", headers={"Authorization": "Bearer forged"})

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": MSG_TOKEN_INVALID}


def test_verify_returns_user(client, auth_headers):
    resp = client.get("/api/auth/verify", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.get_json() == {
        "success": True,
        "user": {
            "id": 1,
            "username": "admin",
            "email": "admin@example.com",
            "name": "Quản trị",
            "role": "admin",
        },
    }


def test_viewer_name_falls_back_to_username(client, token_service, users):
    token = token_service.issue(users.get_by_id(2))

    resp = client.get("/api/auth/verify", headers={"Authorization": f"Bearer {token}"})

    assert resp.get_json()["user"]["name"] == "viewer"
