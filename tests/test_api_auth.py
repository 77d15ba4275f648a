import pytest

from venue_menu.services import auth_service


def test_login_returns_tokens(client):
    r = client.post("/api/v1/auth/login", data={"username": "admin", "password": "Admin1234!"})
    assert r.status_code == 200
    body = r.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"] and body["refresh_token"]


def test_login_with_wrong_password(client):
    r = client.post("/api/v1/auth/login", data={"username": "admin", "password": "nope"})
    assert r.status_code == 401


def test_session_reports_admin_role(client, admin_headers):
    r = client.get("/api/v1/auth/session", headers=admin_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["is_admin"] is True
    assert body["user"]["role"] == "admin"


def test_sign_up_creates_member(client, member_headers):
    r = client.get("/api/v1/auth/session", headers=member_headers)
    assert r.status_code == 200
    assert r.json()["is_admin"] is False


def test_sign_up_rejects_duplicate(client, member_headers):
    r = client.post(
        "/api/v1/auth/sign-up",
        json={"email": "member@example.com", "username": "member", "password": "Member1234!"},
    )
    assert r.status_code == 409


def test_sign_up_rejects_weak_password(client):
    r = client.post(
        "/api/v1/auth/sign-up",
        json={"email": "weak@example.com", "username": "weak", "password": "password"},
    )
    assert r.status_code == 422


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/v1/admin/food"),
        ("get", "/api/v1/admin/alcohol"),
        ("get", "/api/v1/admin/promotions"),
        ("get", "/api/v1/admin/settings"),
        ("get", "/api/v1/admin/categories"),
        ("get", "/api/v1/admin/qr.svg"),
    ],
)
def test_admin_routes_require_a_session(client, method, path):
    r = getattr(client, method)(path)
    assert r.status_code == 401


def test_admin_routes_reject_members(client, member_headers):
    r = client.get("/api/v1/admin/food", headers=member_headers)
    assert r.status_code == 403
    assert r.json()["detail"] == "You don't have admin privileges"


def test_invalid_token_is_rejected(client):
    r = client.get("/api/v1/admin/food", headers={"Authorization": "Bearer not-a-token"})
    assert r.status_code == 401


def test_refresh_and_logout(client, admin_headers):
    tokens = client.post(
        "/api/v1/auth/login", data={"username": "admin", "password": "Admin1234!"}
    ).json()

    r = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert r.status_code == 200
    assert r.json()["access_token"]

    r = client.post(
        "/api/v1/auth/logout",
        json={"refresh_token": tokens["refresh_token"]},
        headers=admin_headers,
    )
    assert r.status_code == 204

    r = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert r.status_code == 401


def test_password_reset_flow(client, monkeypatch):
    sent = []
    monkeypatch.setattr(auth_service, "send_password_reset_email", lambda to, link: sent.append((to, link)))
    account = {"email": "reset@example.com", "username": "resetme", "password": "Before1234!"}
    assert client.post("/api/v1/auth/sign-up", json=account).status_code in (201, 409)

    r = client.post("/api/v1/auth/password-reset", json={"email": "reset@example.com"})
    assert r.status_code == 202
    assert len(sent) == 1
    token = sent[0][1].split("token=", 1)[1]

    r = client.post(
        "/api/v1/auth/password-reset/confirm",
        json={"token": token, "new_password": "After1234!"},
    )
    assert r.status_code == 200

    r = client.post("/api/v1/auth/login", data={"username": "resetme", "password": "After1234!"})
    assert r.status_code == 200

    # the token is spent once the password changed
    r = client.post(
        "/api/v1/auth/password-reset/confirm",
        json={"token": token, "new_password": "Again1234!"},
    )
    assert r.status_code == 400


def test_password_reset_for_unknown_email_is_silent(client, monkeypatch):
    sent = []
    monkeypatch.setattr(auth_service, "send_password_reset_email", lambda to, link: sent.append(to))
    r = client.post("/api/v1/auth/password-reset", json={"email": "nobody@example.com"})
    assert r.status_code == 202
    assert sent == []
