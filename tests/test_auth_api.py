from datetime import timedelta

from assetflow.core.security import create_access_token

from conftest import API, register


def test_register_returns_token_and_user(client):
    body = register(client, "new.officer@example.com", name="New Officer")

    assert body["success"] is True
    assert body["token"]
    assert body["user"]["email"] == "new.officer@example.com"
    assert body["user"]["role"] == "officer"
    assert "passwordHash" not in body["user"]


def test_duplicate_registration_is_409(client):
    register(client, "dup@example.com")
    res = client.post(
        f"{API}/auth/register",
        json={"name": "Dup", "email": "DUP@example.com", "password": "secret123"},
    )
    assert res.status_code == 409


def test_short_password_is_400(client):
    res = client.post(
        f"{API}/auth/register",
        json={"name": "Shorty", "email": "short@example.com", "password": "123"},
    )
    assert res.status_code == 400
    assert "password" in res.json()["error"]


def test_login_and_me(client):
    register(client, "login@example.com", name="Login User", password="pa55word")

    res = client.post(
        f"{API}/auth/login",
        json={"email": "login@example.com", "password": "pa55word"},
    )
    assert res.status_code == 200
    token = res.json()["token"]

    res = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 200
    assert res.json()["user"]["name"] == "Login User"


def test_bad_credentials_are_401(client):
    register(client, "someone@example.com", password="right-password")

    res = client.post(
        f"{API}/auth/login",
        json={"email": "someone@example.com", "password": "wrong-password"},
    )
    assert res.status_code == 401
    assert res.json()["error"] == "Invalid email or password"


def test_me_without_token_is_401(client):
    assert client.get(f"{API}/auth/me").status_code == 401


def test_health(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"
    assert res.json()["environment"] == "development"


def test_expired_token_is_401(client):
    body = register(client, "expired@example.com")
    token = create_access_token(
        str(body["user"]["id"]),
        "officer",
        expires_delta=timedelta(seconds=-1),
    )

    res = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401
    assert res.json()["error"] == "Token has expired"
