from datetime import datetime, timezone

import jwt
import pytest

from memo_board.core.config import settings
from memo_board.core.exceptions import DuplicateEmail, InvalidCredentials, NotFound
from memo_board.services import auth_service, token_service

API = settings.api_prefix_normalized


def _register(client, email="ana@mail.com", password="s3cret", username="ana"):
    return client.post(f"{API}/auth/register", json={"username": username, "email": email, "password": password})


def test_register_returns_user_without_password(client, db):
    res = _register(client)
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "User registered successfully"
    assert body["user"]["email"] == "ana@mail.com"
    assert body["user"]["username"] == "ana"
    assert "password" not in body["user"] and "password_hash" not in body["user"]

    stored = db["user"].find_one({"email": "ana@mail.com"})
    assert stored["password_hash"] != "s3cret"
    assert auth_service.verify_password("s3cret", stored["password_hash"])


def test_register_duplicate_email_leaves_store_unchanged(client, db):
    assert _register(client).status_code == 201
    before = list(db["user"].find({}))

    res = _register(client, email="ANA@mail.com", username="other")
    assert res.status_code == 400
    assert res.json() == {"error": "User already exists"}
    assert list(db["user"].find({})) == before


def test_register_rejects_invalid_payload(client):
    res = client.post(f"{API}/auth/register", json={"username": "x", "email": "not-an-email", "password": "p"})
    assert res.status_code == 422
    assert res.json()["message"] == "Validation error"


def test_login_success_issues_seven_day_token(client):
    user_id = _register(client).json()["user"]["id"]

    res = client.post(f"{API}/auth/login", json={"email": "ana@mail.com", "password": "s3cret"})
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Login successful"

    claims = jwt.decode(body["token"], settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    assert claims["sub"] == user_id
    assert set(claims) == {"sub", "iat", "exp"}
    assert claims["exp"] - claims["iat"] == settings.token_expire_days * 24 * 3600


def test_login_unknown_email(client):
    res = client.post(f"{API}/auth/login", json={"email": "nobody@mail.com", "password": "x"})
    assert res.status_code == 404
    assert res.json() == {"error": "User not found"}


def test_login_wrong_password_issues_no_token(client):
    _register(client)
    res = client.post(f"{API}/auth/login", json={"email": "ana@mail.com", "password": "wrong"})
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid credentials"}
    assert "token" not in res.json()


def test_login_rate_limited_per_ip(client):
    _register(client)
    payload = {"email": "ana@mail.com", "password": "wrong"}
    for _ in range(settings.login_rate_per_min):
        assert client.post(f"{API}/auth/login", json=payload).status_code == 401
    res = client.post(f"{API}/auth/login", json=payload)
    assert res.status_code == 429
    assert "error" in res.json()


def test_me_with_bearer_token(client):
    _register(client)
    token = client.post(f"{API}/auth/login", json={"email": "ana@mail.com", "password": "s3cret"}).json()["token"]

    res = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 200
    assert res.json()["email"] == "ana@mail.com"


def test_me_rejects_missing_and_expired_tokens(client):
    assert client.get(f"{API}/auth/me").status_code == 401

    expired = jwt.encode(
        {"sub": "000000000000000000000000", "iat": 0, "exp": int(datetime(2000, 1, 1, tzinfo=timezone.utc).timestamp())},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    res = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert res.status_code == 401
    assert res.json() == {"error": "Token expired"}


def test_service_errors(db):
    auth_service.register_user(username="bo", email="bo@mail.com", password="pw")
    with pytest.raises(DuplicateEmail):
        auth_service.register_user(username="bo2", email="bo@mail.com", password="pw")
    with pytest.raises(NotFound):
        auth_service.login_local(email="missing@mail.com", password="pw")
    with pytest.raises(InvalidCredentials):
        auth_service.login_local(email="bo@mail.com", password="nope")


def test_health(client):
    assert client.get(f"{API}/ping").json() == {"message": "pong"}
    res = client.get(f"{API}/health")
    assert res.json() == {"ok": True, "mongo": True}
    assert res.headers["X-Request-Id"]


def test_tokens_refused_without_configured_secret(monkeypatch):
    token = token_service.create_access_token(user_id="abc")
    monkeypatch.setattr(settings, "jwt_secret", None)

    with pytest.raises(RuntimeError):
        token_service.create_access_token(user_id="abc")
    with pytest.raises(RuntimeError):
        token_service.verify_access_token(token)


def test_login_malformed_email_is_not_found(client):
    res = client.post(f"{API}/auth/login", json={"email": "not-an-email", "password": "x"})
    assert res.status_code == 404
    assert res.json() == {"error": "User not found"}


def test_login_email_is_case_insensitive(client):
    _register(client)
    res = client.post(f"{API}/auth/login", json={"email": " ANA@Mail.com ", "password": "s3cret"})
    assert res.status_code == 200
