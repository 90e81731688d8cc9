from __future__ import annotations

from pathlib import Path
from urllib.parse import parse_qs, urlparse

import pytest

from marketplace.app import create_app
from marketplace.infrastructure.container import Container
from marketplace.infrastructure.mail import RecordingMailer
from marketplace.shared.config import AppConfig, StorageConfig

SIGNUP = {
    "email": "Ann@Example.com",
    "password": "Passw0rd!",
    "confirmPassword": "Passw0rd!",
    "name": "Ann",
    "username": "ann_1",
}


@pytest.fixture(params=["json", "sqlalchemy"])
def container(request, app_config: AppConfig, tmp_path: Path) -> Container:
    if request.param == "sqlalchemy":
        app_config.storage = StorageConfig(
            backend="sqlalchemy", database_url=f"sqlite:///{tmp_path / 'marketplace.db'}"
        )
    container = Container(app_config)
    container.mailer = RecordingMailer()
    yield container
    if container.uses_sql:
        container.database.dispose()


@pytest.fixture()
def client(container: Container):
    app = create_app(container=container, start_background_tasks=False)
    with app.test_client() as test_client:
        yield test_client


def _token_from(url: str) -> str:
    return parse_qs(urlparse(url).query)["token"][0]


def test_full_signup_verify_login_flow(client, container: Container) -> None:
    signup = client.post("/api/auth/signup", json=SIGNUP)
    assert signup.status_code == 201
    user_id = signup.get_json()["userId"]

    [(email, url)] = container.mailer.sent
    assert email == "Ann@Example.com"
    assert url.startswith("http://localhost:3000/verify-email?token=")

    credentials = {"email": "ann@example.com", "password": "Passw0rd!"}
    unverified = client.post("/api/auth/login", json=credentials)
    assert unverified.status_code == 403

    verified = client.get(f"/api/auth/verify?token={_token_from(url)}")
    assert verified.status_code == 200
    assert verified.get_json()["success"] is True

    reused = client.get(f"/api/auth/verify?token={_token_from(url)}")
    assert reused.status_code == 400

    login = client.post("/api/auth/login", json=credentials)
    assert login.status_code == 200
    assert login.get_json()["user"]["id"] == user_id
    assert "HttpOnly" in login.headers["Set-Cookie"]

    session = client.get("/api/auth/session")
    assert session.status_code == 200
    assert session.get_json()["user"]["username"] == "ann_1"
    assert session.get_json()["user"]["emailVerified"] is not None

    product_id = client.get("/api/products").get_json()["items"][0]["id"]
    assert client.get(f"/api/products/{product_id}").status_code == 200

    logout = client.post("/api/auth/logout")
    assert logout.status_code == 200
    assert client.get("/api/auth/session").status_code == 401
    assert client.get(f"/api/products/{product_id}").status_code == 401


def test_wrong_password_is_unauthorized(client) -> None:
    client.post("/api/auth/signup", json=SIGNUP)

    response = client.post(
        "/api/auth/login", json={"email": "ann@example.com", "password": "Wrong0rd!"}
    )

    assert response.status_code == 401
    assert response.get_json()["errors"][0]["message"] == "Invalid email or password"


def test_duplicate_signup_is_case_insensitive(client) -> None:
    assert client.post("/api/auth/signup", json=SIGNUP).status_code == 201

    response = client.post(
        "/api/auth/signup", json={**SIGNUP, "email": "ANN@example.com", "username": "ann_2"}
    )

    assert response.status_code == 409
    assert response.get_json()["errors"][0]["field"] == "email"


def test_signup_is_rate_limited_per_client(client) -> None:
    headers = {"X-Forwarded-For": "10.0.0.1"}
    for i in range(3):
        payload = {**SIGNUP, "email": f"user{i}@example.com", "username": f"user_{i}"}
        assert client.post("/api/auth/signup", json=payload, headers=headers).status_code == 201

    blocked = client.post("/api/auth/signup", json=SIGNUP, headers=headers)

    assert blocked.status_code == 429
    assert blocked.get_json()["errors"][0]["message"] == (
        "Too many signup attempts. Please try again in 60 minutes."
    )


def test_health_reports_storage(client, container: Container) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json() == {
        "ok": True,
        "backend": container.config.storage.backend,
        "storage": "ok",
    }


def test_security_headers_present(client) -> None:
    response = client.get("/api/categories")

    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "Strict-Transport-Security" not in response.headers


def test_username_with_trailing_newline_cannot_shadow_existing_user(
    client, container: Container
) -> None:
    first = {**SIGNUP, "username": "alice"}
    second = {**SIGNUP, "email": "other@example.com", "username": "alice\n"}

    assert client.post("/api/auth/signup", json=first).status_code == 201
    response = client.post("/api/auth/signup", json=second)

    assert response.status_code == 400
    assert response.get_json()["errors"][0]["field"] == "username"
    assert container.user_repository.find_by_email("other@example.com") is None
