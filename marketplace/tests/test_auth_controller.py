from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from marketplace.application.use_cases.users.login_user import LoginUserUseCase
from marketplace.application.use_cases.users.register_user import RegisterUserUseCase
from marketplace.domain.users.entities import NewUser, Session, User
from marketplace.domain.users.exceptions import (
    EmailNotVerifiedError,
    InvalidCredentialsError,
    InvalidVerificationTokenError,
    UserAlreadyExistsError,
)
from marketplace.infrastructure.auth.rate_limit import RateLimiter
from marketplace.interfaces.http.controllers.auth_controller import AuthController
from marketplace.interfaces.http.session_cookie import CookieSettings
from marketplace.shared.middleware.error_handler import configure_error_handling
from marketplace.shared.middleware.rate_limit import install_rate_limiter

VALID_SIGNUP = {
    "email": "ann@example.com",
    "password": "Passw0rd!",
    "confirmPassword": "Passw0rd!",
    "name": "Ann",
    "username": "ann_1",
}


class FakeClock:
    def __init__(self) -> None:
        self.now = 1_700_000_000_000

    def __call__(self) -> int:
        return self.now


def make_user(**overrides) -> User:
    now = datetime.now(UTC)
    fields = dict(
        id="user-1",
        email="ann@example.com",
        password_hash="hash",
        name="Ann",
        username="ann_1",
        created_at=now,
        updated_at=now,
        email_verified=now,
    )
    fields.update(overrides)
    return User(**fields)


def make_controller(**use_cases) -> AuthController:
    defaults = dict(
        register_use_case=MagicMock(),
        login_use_case=MagicMock(),
        logout_use_case=MagicMock(),
        verify_use_case=MagicMock(),
        session_use_case=MagicMock(),
        cookie_settings=CookieSettings(secure=False, samesite="Lax"),
    )
    defaults.update(use_cases)
    return AuthController(**defaults)


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def test_signup_returns_created(flask_app: Flask) -> None:
    received: dict[str, NewUser] = {}

    class StubRegister:
        def execute(self, new_user: NewUser) -> tuple[User, str]:
            received["new_user"] = new_user
            return make_user(email_verified=None), "plain-token"

    controller = make_controller(register_use_case=cast(RegisterUserUseCase, StubRegister()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/auth/signup", json=VALID_SIGNUP)

    assert response.status_code == 201
    assert response.get_json() == {
        "message": "User created successfully. Please check your email to verify your account.",
        "userId": "user-1",
    }
    assert received["new_user"].username == "ann_1"
    assert "Set-Cookie" not in response.headers


def test_signup_validation_errors_are_field_tagged(flask_app: Flask) -> None:
    register = MagicMock()
    flask_app.register_blueprint(make_controller(register_use_case=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/signup",
            json={
                "email": "not-an-email",
                "password": "short",
                "confirmPassword": "short",
                "name": "A",
                "username": "1abc",
            },
        )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    fields = {entry["field"]: entry for entry in payload["errors"]}
    assert set(fields) == {"email", "password", "name", "username"}
    assert fields["email"]["message"] == "Invalid email format"
    assert fields["password"]["type"] == "password_too_short"
    register.execute.assert_not_called()


def test_signup_password_mismatch(flask_app: Flask) -> None:
    flask_app.register_blueprint(make_controller().as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/signup", json={**VALID_SIGNUP, "confirmPassword": "Passw0rd?"}
        )

    assert response.status_code == 400
    [entry] = response.get_json()["errors"]
    assert entry["field"] == "confirmPassword"
    assert entry["message"] == "Passwords do not match"


def test_signup_missing_fields(flask_app: Flask) -> None:
    flask_app.register_blueprint(make_controller().as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/auth/signup", json={})

    messages = {e["field"]: e["message"] for e in response.get_json()["errors"]}
    assert response.status_code == 400
    assert messages == {
        "email": "Email is required",
        "password": "Password is required",
        "name": "Name is required",
        "username": "Username is required",
    }


def test_signup_duplicate_returns_conflict(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = UserAlreadyExistsError("username")
    flask_app.register_blueprint(make_controller(register_use_case=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/auth/signup", json=VALID_SIGNUP)

    assert response.status_code == 409
    assert response.get_json()["errors"] == [
        {"field": "username", "message": "A user with this username already exists"}
    ]


def test_login_sets_session_cookie(flask_app: Flask) -> None:
    now = datetime.now(UTC)
    session = Session(
        id="s1", user_id="user-1", token="tok123", expires_at=now + timedelta(days=7), created_at=now
    )

    class StubLogin:
        def execute(self, email: str, password: str) -> tuple[User, Session]:
            assert (email, password) == ("ann@example.com", "Passw0rd!")
            return make_user(), session

    controller = make_controller(login_use_case=cast(LoginUserUseCase, StubLogin()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/login", json={"email": "ann@example.com", "password": "Passw0rd!"}
        )

    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Login successful"
    assert body["user"]["email"] == "ann@example.com"
    assert "passwordHash" not in body["user"]

    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith("session_token=tok123")
    assert "HttpOnly" in cookie
    assert "SameSite=Lax" in cookie
    assert "Path=/" in cookie
    assert "Expires=" in cookie
    assert "Secure" not in cookie


@pytest.mark.parametrize(
    ("error", "status", "field"),
    [
        (InvalidCredentialsError("email"), 401, "email"),
        (InvalidCredentialsError("password"), 401, "password"),
        (EmailNotVerifiedError(), 403, "email"),
    ],
)
def test_login_failures(flask_app: Flask, error: Exception, status: int, field: str) -> None:
    login = MagicMock()
    login.execute.side_effect = error
    flask_app.register_blueprint(make_controller(login_use_case=login).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/login", json={"email": "ann@example.com", "password": "whatever"}
        )

    assert response.status_code == status
    assert response.get_json()["errors"][0]["field"] == field
    assert "Set-Cookie" not in response.headers


def test_login_without_password_is_rejected(flask_app: Flask) -> None:
    flask_app.register_blueprint(make_controller().as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"email": "ann@example.com"})

    assert response.status_code == 400
    assert response.get_json()["errors"][0]["message"] == "Password is required"


def test_logout_clears_cookie(flask_app: Flask) -> None:
    logout = MagicMock()
    logout.execute.return_value = True
    flask_app.register_blueprint(make_controller(logout_use_case=logout).as_blueprint())

    with flask_app.test_client() as client:
        client.set_cookie("session_token", "tok123")
        response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.get_json() == {"message": "Logged out successfully"}
    logout.execute.assert_called_once_with("tok123")
    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith("session_token=;")
    assert "Max-Age=0" in cookie


def test_verify_requires_token(flask_app: Flask) -> None:
    flask_app.register_blueprint(make_controller().as_blueprint())

    with flask_app.test_client() as client:
        response = client.get("/api/auth/verify")

    assert response.status_code == 400
    assert response.get_json()["errors"] == [
        {"field": "token", "message": "Verification token is required"}
    ]


def test_verify_invalid_token(flask_app: Flask) -> None:
    verify = MagicMock()
    verify.execute.side_effect = InvalidVerificationTokenError()
    flask_app.register_blueprint(make_controller(verify_use_case=verify).as_blueprint())

    with flask_app.test_client() as client:
        response = client.get("/api/auth/verify?token=abc")

    assert response.status_code == 400
    assert response.get_json()["errors"][0]["message"] == "Invalid or expired verification token"


def test_verify_success(flask_app: Flask) -> None:
    verify = MagicMock()
    verify.execute.return_value = make_user()
    flask_app.register_blueprint(make_controller(verify_use_case=verify).as_blueprint())

    with flask_app.test_client() as client:
        response = client.get("/api/auth/verify?token=abc")

    assert response.status_code == 200
    assert response.get_json() == {
        "message": "Email verified successfully. You can now log in.",
        "success": True,
    }
    verify.execute.assert_called_once_with("abc")


def test_session_endpoint_requires_cookie(flask_app: Flask) -> None:
    session_use_case = MagicMock()
    session_use_case.execute.return_value = None
    flask_app.register_blueprint(
        make_controller(session_use_case=session_use_case).as_blueprint()
    )

    with flask_app.test_client() as client:
        response = client.get("/api/auth/session")

    assert response.status_code == 401
    assert response.get_json()["error"] == "unauthorized"


def test_login_is_rate_limited(flask_app: Flask) -> None:
    clock = FakeClock()
    install_rate_limiter(flask_app, RateLimiter(clock=clock))
    flask_app.register_blueprint(make_controller().as_blueprint())

    with flask_app.test_client() as client:
        statuses = [
            client.post("/api/auth/login", json={}, headers={"X-Forwarded-For": "9.9.9.9"}).status_code
            for _ in range(5)
        ]
        blocked = client.post("/api/auth/login", json={}, headers={"X-Forwarded-For": "9.9.9.9"})
        other = client.post("/api/auth/login", json={}, headers={"X-Forwarded-For": "8.8.8.8"})

        clock.now += 10 * 60 * 1000
        later = client.post("/api/auth/login", json={}, headers={"X-Forwarded-For": "9.9.9.9"})

    assert statuses == [400] * 5
    assert blocked.status_code == 429
    assert blocked.get_json()["errors"] == [
        {
            "field": "general",
            "message": "Too many login attempts. Please try again in 15 minutes.",
        }
    ]
    assert other.status_code == 400
    assert later.get_json()["errors"][0]["message"].endswith("in 5 minutes.")


def test_rate_limit_can_be_disabled(flask_app: Flask) -> None:
    install_rate_limiter(flask_app, RateLimiter(clock=FakeClock()), enabled=False)
    flask_app.register_blueprint(make_controller().as_blueprint())

    with flask_app.test_client() as client:
        statuses = {client.post("/api/auth/signup", json={}).status_code for _ in range(5)}

    assert statuses == {400}
