# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from marketplace.application.use_cases.users.get_session import GetCurrentSessionUseCase
from marketplace.application.use_cases.users.login_user import LoginUserUseCase
from marketplace.application.use_cases.users.logout_user import LogoutUserUseCase
from marketplace.application.use_cases.users.register_user import RegisterUserUseCase
from marketplace.application.use_cases.users.verify_email import VerifyEmailUseCase
from marketplace.domain.users.exceptions import NotAuthenticatedError
from marketplace.interfaces.http.dto.auth import LoginRequestDTO, SignupRequestDTO
from marketplace.interfaces.http.session_cookie import (
    CookieSettings,
    clear_session_cookie,
    read_session_token,
    set_session_cookie,
)
from marketplace.shared.errors.base import ValidationError as AppValidationError
from marketplace.shared.errors.base import field_error
from marketplace.shared.errors.validation import raise_validation_error
from marketplace.shared.logging import logger
from marketplace.shared.middleware.rate_limit import rate_limit


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        verify_use_case: VerifyEmailUseCase,
        session_use_case: GetCurrentSessionUseCase,
        cookie_settings: CookieSettings,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._verify_use_case = verify_use_case
        self._session_use_case = session_use_case
        self._cookie_settings = cookie_settings

    @rate_limit("signup")
    def signup(self) -> tuple[Response, int]:
        try:
            dto = SignupRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, _ = self._register_use_case.execute(dto.to_new_user())
        logger.info(f"auth.signup: ok user_id={user.id}")
        payload = {
            "message": "User created successfully. Please check your email to verify your account.",
            "userId": user.id,
        }
        return jsonify(payload), 201

    @rate_limit("login")
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, session = self._login_use_case.execute(dto.email, dto.password)

        response = jsonify({"message": "Login successful", "user": user.public_dict()})
        set_session_cookie(response, session, self._cookie_settings)
        logger.info(f"auth.login: ok user_id={user.id}")
        return response, 200

    def logout(self) -> tuple[Response, int]:
        removed = self._logout_use_case.execute(read_session_token(request))
        response = jsonify({"message": "Logged out successfully"})
        clear_session_cookie(response, self._cookie_settings)
        logger.info(f"auth.logout: ok session_removed={removed}")
        return response, 200

    @rate_limit("verify")
    def verify(self) -> tuple[Response, int]:
        token = (request.args.get("token") or "").strip()
        if not token:
            raise AppValidationError(
                errors=[field_error("token", "Verification token is required")]
            )

        user = self._verify_use_case.execute(token)
        logger.info(f"auth.verify: ok user_id={user.id}")
        payload = {"message": "Email verified successfully. You can now log in.", "success": True}
        return jsonify(payload), 200

    def session(self) -> tuple[Response, int]:
        data = self._session_use_case.execute(read_session_token(request))
        if data is None:
            raise NotAuthenticatedError()
        return jsonify(data.to_dict()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/signup", view_func=self.signup, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/verify", view_func=self.verify, methods=["GET"])
        bp.add_url_rule("/session", view_func=self.session, methods=["GET"])
        return bp
