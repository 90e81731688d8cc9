from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from marketplace.domain.users.entities import NewUser
from marketplace.shared.errors.validation_types import ValidationErrorType

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
USERNAME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9_]*$")
SPECIAL_RE = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")

PASSWORD_RULES_MESSAGE = (
    "Password must be at least 8 characters and contain uppercase, lowercase, "
    "number, and special character"
)
USERNAME_RULES_MESSAGE = (
    "Username must be 3-20 characters, start with a letter, "
    "and contain only letters, numbers, and underscores"
)


def _require(value: str | None, label: str) -> str:
    if value is None or not value.strip():
        raise PydanticCustomError(ValidationErrorType.MISSING, f"{label} is required", {})
    return value


def _check_email(value: str | None) -> str:
    value = _require(value, "Email").strip()
    if not EMAIL_RE.fullmatch(value):
        raise PydanticCustomError(ValidationErrorType.EMAIL_INVALID, "Invalid email format", {})
    return value


def _password_failure(value: str) -> ValidationErrorType | None:
    if len(value) < 8:
        return ValidationErrorType.PASSWORD_TOO_SHORT
    if not re.search(r"[A-Z]", value):
        return ValidationErrorType.PASSWORD_NO_UPPERCASE
    if not re.search(r"[a-z]", value):
        return ValidationErrorType.PASSWORD_NO_LOWERCASE
    if not re.search(r"[0-9]", value):
        return ValidationErrorType.PASSWORD_NO_DIGIT
    if not SPECIAL_RE.search(value):
        return ValidationErrorType.PASSWORD_NO_SPECIAL
    return None


class SignupRequestDTO(BaseModel):
    model_config = ConfigDict(validate_by_name=True, validate_by_alias=True, str_max_length=256)

    email: str = Field(default="", validate_default=True)
    password: str = Field(default="", validate_default=True)
    confirm_password: str = Field(default="", alias="confirmPassword", validate_default=True)
    name: str = Field(default="", validate_default=True)
    username: str = Field(default="", validate_default=True)
    phone: str | None = None
    country: str | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError(ValidationErrorType.MISSING, "Password is required", {})
        failure = _password_failure(value)
        if failure is not None:
            raise PydanticCustomError(failure, PASSWORD_RULES_MESSAGE, {"min_length": 8})
        return value

    @field_validator("confirm_password")
    @classmethod
    def validate_passwords_match(cls, value: str, info: ValidationInfo) -> str:
        # only comparable once the password itself passed validation
        password = info.data.get("password")
        if password is not None and value != password:
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_MISMATCH, "Passwords do not match", {}
            )
        return value

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = _require(value, "Name").strip()
        if len(value) < 2:
            raise PydanticCustomError(
                ValidationErrorType.NAME_TOO_SHORT,
                "Name must be at least 2 characters",
                {"min_length": 2},
            )
        return value

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        value = _require(value, "Username")
        if not 3 <= len(value) <= 20 or not USERNAME_RE.fullmatch(value):
            raise PydanticCustomError(
                ValidationErrorType.USERNAME_INVALID,
                USERNAME_RULES_MESSAGE,
                {"pattern": USERNAME_RE.pattern},
            )
        return value

    @field_validator("phone", "country")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    def to_new_user(self) -> NewUser:
        return NewUser(
            email=self.email,
            password=self.password,
            name=self.name,
            username=self.username,
            phone=self.phone,
            country=self.country,
        )


class LoginRequestDTO(BaseModel):
    email: str = Field(default="", validate_default=True)
    password: str = Field(default="", max_length=256, validate_default=True)  # no strength check on login

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError(ValidationErrorType.MISSING, "Password is required", {})
        return value
