from .base import (
    AppError,
    DomainError,
    InfrastructureError,
    RateLimitedError,
    ValidationError,
    field_error,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "InfrastructureError",
    "RateLimitedError",
    "ValidationError",
    "field_error",
    "handle_app_error",
    "register_error_handler",
]
