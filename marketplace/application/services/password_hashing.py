"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from marketplace.domain.users.repositories import PasswordHasher
from marketplace.shared.logging import logger

# scrypt with n=2**16, r=8: 64 MiB of memory per hash
DEFAULT_METHOD = "scrypt:65536:8:1"


class WerkzeugPasswordHasher(PasswordHasher):
    """Memory-hard hashing producing self-describing ``method$salt$hash`` strings."""

    def __init__(self, method: str = DEFAULT_METHOD, salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length

    def hash(self, password: str) -> str:
        if not password or not password.strip():
            raise ValueError("Password cannot be empty")
        return str(
            generate_password_hash(password, method=self._method, salt_length=self._salt_length)
        )

    def verify(self, password: str, hashed: str) -> bool:
        if not password or not password.strip():
            return False
        if not hashed or not hashed.strip():
            return False
        try:
            return bool(check_password_hash(hashed, password))
        except (ValueError, TypeError) as exc:
            logger.warning(f"password.verify: unusable hash ({type(exc).__name__}: {exc})")
            return False
