"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from sharelink.domain.repositories import PasswordHasher


class WerkzeugPasswordHasher(PasswordHasher):
    def __init__(self, method: str = "scrypt") -> None:
        self._method = method

    def hash(self, password: str) -> str:
        return str(generate_password_hash(password, method=self._method))

    def verify(self, password: str, hashed: str) -> bool:
        return bool(check_password_hash(hashed, password))
