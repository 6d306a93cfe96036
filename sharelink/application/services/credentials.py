# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sharelink.application.services.token_codec import TokenCodec
from sharelink.domain.entities import SessionClaims, User
from sharelink.domain.exceptions import ConflictError, InvalidInputError, UnauthorizedError
from sharelink.domain.repositories import OwnershipStore, PasswordHasher
from sharelink.shared.logging import logger

MIN_PASSWORD_LENGTH = 6


class CredentialService:
    def __init__(
        self,
        *,
        store: OwnershipStore,
        password_hasher: PasswordHasher,
        codec: TokenCodec,
    ) -> None:
        self._store = store
        self._password_hasher = password_hasher
        self._codec = codec
        self._dummy_hash: str | None = None

    def register(self, username: str, email: str, password: str) -> tuple[User, str]:
        username = (username or "").strip()
        email = (email or "").strip().lower()
        for field, value in (("username", username), ("email", email), ("password", password)):
            if not value:
                raise InvalidInputError(field, "required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidInputError("password", f"min_length:{MIN_PASSWORD_LENGTH}")

        taken = self._store.find_user_by_username_or_email(username, email)
        # A username may not equal another account's e-mail, nor the reverse
        if taken or self._store.find_user_by_username_or_email(email, username):
            raise ConflictError()

        user = self._store.create_user(username, email, self._password_hasher.hash(password))
        logger.info(f"credentials.register: ok user_id={user.id}")
        return user, self.mint(user)

    def login(self, username: str, password: str) -> tuple[User, str]:
        username = (username or "").strip()
        if not username:
            raise InvalidInputError("username", "required")
        if not password:
            raise InvalidInputError("password", "required")

        # Username matches come first; an e-mail match is tried only after them
        candidates = self._store.find_login_candidates(username)
        if not candidates:
            # Burn a comparable amount of work so timing does not reveal the miss
            self._password_hasher.verify(password, self._get_dummy_hash())
            raise UnauthorizedError()
        user = next(
            (c for c in candidates if self._password_hasher.verify(password, c.password_hash)),
            None,
        )
        if user is None:
            raise UnauthorizedError()

        logger.info(f"credentials.login: ok user_id={user.id}")
        return user, self.mint(user)

    def mint(self, user: User) -> str:
        token, _, _ = self._codec.encode({"sub": user.id, "usr": user.username})
        return token

    def verify(self, token: str) -> SessionClaims:
        payload = self._codec.decode(token)
        user_id = payload.get("sub")
        username = payload.get("usr")
        if not isinstance(user_id, int) or not isinstance(username, str):
            raise UnauthorizedError()
        return SessionClaims(
            user_id=user_id,
            username=username,
            issued_at=payload["iat"],
            expires_at=payload["exp"],
        )

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._password_hasher.hash("sharelink-dummy-password")
        return self._dummy_hash
