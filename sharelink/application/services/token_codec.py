# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed, URL-safe token envelopes.

Every token is an itsdangerous ``URLSafeSerializer`` payload holding the
claims together with ``iat`` and ``exp`` (unix seconds). The serializer salt
is the token kind, so a session token does not verify as a share token.
Expiry is checked here against the injected clock, not by itsdangerous.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from itsdangerous import BadData, URLSafeSerializer

from sharelink.domain.exceptions import UnauthorizedError

Clock = Callable[[], datetime]

SESSION_KIND = "sharelink.session"
SHARE_KIND = "sharelink.share"


def utc_now() -> datetime:
    return datetime.now(UTC)


class TokenCodec:
    def __init__(self, secret_key: str, *, kind: str, ttl_seconds: int, clock: Clock = utc_now) -> None:
        if not secret_key:
            raise ValueError("secret_key is required")
        self._serializer = URLSafeSerializer(secret_key, salt=kind)
        self._ttl = int(ttl_seconds)
        self._clock = clock

    def now(self) -> int:
        return int(self._clock().timestamp())

    def encode(self, claims: dict[str, Any]) -> tuple[str, int, int]:
        issued_at = self.now()
        expires_at = issued_at + self._ttl
        payload = {**claims, "iat": issued_at, "exp": expires_at}
        return str(self._serializer.dumps(payload)), issued_at, expires_at

    def decode(self, token: str) -> dict[str, Any]:
        if not token:
            raise UnauthorizedError()
        try:
            payload = self._serializer.loads(token)
        except BadData as exc:
            raise UnauthorizedError() from exc

        if not isinstance(payload, dict):
            raise UnauthorizedError()
        expires_at = payload.get("exp")
        issued_at = payload.get("iat")
        if not isinstance(expires_at, int) or not isinstance(issued_at, int):
            raise UnauthorizedError()
        if self.now() > expires_at:
            raise UnauthorizedError(context={"reason": "expired"})
        return payload
