# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps

from flask import g, request

from sharelink.application.services.access_gate import AccessGate
from sharelink.shared.logging import logger


def bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        return auth[7:].strip()
    return ""


def client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def owner_required(gate: AccessGate) -> Callable:
    """Admit the request only with a valid session token; exposes ``g.user_id``."""

    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def inner(*args, **kwargs):
            claims = gate.authorize_owner_action(bearer_token())
            g.user_id = claims.user_id
            g.username = claims.username
            logger.debug(f"Auth OK: user={claims.user_id} {request.method} {request.path}")
            return f(*args, **kwargs)

        return inner

    return decorator
