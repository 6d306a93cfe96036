# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, redirect

from sharelink.application.services.access_gate import AccessGate
from sharelink.domain.exceptions import NotFoundError, UnauthorizedError
from sharelink.infrastructure.audit import AuditAction, AuditLogger
from sharelink.interfaces.http.auth import client_ip


class SharedController:
    """Anonymous download through a share link."""

    def __init__(self, *, gate: AccessGate, audit: AuditLogger) -> None:
        self._gate = gate
        self._audit = audit

    def resolve(self, token: str) -> Response:
        try:
            record = self._gate.authorize_shared_access(token)
        except (UnauthorizedError, NotFoundError) as exc:
            self._audit.log(
                AuditAction.SHARED_ACCESS_DENIED,
                ip_address=client_ip(),
                details={"reason": exc.code},
                success=False,
            )
            raise

        self._audit.log(
            AuditAction.SHARED_ACCESS,
            ip_address=client_ip(),
            details={"file_id": record.id},
        )
        return redirect(record.storage_ref.url)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("shared", __name__, url_prefix="/api/shared")
        bp.add_url_rule("/<token>", view_func=self.resolve, methods=["GET"])
        return bp
