# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sharelink.infrastructure.db.models import AuditLog
from sharelink.shared.logging import logger


class AuditAction(str, Enum):
    # Authentication
    REGISTER = "register"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"

    # Files
    FILE_UPLOADED = "file_uploaded"

    # Sharing
    SHARE_CREATED = "share_created"
    SHARE_REVOKED = "share_revoked"
    SHARED_ACCESS = "shared_access"
    SHARED_ACCESS_DENIED = "shared_access_denied"


# Detail keys whose values never leave the process unmasked
_SENSITIVE_KEYS = ("password", "token", "secret", "key", "email")


def _sanitize_details(details: dict[str, Any]) -> dict[str, Any]:
    return {
        key: "***REDACTED***" if any(s in key.lower() for s in _SENSITIVE_KEYS) else value
        for key, value in details.items()
    }


class AuditLogger:
    def __init__(self, session_factory: Callable[[], Session] | None = None) -> None:
        self._session_factory = session_factory

    def log(
        self,
        action: AuditAction,
        user_id: int | None = None,
        ip_address: str | None = None,
        details: dict[str, Any] | None = None,
        success: bool = True,
    ) -> None:
        timestamp = datetime.now(UTC)
        safe_details = _sanitize_details(details) if details else {}

        line = f"audit {action.value} user={user_id} ip={ip_address} ok={success}"
        if safe_details:
            line += f" {safe_details}"
        logger.log("INFO" if success else "WARNING", line)

        self._store(timestamp, action, user_id, ip_address, success, safe_details)

    def _store(
        self,
        timestamp: datetime,
        action: AuditAction,
        user_id: int | None,
        ip_address: str | None,
        success: bool,
        details: dict[str, Any],
    ) -> None:
        if self._session_factory is None:
            return

        db = self._session_factory()
        try:
            db.add(
                AuditLog(
                    timestamp=timestamp,
                    action=action.value,
                    user_id=user_id,
                    ip_address=ip_address,
                    success=success,
                    details_json=json.dumps(details) if details else None,
                )
            )
            db.commit()
        except SQLAlchemyError as db_error:
            db.rollback()
            # best-effort: the audited operation has already committed
            logger.warning(f"Failed to store audit log in database: {type(db_error).__name__}")
        finally:
            db.close()


__all__ = [
    "AuditAction",
    "AuditLogger",
]
