from __future__ import annotations

import json
from unittest.mock import MagicMock

from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from sharelink.infrastructure.audit import AuditAction, AuditLogger
from sharelink.infrastructure.db import build_engine, build_session_factory, init_db
from sharelink.infrastructure.db.models import AuditLog
from sharelink.shared.config import DatabaseConfig


def test_audit_entry_is_persisted_with_redacted_details() -> None:
    engine = build_engine(DatabaseConfig(DATABASE_URL="sqlite://"))
    init_db(engine)
    factory = build_session_factory(engine)

    AuditLogger(factory).log(
        AuditAction.SHARED_ACCESS_DENIED,
        ip_address="203.0.113.9",
        details={"reason": "not_found", "share_token": "abc.def"},
        success=False,
    )

    with factory() as session:
        row = session.scalars(select(AuditLog)).one()
    engine.dispose()

    assert row.action == "shared_access_denied"
    assert row.success is False
    assert row.ip_address == "203.0.113.9"
    assert json.loads(row.details_json) == {"reason": "not_found", "share_token": "***REDACTED***"}


def test_audit_without_database_only_logs() -> None:
    AuditLogger().log(AuditAction.LOGIN_FAILED, details={"username": "alice"}, success=False)


def test_audit_store_failure_does_not_raise() -> None:
    session = MagicMock()
    session.commit.side_effect = OperationalError("INSERT", {}, Exception("disk I/O error"))

    AuditLogger(lambda: session).log(AuditAction.SHARE_CREATED, user_id=1, details={"file_id": 2})

    session.rollback.assert_called_once()
    session.close.assert_called_once()
