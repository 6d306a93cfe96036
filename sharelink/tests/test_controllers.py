from __future__ import annotations

from datetime import UTC, datetime
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from sharelink.application.services.credentials import CredentialService
from sharelink.domain.entities import FileRecord, SessionClaims, User
from sharelink.domain.exceptions import NotFoundError, UnauthorizedError
from sharelink.infrastructure.audit import AuditAction
from sharelink.interfaces.http.controllers import (AuthController, FilesController,
                                                   SharedController)
from sharelink.shared.config import SecurityConfig
from sharelink.shared.middleware.error_handler import configure_error_handling
from sharelink.tests.fakes import storage_ref


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _security() -> SecurityConfig:
    return SecurityConfig(ENABLE_RATE_LIMIT=False, _env_file=None)


def test_register_endpoint_returns_token_and_user(flask_app: Flask) -> None:
    called: dict[str, tuple[str, str, str]] = {}

    class StubCredentials:
        def register(self, username: str, email: str, password: str) -> tuple[User, str]:
            called["args"] = (username, email, password)
            return (
                User(
                    id=7,
                    username=username,
                    email=email,
                    password_hash="hash",
                    created_at=datetime.now(UTC),
                ),
                "token123",
            )

    audit = MagicMock()
    controller = AuthController(
        credentials=cast(CredentialService, StubCredentials()),
        audit=audit,
        security=_security(),
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={"username": " alice ", "email": "Alice@Example.com", "password": "secret1"},
        )

    assert response.status_code == 201
    assert called["args"] == ("alice", "alice@example.com", "secret1")
    assert response.get_json() == {
        "token": "token123",
        "user": {"id": "7", "username": "alice", "email": "alice@example.com"},
    }
    assert audit.log.call_args.args[0] is AuditAction.REGISTER


def test_register_invalid_payload_returns_400(flask_app: Flask) -> None:
    credentials = MagicMock()
    controller = AuthController(credentials=credentials, audit=MagicMock(), security=_security())
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/auth/register", json={"username": "alice"})

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "invalid_input"
    assert "email" in payload["context"]["fields"]
    credentials.register.assert_not_called()


def test_failed_login_is_audited_and_returns_401(flask_app: Flask) -> None:
    credentials = MagicMock()
    credentials.login.side_effect = UnauthorizedError()
    audit = MagicMock()
    controller = AuthController(credentials=credentials, audit=audit, security=_security())
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"username": "alice", "password": "bad"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthorized"}
    assert audit.log.call_args.args[0] is AuditAction.LOGIN_FAILED
    assert audit.log.call_args.kwargs["success"] is False


def _files_controller(gate: MagicMock, shares: MagicMock) -> FilesController:
    return FilesController(
        gate=gate,
        shares=shares,
        upload_file=MagicMock(),
        list_files=MagicMock(),
        download_file=MagicMock(),
        audit=MagicMock(),
        public_base_url="https://share.example.test/",
    )


def test_files_routes_reject_missing_bearer(flask_app: Flask) -> None:
    gate = MagicMock()
    gate.authorize_owner_action.side_effect = UnauthorizedError()
    shares = MagicMock()
    flask_app.register_blueprint(_files_controller(gate, shares).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/files/share", json={"fileId": 1})

    assert response.status_code == 401
    gate.authorize_owner_action.assert_called_once_with("")
    shares.issue.assert_not_called()


def test_share_uses_public_base_url(flask_app: Flask) -> None:
    gate = MagicMock()
    gate.authorize_owner_action.return_value = SessionClaims(
        user_id=3, username="alice", issued_at=0, expires_at=10
    )
    shares = MagicMock()
    shares.issue.return_value = MagicMock(
        token="abc.def", expires_at=datetime(2025, 1, 8, 12, 0, tzinfo=UTC)
    )
    flask_app.register_blueprint(_files_controller(gate, shares).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/files/share",
            json={"fileId": 5},
            headers={"Authorization": "Bearer session-token"},
        )

    assert response.status_code == 200
    assert response.get_json() == {
        "shareUrl": "https://share.example.test/api/shared/abc.def",
        "shareToken": "abc.def",
        "expiresAt": "2025-01-08T12:00:00Z",
    }
    gate.authorize_owner_action.assert_called_once_with("session-token")
    shares.issue.assert_called_once_with(5, 3)


def test_shared_resolve_redirects_and_audits_denials(flask_app: Flask) -> None:
    record = FileRecord(
        id=1,
        owner_id=3,
        original_name="report.pdf",
        storage_ref=storage_ref(),
        created_at=datetime.now(UTC),
        is_shared=True,
        share_token="good",
    )
    gate = MagicMock()

    def authorize(token: str) -> FileRecord:
        if token != "good":
            raise NotFoundError()
        return record

    gate.authorize_shared_access.side_effect = authorize
    audit = MagicMock()
    flask_app.register_blueprint(SharedController(gate=gate, audit=audit).as_blueprint())

    with flask_app.test_client() as client:
        ok = client.get("/api/shared/good")
        denied = client.get("/api/shared/stale")

    assert ok.status_code == 302
    assert ok.headers["Location"] == record.storage_ref.url
    assert denied.status_code == 404
    assert audit.log.call_args.args[0] is AuditAction.SHARED_ACCESS_DENIED
    assert audit.log.call_args.kwargs["details"] == {"reason": "not_found"}
