from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from sharelink.application.services.access_gate import AccessGate
from sharelink.application.services.credentials import CredentialService
from sharelink.application.services.share_tokens import ShareTokenService
from sharelink.domain.exceptions import NotFoundError, UnauthorizedError
from sharelink.tests.fakes import InMemoryOwnershipStore, storage_ref


def test_owner_action_returns_session_claims(
    gate: AccessGate, credentials: CredentialService
) -> None:
    user, token = credentials.register("alice", "alice@example.com", "secret1")

    claims = gate.authorize_owner_action(token)

    assert claims.user_id == user.id
    assert claims.username == "alice"


@pytest.mark.parametrize("token", [None, ""])
def test_missing_credentials_are_unauthorized(gate: AccessGate, token: str | None) -> None:
    with pytest.raises(UnauthorizedError):
        gate.authorize_owner_action(token)
    with pytest.raises(UnauthorizedError):
        gate.authorize_shared_access(token)


def test_shared_access_resolves_record(
    gate: AccessGate,
    credentials: CredentialService,
    shares: ShareTokenService,
    store: InMemoryOwnershipStore,
) -> None:
    alice, _ = credentials.register("alice", "alice@example.com", "secret1")
    record = store.create_file(alice.id, storage_ref(), "report.pdf")
    token = shares.issue(record.id, alice.id).token

    assert gate.authorize_shared_access(token).id == record.id


def test_gate_only_delegates() -> None:
    credentials = MagicMock()
    shares = MagicMock()
    shares.resolve.side_effect = NotFoundError()
    gate = AccessGate(credentials=credentials, shares=shares)

    gate.authorize_owner_action("session-token")
    with pytest.raises(NotFoundError):
        gate.authorize_shared_access("share-token")

    credentials.verify.assert_called_once_with("session-token")
    shares.resolve.assert_called_once_with("share-token")
    credentials.resolve.assert_not_called()
    shares.verify.assert_not_called()
