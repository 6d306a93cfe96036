from __future__ import annotations

from datetime import timedelta

import pytest

from sharelink.application.services.credentials import CredentialService
from sharelink.application.services.share_tokens import ShareTokenService
from sharelink.domain.exceptions import NotFoundError, UnauthorizedError
from sharelink.tests.conftest import SHARE_TTL
from sharelink.tests.fakes import FrozenClock, InMemoryOwnershipStore, storage_ref, tamper


@pytest.fixture()
def alice_file(store: InMemoryOwnershipStore, credentials: CredentialService):
    alice, _ = credentials.register("alice", "alice@example.com", "secret1")
    return alice, store.create_file(alice.id, storage_ref(), "report.pdf")


def test_issue_marks_file_shared(
    shares: ShareTokenService, store: InMemoryOwnershipStore, alice_file, clock: FrozenClock
) -> None:
    alice, record = alice_file

    grant = shares.issue(record.id, alice.id)

    stored = store.get_file(record.id)
    assert stored.is_shared is True
    assert stored.share_token == grant.token
    assert grant.file.id == record.id
    assert grant.expires_at == clock().replace(microsecond=0) + timedelta(seconds=SHARE_TTL)


def test_issue_claims_bind_file_and_issuer(shares: ShareTokenService, alice_file) -> None:
    alice, record = alice_file

    claims = shares.decode(shares.issue(record.id, alice.id).token)

    assert claims.file_id == record.id
    assert claims.issuer_user_id == alice.id
    assert claims.expires_at - claims.issued_at == SHARE_TTL


def test_issue_for_other_users_file_is_not_found(
    shares: ShareTokenService,
    credentials: CredentialService,
    store: InMemoryOwnershipStore,
    alice_file,
) -> None:
    _, record = alice_file
    bob, _ = credentials.register("bob", "bob@example.com", "secret1")

    with pytest.raises(NotFoundError):
        shares.issue(record.id, bob.id)

    assert store.get_file(record.id).is_shared is False


def test_issue_for_missing_file_is_not_found(shares: ShareTokenService, alice_file) -> None:
    alice, _ = alice_file

    with pytest.raises(NotFoundError):
        shares.issue(999, alice.id)


def test_resolve_is_multi_use(shares: ShareTokenService, alice_file) -> None:
    alice, record = alice_file
    token = shares.issue(record.id, alice.id).token

    first = shares.resolve(token)
    second = shares.resolve(token)

    assert first.original_name == "report.pdf"
    assert second.storage_ref.url == record.storage_ref.url


def test_reissue_supersedes_previous_token(shares: ShareTokenService, alice_file) -> None:
    alice, record = alice_file

    first = shares.issue(record.id, alice.id).token
    second = shares.issue(record.id, alice.id).token

    assert first != second
    with pytest.raises(NotFoundError):
        shares.resolve(first)
    assert shares.resolve(second).id == record.id


def test_resolve_after_expiry_is_unauthorized(
    shares: ShareTokenService, alice_file, clock: FrozenClock
) -> None:
    alice, record = alice_file
    token = shares.issue(record.id, alice.id).token

    clock.advance(seconds=SHARE_TTL - 1)
    assert shares.resolve(token).id == record.id

    clock.advance(seconds=2)
    with pytest.raises(UnauthorizedError):
        shares.resolve(token)


def test_revoke_disables_link(
    shares: ShareTokenService, store: InMemoryOwnershipStore, alice_file
) -> None:
    alice, record = alice_file
    token = shares.issue(record.id, alice.id).token

    shares.revoke(record.id, alice.id)

    with pytest.raises(NotFoundError):
        shares.resolve(token)
    stored = store.get_file(record.id)
    assert stored.is_shared is False
    assert stored.share_token is None


def test_revoke_requires_ownership(
    shares: ShareTokenService, credentials: CredentialService, alice_file
) -> None:
    alice, record = alice_file
    token = shares.issue(record.id, alice.id).token
    bob, _ = credentials.register("bob", "bob@example.com", "secret1")

    with pytest.raises(NotFoundError):
        shares.revoke(record.id, bob.id)

    assert shares.resolve(token).id == record.id


def test_revoke_private_file_is_noop(shares: ShareTokenService, alice_file) -> None:
    alice, record = alice_file

    shares.revoke(record.id, alice.id)


def test_session_token_is_not_a_share_token(
    shares: ShareTokenService, credentials: CredentialService, alice_file
) -> None:
    alice, record = alice_file
    shares.issue(record.id, alice.id)
    session_token = credentials.mint(alice)

    with pytest.raises(UnauthorizedError):
        shares.resolve(session_token)


def test_share_token_is_not_a_session_token(
    shares: ShareTokenService, credentials: CredentialService, alice_file
) -> None:
    alice, record = alice_file
    share_token = shares.issue(record.id, alice.id).token

    with pytest.raises(UnauthorizedError):
        credentials.verify(share_token)


def test_resolve_rejects_forged_token(shares: ShareTokenService, alice_file) -> None:
    alice, record = alice_file
    token = shares.issue(record.id, alice.id).token

    with pytest.raises(UnauthorizedError):
        shares.resolve(tamper(token))
