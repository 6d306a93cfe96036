from __future__ import annotations

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789abcdef")
os.environ.setdefault("ENABLE_RATE_LIMIT", "false")

import pytest

from sharelink.application.services.access_gate import AccessGate
from sharelink.application.services.credentials import CredentialService
from sharelink.application.services.share_tokens import ShareTokenService
from sharelink.application.services.token_codec import SESSION_KIND, SHARE_KIND, TokenCodec
from sharelink.tests.fakes import DeterministicHasher, FrozenClock, InMemoryOwnershipStore

SECRET = "test-secret-key-0123456789abcdef"
SESSION_TTL = 24 * 60 * 60
SHARE_TTL = 7 * 24 * 60 * 60


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def store(clock: FrozenClock) -> InMemoryOwnershipStore:
    return InMemoryOwnershipStore(clock)


@pytest.fixture()
def credentials(store: InMemoryOwnershipStore, clock: FrozenClock) -> CredentialService:
    return CredentialService(
        store=store,
        password_hasher=DeterministicHasher(),
        codec=TokenCodec(SECRET, kind=SESSION_KIND, ttl_seconds=SESSION_TTL, clock=clock),
    )


@pytest.fixture()
def shares(store: InMemoryOwnershipStore, clock: FrozenClock) -> ShareTokenService:
    return ShareTokenService(
        store=store,
        codec=TokenCodec(SECRET, kind=SHARE_KIND, ttl_seconds=SHARE_TTL, clock=clock),
    )


@pytest.fixture()
def gate(credentials: CredentialService, shares: ShareTokenService) -> AccessGate:
    return AccessGate(credentials=credentials, shares=shares)
