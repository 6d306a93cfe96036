# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sharelink.application.services.credentials import CredentialService
from sharelink.application.services.share_tokens import ShareTokenService
from sharelink.domain.entities import FileRecord, SessionClaims
from sharelink.domain.exceptions import UnauthorizedError


class AccessGate:
    """Routes an inbound credential to the verifier for its kind."""

    def __init__(self, *, credentials: CredentialService, shares: ShareTokenService) -> None:
        self._credentials = credentials
        self._shares = shares

    def authorize_owner_action(self, session_token: str | None) -> SessionClaims:
        if not session_token:
            raise UnauthorizedError()
        return self._credentials.verify(session_token)

    def authorize_shared_access(self, share_token: str | None) -> FileRecord:
        if not share_token:
            raise UnauthorizedError()
        return self._shares.resolve(share_token)
