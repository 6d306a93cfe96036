# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from datetime import UTC, datetime

from sharelink.application.services.token_codec import TokenCodec
from sharelink.domain.entities import FileRecord, ShareClaims, ShareGrant
from sharelink.domain.exceptions import NotFoundError, UnauthorizedError
from sharelink.domain.repositories import OwnershipStore
from sharelink.shared.logging import logger


class ShareTokenService:
    """Issues, resolves and revokes share links for owned files.

    A share token is valid only while two independent checks agree: its
    signature and expiry, and the file row still carrying that exact token
    with ``is_shared`` set. Re-issuing overwrites the stored token, which
    invalidates every earlier link for the file.
    """

    def __init__(self, *, store: OwnershipStore, codec: TokenCodec) -> None:
        self._store = store
        self._codec = codec

    def issue(self, file_id: int, owner_id: int) -> ShareGrant:
        record = self._owned_file(file_id, owner_id)

        token, _, expires_at = self._codec.encode(
            {"fid": record.id, "uid": owner_id, "jti": secrets.token_urlsafe(8)}
        )
        self._store.set_share(record.id, token)
        logger.info(f"share.issue: file_id={record.id} owner_id={owner_id}")

        return ShareGrant(
            token=token,
            file=record,
            expires_at=datetime.fromtimestamp(expires_at, UTC),
        )

    def resolve(self, token: str) -> FileRecord:
        claims = self.decode(token)
        record = self._store.get_shared_file(claims.file_id, token)
        if record is None:
            raise NotFoundError()
        return record

    def revoke(self, file_id: int, owner_id: int) -> None:
        record = self._owned_file(file_id, owner_id)
        self._store.clear_share(record.id)
        logger.info(f"share.revoke: file_id={record.id} owner_id={owner_id}")

    def decode(self, token: str) -> ShareClaims:
        payload = self._codec.decode(token)
        file_id = payload.get("fid")
        issuer = payload.get("uid")
        if not isinstance(file_id, int) or not isinstance(issuer, int):
            raise UnauthorizedError()
        return ShareClaims(
            file_id=file_id,
            issuer_user_id=issuer,
            issued_at=payload["iat"],
            expires_at=payload["exp"],
        )

    def _owned_file(self, file_id: int, owner_id: int) -> FileRecord:
        record = self._store.get_file(file_id)
        if record is None or not record.is_owned_by(owner_id):
            raise NotFoundError()
        return record
