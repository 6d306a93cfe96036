# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    email: str
    password_hash: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class StorageRef:
    """Opaque handle returned by the blob store for one uploaded object."""

    id: str
    url: str
    size: int
    mime_type: str


@dataclass(slots=True, frozen=True)
class FileRecord:

    id: int
    owner_id: int
    original_name: str
    storage_ref: StorageRef
    created_at: datetime
    is_shared: bool = False
    share_token: str | None = None

    def is_owned_by(self, user_id: int) -> bool:
        return self.owner_id == user_id


@dataclass(slots=True, frozen=True)
class SessionClaims:

    user_id: int
    username: str
    issued_at: int
    expires_at: int


@dataclass(slots=True, frozen=True)
class ShareClaims:

    file_id: int
    issuer_user_id: int
    issued_at: int
    expires_at: int


@dataclass(slots=True, frozen=True)
class ShareGrant:
    """A freshly issued share link together with the record it unlocks."""

    token: str
    file: FileRecord
    expires_at: datetime
