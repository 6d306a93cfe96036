# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import FileRecord, StorageRef, User


class OwnershipStore(Protocol):
    def create_user(self, username: str, email: str, password_hash: str) -> User: ...
    def find_user_by_username_or_email(self, username: str, email: str) -> User | None: ...
    def find_login_candidates(self, identifier: str) -> Sequence[User]: ...

    def create_file(self, owner_id: int, storage_ref: StorageRef, original_name: str) -> FileRecord: ...
    def list_files_by_owner(self, owner_id: int) -> Sequence[FileRecord]: ...
    def get_file(self, file_id: int) -> FileRecord | None: ...

    def set_share(self, file_id: int, token: str) -> None: ...
    def clear_share(self, file_id: int) -> None: ...
    def get_shared_file(self, file_id: int, token: str) -> FileRecord | None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class BlobStore(Protocol):
    def put(self, data: bytes, original_name: str, mime_type: str) -> StorageRef: ...
