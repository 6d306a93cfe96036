# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import mimetypes
from collections.abc import Iterable
from pathlib import PurePath

from sharelink.domain.entities import FileRecord
from sharelink.domain.exceptions import InvalidInputError
from sharelink.domain.repositories import BlobStore, OwnershipStore
from sharelink.shared.logging import logger


class UploadFileUseCase:
    def __init__(
        self,
        *,
        store: OwnershipStore,
        blobs: BlobStore,
        max_bytes: int,
        allowed_types: Iterable[str],
    ) -> None:
        self._store = store
        self._blobs = blobs
        self._max_bytes = max_bytes
        self._allowed_types = frozenset(t.lower() for t in allowed_types)

    def execute(self, owner_id: int, data: bytes, original_name: str, mime_type: str) -> FileRecord:
        original_name = PurePath((original_name or "").strip()).name
        if not original_name:
            raise InvalidInputError("file", "required")
        if not data:
            raise InvalidInputError("file", "empty")
        if len(data) > self._max_bytes:
            raise InvalidInputError("file", f"max_bytes:{self._max_bytes}")
        if not self._is_allowed(original_name, mime_type or ""):
            raise InvalidInputError("file", "type_not_allowed")

        storage_ref = self._blobs.put(data, original_name, mime_type)
        record = self._store.create_file(owner_id, storage_ref, original_name)
        logger.info(
            f"files.upload: ok file_id={record.id} owner_id={owner_id} size={storage_ref.size}"
        )
        return record

    def _is_allowed(self, original_name: str, mime_type: str) -> bool:
        extension = PurePath(original_name).suffix.lower().lstrip(".")
        if extension not in self._allowed_types:
            return False
        mime_type = mime_type.lower()
        if mimetypes.guess_type(original_name)[0] == mime_type:
            return True
        # substring match, e.g. application/pdf or image/jpeg
        return any(allowed in mime_type for allowed in self._allowed_types)
