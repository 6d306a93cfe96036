# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sharelink.domain.entities import FileRecord
from sharelink.domain.exceptions import NotFoundError
from sharelink.domain.repositories import OwnershipStore


class DownloadFileUseCase:
    def __init__(self, *, store: OwnershipStore) -> None:
        self._store = store

    def execute(self, file_id: int, owner_id: int) -> FileRecord:
        record = self._store.get_file(file_id)
        if record is None or not record.is_owned_by(owner_id):
            raise NotFoundError()
        return record
