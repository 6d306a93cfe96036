# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from sharelink.domain.entities import FileRecord
from sharelink.domain.repositories import OwnershipStore


class ListFilesUseCase:
    def __init__(self, *, store: OwnershipStore) -> None:
        self._store = store

    def execute(self, owner_id: int) -> Sequence[FileRecord]:
        return self._store.list_files_by_owner(owner_id)
