# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from sqlalchemy import case, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sharelink.domain.entities import FileRecord, StorageRef
from sharelink.domain.entities import User as DomainUser
from sharelink.domain.exceptions import ConflictError
from sharelink.domain.repositories import OwnershipStore
from sharelink.infrastructure.db.models import File, User
from sharelink.infrastructure.unit_of_work import unit_of_work_scope


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def _to_user(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=_aware(row.created_at),
    )


def _to_record(row: File) -> FileRecord:
    return FileRecord(
        id=row.id,
        owner_id=row.user_id,
        original_name=row.original_name,
        storage_ref=StorageRef(
            id=row.storage_id,
            url=row.storage_url,
            size=int(row.file_size),
            mime_type=row.mime_type,
        ),
        created_at=_aware(row.uploaded_at),
        is_shared=bool(row.is_shared),
        share_token=row.share_token,
    )


class SqlAlchemyOwnershipStore(OwnershipStore):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def create_user(self, username: str, email: str, password_hash: str) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(username=username, email=email, password_hash=password_hash)
                session.add(row)
                session.flush()
                return _to_user(row)
        except IntegrityError as exc:
            raise ConflictError() from exc

    def find_user_by_username_or_email(self, username: str, email: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(
                select(User).where(or_(User.username == username, User.email == email)).limit(1)
            ).first()
            return _to_user(row) if row else None

    def find_login_candidates(self, identifier: str) -> Sequence[DomainUser]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.scalars(
                select(User)
                .where(or_(User.username == identifier, User.email == identifier.lower()))
                .order_by(case((User.username == identifier, 0), else_=1), User.id)
            ).all()
            return [_to_user(row) for row in rows]

    def create_file(self, owner_id: int, storage_ref: StorageRef, original_name: str) -> FileRecord:
        with unit_of_work_scope(self._session_factory) as session:
            row = File(
                user_id=owner_id,
                original_name=original_name,
                storage_id=storage_ref.id,
                storage_url=storage_ref.url,
                file_size=storage_ref.size,
                mime_type=storage_ref.mime_type,
            )
            session.add(row)
            session.flush()
            return _to_record(row)

    def list_files_by_owner(self, owner_id: int) -> Sequence[FileRecord]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.scalars(
                select(File)
                .where(File.user_id == owner_id)
                .order_by(File.uploaded_at.desc(), File.id.desc())
            ).all()
            return [_to_record(row) for row in rows]

    def get_file(self, file_id: int) -> FileRecord | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(File, file_id)
            return _to_record(row) if row else None

    def set_share(self, file_id: int, token: str) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.execute(
                update(File).where(File.id == file_id).values(is_shared=True, share_token=token)
            )

    def clear_share(self, file_id: int) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.execute(
                update(File).where(File.id == file_id).values(is_shared=False, share_token=None)
            )

    def get_shared_file(self, file_id: int, token: str) -> FileRecord | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(
                select(File).where(
                    File.id == file_id,
                    File.is_shared.is_(True),
                    File.share_token == token,
                )
            ).first()
            return _to_record(row) if row else None
