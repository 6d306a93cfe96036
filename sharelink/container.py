"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from sharelink.application.services.access_gate import AccessGate
from sharelink.application.services.credentials import CredentialService
from sharelink.application.services.password_hashing import WerkzeugPasswordHasher
from sharelink.application.services.share_tokens import ShareTokenService
from sharelink.application.services.token_codec import (SESSION_KIND, SHARE_KIND,
                                                        Clock, TokenCodec, utc_now)
from sharelink.application.use_cases.files import (DownloadFileUseCase,
                                                   ListFilesUseCase,
                                                   UploadFileUseCase)
from sharelink.domain.repositories import BlobStore, OwnershipStore, PasswordHasher
from sharelink.infrastructure.audit import AuditLogger
from sharelink.infrastructure.db import build_engine, build_session_factory
from sharelink.infrastructure.repositories import SqlAlchemyOwnershipStore
from sharelink.infrastructure.storage import CloudinaryBlobStore
from sharelink.interfaces.http.controllers import (AuthController,
                                                   FilesController,
                                                   SharedController)
from sharelink.shared.config import AppConfig


class Container:
    def __init__(
        self,
        config: AppConfig,
        *,
        clock: Clock = utc_now,
        blob_store: BlobStore | None = None,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        self.config = config
        self.clock = clock
        self._blob_store = blob_store
        self._password_hasher = password_hasher

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def ownership_store(self) -> OwnershipStore:
        return SqlAlchemyOwnershipStore(self.session_factory)

    @cached_property
    def blob_store(self) -> BlobStore:
        return self._blob_store or CloudinaryBlobStore(self.config.storage)

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return self._password_hasher or WerkzeugPasswordHasher()

    @cached_property
    def audit(self) -> AuditLogger:
        return AuditLogger(self.session_factory)

    @cached_property
    def session_codec(self) -> TokenCodec:
        return TokenCodec(
            self.config.secret_key,
            kind=SESSION_KIND,
            ttl_seconds=self.config.tokens.session_ttl_seconds,
            clock=self.clock,
        )

    @cached_property
    def share_codec(self) -> TokenCodec:
        return TokenCodec(
            self.config.secret_key,
            kind=SHARE_KIND,
            ttl_seconds=self.config.tokens.share_ttl_seconds,
            clock=self.clock,
        )

    @cached_property
    def credential_service(self) -> CredentialService:
        return CredentialService(
            store=self.ownership_store,
            password_hasher=self.password_hasher,
            codec=self.session_codec,
        )

    @cached_property
    def share_token_service(self) -> ShareTokenService:
        return ShareTokenService(store=self.ownership_store, codec=self.share_codec)

    @cached_property
    def access_gate(self) -> AccessGate:
        return AccessGate(credentials=self.credential_service, shares=self.share_token_service)

    @cached_property
    def upload_file_use_case(self) -> UploadFileUseCase:
        return UploadFileUseCase(
            store=self.ownership_store,
            blobs=self.blob_store,
            max_bytes=self.config.uploads.max_bytes,
            allowed_types=self.config.uploads.allowed_types,
        )

    @cached_property
    def list_files_use_case(self) -> ListFilesUseCase:
        return ListFilesUseCase(store=self.ownership_store)

    @cached_property
    def download_file_use_case(self) -> DownloadFileUseCase:
        return DownloadFileUseCase(store=self.ownership_store)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            credentials=self.credential_service,
            audit=self.audit,
            security=self.config.security,
        )

    @cached_property
    def files_controller(self) -> FilesController:
        return FilesController(
            gate=self.access_gate,
            shares=self.share_token_service,
            upload_file=self.upload_file_use_case,
            list_files=self.list_files_use_case,
            download_file=self.download_file_use_case,
            audit=self.audit,
            public_base_url=self.config.security.public_base_url,
        )

    @cached_property
    def shared_controller(self) -> SharedController:
        return SharedController(gate=self.access_gate, audit=self.audit)
