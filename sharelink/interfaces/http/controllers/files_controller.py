# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, redirect, request
from pydantic import ValidationError

from sharelink.application.services.access_gate import AccessGate
from sharelink.application.services.share_tokens import ShareTokenService
from sharelink.application.use_cases.files import (DownloadFileUseCase,
                                                   ListFilesUseCase,
                                                   UploadFileUseCase)
from sharelink.domain.exceptions import InvalidInputError
from sharelink.infrastructure.audit import AuditAction, AuditLogger
from sharelink.interfaces.http.auth import client_ip, owner_required
from sharelink.interfaces.http.dto.files import (FileDTO, OkDTO, ShareRequestDTO,
                                                 ShareResponseDTO)
from sharelink.shared.errors.validation import raise_validation_error
from sharelink.shared.logging import logger


class FilesController:
    def __init__(
        self,
        *,
        gate: AccessGate,
        shares: ShareTokenService,
        upload_file: UploadFileUseCase,
        list_files: ListFilesUseCase,
        download_file: DownloadFileUseCase,
        audit: AuditLogger,
        public_base_url: str | None = None,
    ) -> None:
        self._gate = gate
        self._shares = shares
        self._upload_file = upload_file
        self._list_files = list_files
        self._download_file = download_file
        self._audit = audit
        self._public_base_url = public_base_url

    def list_own(self) -> tuple[Response, int]:
        records = self._list_files.execute(g.user_id)
        return jsonify([FileDTO.from_record(r, g.username).model_dump(mode="json") for r in records]), 200

    def upload(self) -> tuple[Response, int]:
        upload = request.files.get("file")
        if upload is None:
            raise InvalidInputError("file", "required")

        record = self._upload_file.execute(
            g.user_id,
            upload.read(),
            upload.filename or "",
            upload.mimetype or "",
        )
        self._audit.log(
            AuditAction.FILE_UPLOADED,
            user_id=g.user_id,
            ip_address=client_ip(),
            details={"file_id": record.id, "size": record.storage_ref.size},
        )
        return jsonify(FileDTO.from_record(record, g.username).model_dump(mode="json")), 201

    def download(self, file_id: int) -> Response:
        record = self._download_file.execute(file_id, g.user_id)
        return redirect(record.storage_ref.url)

    def download_by_query(self) -> Response:
        raw = request.args.get("id") or request.args.get("fileId") or ""
        if not raw.isdigit():
            raise InvalidInputError("id", "required")
        return self.download(int(raw))

    def share(self) -> tuple[Response, int]:
        dto = self._share_request()
        grant = self._shares.issue(dto.file_id, g.user_id)

        self._audit.log(
            AuditAction.SHARE_CREATED,
            user_id=g.user_id,
            ip_address=client_ip(),
            details={"file_id": dto.file_id},
        )
        payload = ShareResponseDTO(
            share_url=f"{self._base_url()}/api/shared/{grant.token}",
            share_token=grant.token,
            expires_at=grant.expires_at,
        )
        return jsonify(payload.model_dump(mode="json", by_alias=True)), 200

    def unshare(self) -> tuple[Response, int]:
        dto = self._share_request()
        self._shares.revoke(dto.file_id, g.user_id)

        self._audit.log(
            AuditAction.SHARE_REVOKED,
            user_id=g.user_id,
            ip_address=client_ip(),
            details={"file_id": dto.file_id},
        )
        logger.info(f"files.unshare: file_id={dto.file_id}")
        return jsonify(OkDTO().model_dump()), 200

    def _share_request(self) -> ShareRequestDTO:
        try:
            return ShareRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

    def _base_url(self) -> str:
        return (self._public_base_url or request.host_url).rstrip("/")

    def as_blueprint(self) -> Blueprint:
        guard = owner_required(self._gate)
        bp = Blueprint("files", __name__, url_prefix="/api/files")
        bp.add_url_rule("", view_func=guard(self.list_own), methods=["GET"])
        # Paths used by existing web clients
        bp.add_url_rule(
            "/list", endpoint="list_legacy", view_func=guard(self.list_own), methods=["GET"]
        )
        bp.add_url_rule("/upload", view_func=guard(self.upload), methods=["POST"])
        bp.add_url_rule(
            "/<int:file_id>/download", view_func=guard(self.download), methods=["GET"]
        )
        bp.add_url_rule(
            "/download", view_func=guard(self.download_by_query), methods=["GET"]
        )
        bp.add_url_rule("/share", view_func=guard(self.share), methods=["POST"])
        bp.add_url_rule(
            "/share", endpoint="unshare", view_func=guard(self.unshare), methods=["DELETE"]
        )
        return bp
