# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from sharelink.application.services.credentials import CredentialService
from sharelink.domain.entities import User
from sharelink.domain.exceptions import UnauthorizedError
from sharelink.infrastructure.audit import AuditAction, AuditLogger
from sharelink.interfaces.http.auth import client_ip
from sharelink.interfaces.http.dto.auth import (AuthSuccessDTO, LoginRequestDTO,
                                                RegisterRequestDTO, UserDTO)
from sharelink.shared.config import SecurityConfig
from sharelink.shared.errors.validation import raise_validation_error
from sharelink.shared.logging import logger
from sharelink.shared.middleware.rate_limit import rate_limit


def _auth_payload(user: User, token: str) -> dict:
    return AuthSuccessDTO(
        token=token,
        user=UserDTO(id=str(user.id), username=user.username, email=user.email),
    ).model_dump()


class AuthController:
    def __init__(
        self,
        *,
        credentials: CredentialService,
        audit: AuditLogger,
        security: SecurityConfig,
    ) -> None:
        self._credentials = credentials
        self._audit = audit
        self._security = security

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._credentials.register(dto.username, dto.email, dto.password)

        self._audit.log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=client_ip(),
            details={"username": user.username},
            success=True,
        )
        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify(_auth_payload(user, token)), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = client_ip()
        try:
            user, token = self._credentials.login(dto.username, dto.password)
        except UnauthorizedError:
            self._audit.log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"username": dto.username},
                success=False,
            )
            raise

        self._audit.log(
            AuditAction.LOGIN_SUCCESS,
            user_id=user.id,
            ip_address=ip_address,
            details={"username": user.username},
            success=True,
        )
        logger.info(f"auth.login: ok user_id={user.id}")
        return jsonify(_auth_payload(user, token)), 200

    def as_blueprint(self) -> Blueprint:
        limited = rate_limit(self._security)
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=limited(self.register), methods=["POST"])
        bp.add_url_rule("/login", view_func=limited(self.login), methods=["POST"])
        return bp
