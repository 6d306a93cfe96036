# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from sharelink.shared.errors.base import DomainError, InfrastructureError, ValidationError


class InvalidInputError(ValidationError):
    """Malformed or out-of-range input; ``field`` and ``reason`` land in the context."""

    def __init__(self, field: str | None = None, reason: str | None = None) -> None:
        context = {k: v for k, v in (("field", field), ("reason", reason)) if v}
        super().__init__(context=context)


class ConflictError(DomainError):
    code = "conflict"
    status = HTTPStatus.CONFLICT


class UnauthorizedError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED


class NotFoundError(DomainError):
    code = "not_found"
    status = HTTPStatus.NOT_FOUND


class UnavailableError(InfrastructureError):
    code = "unavailable"
    status = HTTPStatus.SERVICE_UNAVAILABLE

    def __init__(self, backend: str) -> None:
        super().__init__(context={"backend": backend})
        self.backend = backend
