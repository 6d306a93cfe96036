# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any, ClassVar


class AppError(Exception):
    """Error with a stable machine code and the HTTP status it answers with.

    Subclasses pin ``code`` and ``status`` as class attributes; callers may
    still override either per instance.
    """

    code: ClassVar[str] = "internal_error"
    status: ClassVar[HTTPStatus] = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        if code is not None:
            self.code = code  # type: ignore[misc]
        if status is not None:
            self.status = status  # type: ignore[misc]
        self.context = dict(context) if context else None
        super().__init__(self.code)

    @property
    def is_client_error(self) -> bool:
        return self.status < HTTPStatus.INTERNAL_SERVER_ERROR

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, status={int(self.status)})"


class DomainError(AppError):
    code = "domain_error"
    status = HTTPStatus.BAD_REQUEST


class InfrastructureError(AppError):
    code = "infrastructure_error"
    status = HTTPStatus.INTERNAL_SERVER_ERROR


class ValidationError(AppError):
    code = "invalid_input"
    status = HTTPStatus.BAD_REQUEST
