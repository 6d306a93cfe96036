# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from sharelink.shared.logging import logger

from .base import AppError

# Client errors worth a warning line; other 4xx are not logged
_WARN_STATUSES = frozenset({HTTPStatus.UNAUTHORIZED, HTTPStatus.NOT_FOUND})


def error_response(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def register_error_handler(
    app: Flask,
    *,
    debug_mode: bool = False,
    default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> None:
    """Render ``AppError`` as ``{"error": code}`` and hide everything unexpected."""

    @app.errorhandler(AppError)
    def _on_app_error(exc: AppError):
        where = f"{request.method} {request.url_rule or request.path}"
        if not exc.is_client_error:
            logger.error(f"{exc.code} on {where} context={exc.context}")
        elif exc.status in _WARN_STATUSES:
            logger.warning(f"{exc.code} on {where}")
        return error_response(exc)

    @app.errorhandler(HTTPException)
    def _on_http_exception(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _on_unexpected(exc: Exception):
        where = f"{request.method} {request.url_rule or request.path}"
        if debug_mode:
            logger.exception(f"Unhandled {type(exc).__name__} on {where}")
        else:
            logger.error(f"Unhandled {type(exc).__name__} on {where}")
        return jsonify({"error": "internal_error"}), default_status
