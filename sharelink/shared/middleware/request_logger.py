# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
import time

from flask import Flask, Response, g, request

from sharelink.shared.logging import clear_correlation_id, get_correlation_id, logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"


def _route() -> str:
    # Matched rule keeps path tokens out of the log: /api/shared/<token>
    rule = request.url_rule
    return rule.rule if rule is not None else request.path


def _remote() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr or "unknown"


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    """One line per request in, one per response out, tagged with a correlation id."""

    @app.before_request
    def _start() -> None:
        set_correlation_id(request.headers.get(REQUEST_ID_HEADER) or secrets.token_hex(6))
        g.request_started = time.perf_counter()
        if debug_mode:
            logger.debug(
                f"-> {request.method} {_route()} from {_remote()} "
                f"bytes={request.content_length or 0} args={sorted(request.args)}"
            )
        else:
            logger.info(f"-> {request.method} {_route()} from {_remote()}")

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed = time.perf_counter() - g.get("request_started", time.perf_counter())
        user_id = g.get("user_id")
        logger.info(
            f"<- {request.method} {_route()} {response.status_code} "
            f"{elapsed * 1000:.1f}ms" + (f" user={user_id}" if user_id else "")
        )
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"Request failed: {type(exc).__name__} on {request.method} {_route()}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
