# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from sharelink.container import Container
from sharelink.infrastructure.db import init_db
from sharelink.shared.config import AppConfig, load_config
from sharelink.shared.logging import logger, setup_logging
from sharelink.shared.middleware.error_handler import configure_error_handling
from sharelink.shared.middleware.request_logger import configure_request_logging

# Multipart framing on top of the file itself
_UPLOAD_OVERHEAD_BYTES = 64 * 1024


def create_app(config: AppConfig | None = None, *, container: Container | None = None) -> Flask:
    if container is None:
        container = Container(config or load_config())
    config = container.config

    setup_logging(config.log_level, log_file=config.log_file, debug_mode=config.debug_logging)
    init_db(container.engine)

    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=config.secret_key,
        MAX_CONTENT_LENGTH=config.uploads.max_bytes + _UPLOAD_OVERHEAD_BYTES,
    )
    app.extensions["sharelink.container"] = container

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.files_controller.as_blueprint())
    app.register_blueprint(container.shared_controller.as_blueprint())

    @app.get("/api/health")
    def _health():
        return {"ok": True}

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        return resp

    logger.info(f"sharelink: app created env={config.app_env}")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000)
