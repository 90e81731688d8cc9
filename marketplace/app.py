# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import atexit
import importlib
from typing import Any, Protocol, cast

from flask import Flask

from marketplace.infrastructure.container import Container
from marketplace.shared.config import AppConfig, load_config
from marketplace.shared.logging import logger, setup_logging
from marketplace.shared.middleware.error_handler import configure_error_handling
from marketplace.shared.middleware.rate_limit import install_rate_limiter
from marketplace.shared.middleware.request_logger import configure_request_logging


class _CORSCallable(Protocol):
    def __call__(self, app: Flask, **kwargs: Any) -> Any: ...


_flask_cors = importlib.import_module("flask_cors")
CORS = cast(_CORSCallable, _flask_cors.CORS)

SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=(), payment=(), usb=()",
}
HSTS_VALUE = "max-age=31536000; includeSubDomains; preload"


def create_app(
    config: AppConfig | None = None,
    container: Container | None = None,
    *,
    start_background_tasks: bool = True,
) -> Flask:
    config = config or (container.config if container else load_config())
    container = container or Container(config)
    setup_logging(debug_mode=config.debug_logging)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key, JSON_SORT_KEYS=False)
    app.extensions["marketplace.container"] = container

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)
    install_rate_limiter(app, container.rate_limiter, enabled=config.security.enable_rate_limit)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.products_controller.as_blueprint())

    if start_background_tasks:
        container.cleanup_expired_use_case.execute()
        sweeper = container.rate_limit_sweeper
        sweeper.start()
        atexit.register(sweeper.stop)

    headers = dict(SECURITY_HEADERS)
    if config.security.enable_hsts:
        headers["Strict-Transport-Security"] = HSTS_VALUE

    @app.after_request
    def _add_security_headers(resp):
        for name, value in headers.items():
            resp.headers.setdefault(name, value)
        return resp

    logger.info(f"Flask app initialized (storage={config.storage.backend})")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
