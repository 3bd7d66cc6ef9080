"""
FastAPI application entry point for the signup API.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from signup_api.config import get_settings
from signup_api.errors import register_error_handlers
from signup_api.routes import router


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title="Signup API", version="0.1.0")
    register_error_handlers(app)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()
