"""Shared test fixtures and configuration."""

import logging
import os
from unittest.mock import patch

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse

from testclient_auth.config import reload_settings
from testclient_auth.logging_config import PACKAGE_LOGGER


def build_echo_app() -> FastAPI:
    """App that reports the request headers it received."""
    app = FastAPI()

    @app.get("/headers")
    async def echo_headers(request: Request):
        return dict(request.headers)

    @app.get("/redirect")
    async def redirect():
        return RedirectResponse(url="/headers")

    @app.get("/error")
    async def error():
        raise RuntimeError("boom")

    return app


@pytest.fixture
def asgi_app():
    """Application under test, consumed by the plugin's app_factory fixture."""
    return build_echo_app()


@pytest.fixture
def env_clean():
    """Fixture to run with an empty environment and fresh settings."""
    with patch.dict(os.environ, {}, clear=True):
        reload_settings()
        yield
    reload_settings()


@pytest.fixture
def package_logger():
    """Package logger, with handlers and level restored after the test."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    yield logger
    for handler in list(logger.handlers):
        if handler not in saved_handlers:
            logger.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.setLevel(saved_level)
