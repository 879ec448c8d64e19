"""pytest fixtures for authenticated in-process clients.

Registered through the ``pytest11`` entry point. A test suite provides an
``asgi_app`` fixture returning its application; the fixtures here build on it:

    @pytest.fixture
    def asgi_app():
        return app

    def test_admin_only(make_test_client):
        client = make_test_client(user_id="u1", roles=["admin"])
        assert client.get("/admin").status_code == 200
"""

from collections.abc import Iterable

import httpx
import pytest
from pydantic import ValidationError

from .client import create_test_client
from .config import get_settings
from .factory import AppFactory
from .logging_config import setup_logging


def pytest_configure(config):
    try:
        settings = get_settings()
    except ValidationError as e:
        raise pytest.UsageError(f"testclient_auth: invalid TESTCLIENT_* environment settings\n{e}") from e

    # Records propagate to pytest's log capture; only a log file gets its own handler.
    setup_logging(settings.logging, console=False)


@pytest.fixture
def app_factory(request):
    """AppFactory for the suite's ``asgi_app`` fixture, closed at teardown."""
    try:
        app = request.getfixturevalue("asgi_app")
    except pytest.FixtureLookupError:
        pytest.fail("app_factory requires an 'asgi_app' fixture returning the application under test")

    factory = AppFactory(app)
    yield factory
    factory.close()


@pytest.fixture
def make_test_client(app_factory):
    """Callable building authenticated sync clients from ``app_factory``."""

    def _make(
        user_id: str | None = None,
        email: str | None = None,
        token: str | None = None,
        roles: Iterable[str] | None = None,
    ) -> httpx.Client:
        return create_test_client(app_factory, user_id=user_id, email=email, token=token, roles=roles)

    return _make
