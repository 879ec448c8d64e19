"""testclient-auth - Authenticated in-process HTTP clients for integration tests."""

from importlib.metadata import PackageNotFoundError, version

from .client import create_test_async_client, create_test_client
from .factory import (
    AppFactory,
    AsyncClientFactory,
    ClientAuthError,
    ClientFactory,
    FactoryClosedError,
)
from .headers import (
    AUTHORIZATION_EMAIL_HEADER,
    AUTHORIZATION_HEADER,
    AUTHORIZATION_ROLES_HEADER,
    AUTHORIZATION_USER_ID_HEADER,
    TEST_AUTH_SCHEME,
    apply_auth_headers,
    build_auth_headers,
    has_content,
)

try:
    __version__ = version("testclient-auth")
except PackageNotFoundError:
    __version__ = "0.0.0"  # Fallback for development

__all__ = [
    "AUTHORIZATION_EMAIL_HEADER",
    "AUTHORIZATION_HEADER",
    "AUTHORIZATION_ROLES_HEADER",
    "AUTHORIZATION_USER_ID_HEADER",
    "TEST_AUTH_SCHEME",
    "AppFactory",
    "AsyncClientFactory",
    "ClientAuthError",
    "ClientFactory",
    "FactoryClosedError",
    "apply_auth_headers",
    "build_auth_headers",
    "create_test_async_client",
    "create_test_client",
    "has_content",
]
