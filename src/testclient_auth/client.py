"""Create authenticated clients for integration tests.

Usage:
    factory = AppFactory(app)

    # Test identity headers, read by the app's test authentication handler
    client = create_test_client(factory, user_id="u1", email="a@b.com", roles=["admin"])

    # Pre-issued token
    client = create_test_client(factory, token=jwt)
"""

from collections.abc import Iterable

import httpx

from .factory import AsyncClientFactory, ClientFactory
from .headers import apply_auth_headers


def create_test_client(
    factory: ClientFactory,
    user_id: str | None = None,
    email: str | None = None,
    token: str | None = None,
    roles: Iterable[str] | None = None,
) -> httpx.Client:
    """
    Create a new client from the factory with authentication headers attached.

    If a token is given, the client uses Bearer authentication with it and no
    test identity headers are sent. Otherwise ``Authorization: Test`` is sent
    along with whichever of user id, email and roles have content.

    Args:
        factory: Host handle producing clients bound to the app under test
        user_id: Test user identifier; header omitted when None or empty
        email: Test user email; header omitted when None or empty
        token: Bearer token; takes precedence over all other arguments
        roles: Role names (a bare string is one role); header omitted when None or empty

    Returns:
        A new client owned by the caller
    """
    client = factory.create_client()
    return apply_auth_headers(client, user_id=user_id, email=email, token=token, roles=roles)


def create_test_async_client(
    factory: AsyncClientFactory,
    user_id: str | None = None,
    email: str | None = None,
    token: str | None = None,
    roles: Iterable[str] | None = None,
) -> httpx.AsyncClient:
    """Async counterpart of create_test_client, using factory.create_async_client()."""
    client = factory.create_async_client()
    return apply_auth_headers(client, user_id=user_id, email=email, token=token, roles=roles)
