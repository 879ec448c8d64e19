"""Authentication headers for in-process test clients.

Two modes are supported:
1. Bearer token: ``Authorization: Bearer <token>`` and nothing else
2. Test identity: ``Authorization: Test`` plus optional
   ``AuthorizationUserId``, ``AuthorizationEmail`` and ``AuthorizationRoles``

A non-empty token always wins; identity arguments are ignored in that case.
Values are attached verbatim; the test authentication handler in the app under
test is responsible for interpreting them.
"""

import logging
from collections.abc import Iterable
from typing import TypeVar

import httpx

from .logging_config import log_with_context

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"
AUTHORIZATION_USER_ID_HEADER = "AuthorizationUserId"
AUTHORIZATION_EMAIL_HEADER = "AuthorizationEmail"
AUTHORIZATION_ROLES_HEADER = "AuthorizationRoles"

BEARER_SCHEME = "Bearer"

# Name of the "Test" deploy environment; same value for every test-mode call.
TEST_AUTH_SCHEME = "Test"

ROLES_SEPARATOR = ","

IDENTITY_HEADERS = (
    AUTHORIZATION_USER_ID_HEADER,
    AUTHORIZATION_EMAIL_HEADER,
    AUTHORIZATION_ROLES_HEADER,
)

ClientT = TypeVar("ClientT", httpx.Client, httpx.AsyncClient)


def has_content(value: str | None) -> bool:
    """Return True unless value is None, empty or whitespace only."""
    return value is not None and value.strip() != ""


def join_roles(roles: Iterable[str] | None) -> str | None:
    """Comma-join role names in order, or None when there are none.

    A bare string is a single role name, not a sequence of characters.
    """
    if roles is None:
        return None

    role_list = [roles] if isinstance(roles, str) else list(roles)
    if not role_list:
        return None

    joined = role_list[0] if len(role_list) == 1 else ROLES_SEPARATOR.join(role_list)
    return joined if has_content(joined) else None


def build_auth_headers(
    user_id: str | None = None,
    email: str | None = None,
    token: str | None = None,
    roles: Iterable[str] | None = None,
) -> dict[str, str]:
    """
    Build the authentication headers for a test client.

    Args:
        user_id: Test user identifier; omitted when empty
        email: Test user email; omitted when empty
        token: Pre-issued bearer token; when given, all other arguments are ignored
        roles: Role names, joined with commas; omitted when empty

    Returns:
        Mapping of header name to value, always containing ``Authorization``
    """
    if has_content(token):
        return {AUTHORIZATION_HEADER: f"{BEARER_SCHEME} {token}"}

    headers = {AUTHORIZATION_HEADER: TEST_AUTH_SCHEME}

    if has_content(user_id):
        headers[AUTHORIZATION_USER_ID_HEADER] = user_id

    if has_content(email):
        headers[AUTHORIZATION_EMAIL_HEADER] = email

    joined_roles = join_roles(roles)
    if joined_roles is not None:
        headers[AUTHORIZATION_ROLES_HEADER] = joined_roles

    return headers


def auth_mode(headers: dict[str, str]) -> str:
    """Return "bearer" or "test" for a mapping built by build_auth_headers."""
    if headers.get(AUTHORIZATION_HEADER, "").startswith(f"{BEARER_SCHEME} "):
        return "bearer"
    return "test"


def apply_auth_headers(
    client: ClientT,
    user_id: str | None = None,
    email: str | None = None,
    token: str | None = None,
    roles: Iterable[str] | None = None,
) -> ClientT:
    """
    Attach authentication headers to an existing client.

    The client's ``Authorization`` header is replaced, and identity headers
    left over from an earlier call are dropped so only one mode is ever active.

    Args:
        client: httpx.Client (including Starlette's TestClient) or httpx.AsyncClient
        user_id: Test user identifier
        email: Test user email
        token: Bearer token; takes precedence over the identity arguments
        roles: Role names

    Returns:
        The same client, for chaining
    """
    headers = build_auth_headers(user_id=user_id, email=email, token=token, roles=roles)

    client_headers = client.headers
    # Values go on verbatim as UTF-8; an ASCII-only header set would reject them.
    if client_headers.encoding == "ascii":
        client_headers.encoding = "utf-8"

    for name in IDENTITY_HEADERS:
        client_headers.pop(name, None)
    for name, value in headers.items():
        client_headers[name] = value

    mode = auth_mode(headers)
    log_with_context(
        logger,
        logging.DEBUG,
        f"Attached {mode} auth headers to test client",
        auth_mode=mode,
        header_names=sorted(headers),
    )
    return client
