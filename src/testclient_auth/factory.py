"""In-process application host for integration tests.

``AppFactory`` wraps an ASGI application and hands out HTTP clients wired
directly to it, with no network listener involved. It keeps track of every
client it creates so a single ``close()`` at teardown releases them all.
"""

import logging
from typing import Protocol, runtime_checkable

import httpx
from fastapi.testclient import TestClient
from starlette.types import ASGIApp

from .config import FactoryConfig, get_settings

logger = logging.getLogger(__name__)


class ClientAuthError(Exception):
    """Base exception for testclient_auth errors."""


class FactoryClosedError(ClientAuthError):
    """A client was requested from a factory that has already been closed."""

    pass


@runtime_checkable
class ClientFactory(Protocol):
    """Anything able to produce a sync client bound to an in-process app."""

    def create_client(self) -> httpx.Client: ...


@runtime_checkable
class AsyncClientFactory(Protocol):
    """Anything able to produce an async client bound to an in-process app."""

    def create_async_client(self) -> httpx.AsyncClient: ...


class AppFactory:
    """Host handle for an ASGI app under test."""

    def __init__(self, app: ASGIApp, config: FactoryConfig | None = None):
        """
        Initialize the factory.

        Args:
            app: ASGI application under test (FastAPI, Starlette, ...)
            config: Client options; defaults to ``get_settings().factory``
        """
        self.app = app
        self.config = config or get_settings().factory
        self._clients: list[httpx.Client] = []
        self._async_clients: list[httpx.AsyncClient] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def client_count(self) -> int:
        """Number of clients handed out and not yet closed by this factory."""
        return len(self._clients) + len(self._async_clients)

    def _ensure_open(self) -> None:
        if self._closed:
            logger.warning("Client requested from a closed AppFactory")
            raise FactoryClosedError("AppFactory is closed; create a new factory")

    def create_client(self) -> TestClient:
        """
        Create a sync test client bound to the app.

        The client is not entered as a context manager, so app lifespan events
        are not run; enter it (``with client:``) when the app needs them.

        Raises:
            FactoryClosedError: If the factory has been closed
        """
        self._ensure_open()
        client = TestClient(
            self.app,
            base_url=self.config.base_url,
            raise_server_exceptions=self.config.raise_server_exceptions,
            follow_redirects=self.config.follow_redirects,
        )
        self._clients.append(client)
        logger.debug(f"Created test client for {self.config.base_url}")
        return client

    def create_async_client(self) -> httpx.AsyncClient:
        """
        Create an async client bound to the app through ``httpx.ASGITransport``.

        Raises:
            FactoryClosedError: If the factory has been closed
        """
        self._ensure_open()
        transport = httpx.ASGITransport(app=self.app)
        client = httpx.AsyncClient(
            transport=transport,
            base_url=self.config.base_url,
            follow_redirects=self.config.follow_redirects,
        )
        self._async_clients.append(client)
        logger.debug(f"Created async test client for {self.config.base_url}")
        return client

    def close(self) -> None:
        """Close every sync client this factory created and refuse new ones.

        Async clients need an event loop to close; use ``aclose()`` when any
        were created.
        """
        if self._async_clients:
            logger.warning(
                f"AppFactory.close() leaves {len(self._async_clients)} async client(s) open; "
                "use aclose()"
            )
        self._close_sync_clients()
        self._closed = True

    async def aclose(self) -> None:
        """Close every client this factory created and refuse new ones."""
        self._close_sync_clients()
        while self._async_clients:
            await self._async_clients.pop().aclose()
        self._closed = True

    def _close_sync_clients(self) -> None:
        while self._clients:
            self._clients.pop().close()

    def __enter__(self) -> "AppFactory":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    async def __aenter__(self) -> "AppFactory":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.aclose()
