"""Pytest configuration and shared fixtures for portalclient tests."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Callable, Generator
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

import portalclient.config.settings
import portalclient.core.http
from portalclient.auth.provider import CredentialProvider
from portalclient.auth.session import Session
from portalclient.core.pipeline import RequestPipeline
from portalclient.core.retry import RetryPolicy
from portalclient.models import UserIdentity

BASE_URL = "http://portal.test/api"

ENV_VARS = (
    "PORTALCLIENT_ENV",
    "PORTALCLIENT_BASE_URL",
    "PORTALCLIENT_TIMEOUT",
    "PORTALCLIENT_LOG_LEVEL",
    "PORTALCLIENT_NO_COLOR",
)


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Point config and state at a temp dir and reset module singletons."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PORTALCLIENT_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setenv("PORTALCLIENT_STATE_DIR", str(tmp_path / "state"))

    portalclient.config.settings._config = None
    portalclient.core.http._client = None
    yield tmp_path
    portalclient.config.settings._config = None
    portalclient.core.http._client = None
    # Drop handlers the CLI callback installed on captured streams
    package_logger = logging.getLogger("portalclient")
    package_logger.handlers = []
    package_logger.setLevel(logging.NOTSET)


class Responder:
    """MockTransport handler that replays a script of outcomes.

    Each item is an ``httpx.Response`` to return, or an ``httpx.RequestError``
    subclass to raise for that dispatch. Requests are recorded in order.
    """

    def __init__(self, *script: httpx.Response | type[httpx.RequestError]) -> None:
        self.script = list(script)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(item, type):
            raise item("simulated transport failure", request=request)
        # Fresh copy so a repeated script item can be sent more than once
        return httpx.Response(item.status_code, headers=item.headers, content=item.content)

    @property
    def calls(self) -> int:
        return len(self.requests)


def error_response(status: int, message: str | None = None, code: str | None = None) -> httpx.Response:
    """Response shaped like the portal API's error envelope."""
    error: dict[str, Any] = {}
    if message is not None:
        error["message"] = message
    if code is not None:
        error["code"] = code
    return httpx.Response(status, json={"success": False, "error": error})


@pytest.fixture
def user() -> UserIdentity:
    """Sample signed-in user."""
    return UserIdentity(id=7, email="sam@example.edu", name="Sam Rivera", role="student")


@pytest.fixture
def session(user: UserIdentity) -> Session:
    """In-memory session holding a token."""
    return Session(token="tok-123", user=user)


@pytest.fixture
def navigate() -> MagicMock:
    """Navigator that records login redirects."""
    return MagicMock()


@pytest.fixture
def provider(session: Session, navigate: MagicMock) -> CredentialProvider:
    """Credential provider over the sample session."""
    return CredentialProvider(session, navigate=navigate)


@pytest.fixture
def sleep() -> AsyncMock:
    """Backoff sleep that returns immediately and records delays."""
    return AsyncMock()


@pytest.fixture
def make_client() -> Callable[[Responder], httpx.AsyncClient]:
    """Factory for clients whose transport is a Responder."""

    def factory(responder: Responder) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=BASE_URL,
            transport=httpx.MockTransport(responder),
            headers={"Content-Type": "application/json"},
        )

    return factory


@pytest.fixture
def make_pipeline(
    make_client: Callable[[Responder], httpx.AsyncClient],
    provider: CredentialProvider,
    sleep: AsyncMock,
) -> Callable[..., RequestPipeline]:
    """Factory for pipelines over a scripted transport with instant backoff."""

    def factory(responder: Responder, policy: RetryPolicy | None = None, **kwargs: Any) -> RequestPipeline:
        kwargs.setdefault("sleep", sleep)
        return RequestPipeline(make_client(responder), provider, policy or RetryPolicy(), **kwargs)

    return factory


@pytest.fixture
def cli_ctx() -> MagicMock:
    """Typer context with default global options."""
    ctx = MagicMock()
    ctx.meta = {"json": False, "verbose": False, "quiet": False, "no_color": True}
    return ctx


@pytest.fixture
def install_portal(
    make_client: Callable[[Responder], httpx.AsyncClient],
    sleep: AsyncMock,
    navigate: MagicMock,
    monkeypatch: pytest.MonkeyPatch,
) -> Callable[[Responder], Responder]:
    """Make CLI commands talk to a scripted transport.

    The commands get a PortalClient over the Responder's transport with the
    persisted session loaded.
    """
    from portalclient.api.client import PortalClient
    from portalclient.cli.commands import auth as auth_module
    from portalclient.cli.commands import request as request_module
    from portalclient.config.credentials import SessionStore
    from portalclient.config.settings import Config

    def install(responder: Responder) -> Responder:
        @asynccontextmanager
        async def portal_client(ctx):
            yield PortalClient(
                Config(),
                session=Session.load(SessionStore()),
                http_client=make_client(responder),
                navigate=navigate,
                sleep=sleep,
            )

        monkeypatch.setattr(auth_module, "portal_client", portal_client)
        monkeypatch.setattr(request_module, "portal_client", portal_client)
        return responder

    return install
