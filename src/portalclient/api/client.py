"""Portal API client facade."""

from __future__ import annotations

from typing import Any

import httpx

from portalclient.api.appointments import AppointmentsApi
from portalclient.api.auth import AuthApi
from portalclient.api.notes import NotesApi
from portalclient.api.notifications import NotificationsApi
from portalclient.api.users import UsersApi
from portalclient.auth.provider import CredentialProvider, Navigator
from portalclient.auth.session import Session
from portalclient.config.credentials import SessionStore
from portalclient.config.settings import Config, get_config
from portalclient.core.http import create_http_client
from portalclient.core.orchestrator import execute_all
from portalclient.core.pipeline import (
    CancellationToken,
    RequestOutcome,
    RequestPipeline,
    RetryCallback,
)
from portalclient.core.retry import RetryPolicy
from portalclient.models import RequestSpec


class PortalClient:
    """Wires config, session, credentials, transport and pipeline together.

    Usage:
        async with PortalClient() as portal:
            await portal.auth.login(email, password)
            students = await portal.users.students()
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        session: Session | None = None,
        navigate: Navigator | None = None,
        http_client: httpx.AsyncClient | None = None,
        on_retry: RetryCallback | None = None,
        **pipeline_kwargs: Any,
    ) -> None:
        self.config = config or get_config()

        if session is None:
            store = SessionStore(use_keyring=self.config.session.use_keyring)
            session = Session.load(store)
        self.session = session
        self.credentials = CredentialProvider(
            session, navigate=navigate, login_route=self.config.session.login_route
        )

        self._owns_http = http_client is None
        self.http = http_client or create_http_client(self.config.api)

        self.pipeline = RequestPipeline(
            self.http,
            self.credentials,
            RetryPolicy.from_settings(self.config.retry),
            timeout=self.config.api.timeout,
            on_retry=on_retry,
            **pipeline_kwargs,
        )

        self.auth = AuthApi(self.pipeline, self.credentials)
        self.users = UsersApi(self.pipeline)
        self.appointments = AppointmentsApi(self.pipeline)
        self.notes = NotesApi(self.pipeline)
        self.notifications = NotificationsApi(self.pipeline)

    async def execute(
        self, spec: RequestSpec, cancel: CancellationToken | None = None
    ) -> RequestOutcome:
        return await self.pipeline.execute(spec, cancel)

    async def request(
        self, spec: RequestSpec, cancel: CancellationToken | None = None
    ) -> httpx.Response:
        return await self.pipeline.request(spec, cancel)

    async def execute_all(self, specs: list[RequestSpec]) -> list[RequestOutcome]:
        return await execute_all(
            self.pipeline, specs, max_concurrent=self.config.api.max_concurrent
        )

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> PortalClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
