"""Credential provider: attaches auth to requests and owns session writes."""

from __future__ import annotations

import logging
from typing import Callable

import httpx

from portalclient.auth.base import BearerCredentials
from portalclient.auth.session import Session
from portalclient.config.settings import DEFAULT_LOGIN_ROUTE
from portalclient.models import UserIdentity

logger = logging.getLogger(__name__)

Navigator = Callable[[str], None]


def log_navigation(route: str) -> None:
    """Default navigator: there is no router outside a browser, so just log."""
    logger.info("Session invalidated; redirecting to %s", route)


class CredentialProvider:
    """Supplies the bearer token and handles invalidated sessions.

    This is the only component that writes to the session.
    """

    def __init__(
        self,
        session: Session,
        navigate: Navigator | None = None,
        login_route: str = DEFAULT_LOGIN_ROUTE,
    ) -> None:
        self.session = session
        self.navigate = navigate or log_navigation
        self.login_route = login_route

    def attach(self, request: httpx.Request) -> httpx.Request:
        """Set the bearer header from the current session, if there is a token."""
        token = self.session.token
        if token:
            request.headers.update(BearerCredentials(token).to_headers())
        return request

    def on_auth_invalidated(self) -> bool:
        """Clear the session and navigate to the login route.

        Concurrent invalidations clear and navigate once.

        Returns:
            True if this call performed the invalidation
        """
        if not self.session.clear():
            logger.debug("Session already invalidated")
            return False

        self.navigate(self.login_route)
        return True

    def sign_in(self, token: str, user: UserIdentity | None = None) -> None:
        """Store the credentials returned by a successful login."""
        self.session.set(token, user)
        logger.info("Signed in as %s", user.display_name if user else "unknown user")

    def sign_out(self) -> None:
        """Forget the local session without navigating."""
        self.session.clear()
