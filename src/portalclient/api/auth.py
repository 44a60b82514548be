"""Authentication endpoints."""

from __future__ import annotations

import logging

import msgspec

from portalclient.api.base import ApiResource
from portalclient.auth.provider import CredentialProvider
from portalclient.core.pipeline import RequestPipeline
from portalclient.errors.types import ApiError
from portalclient.models import LoginResult, UserIdentity

logger = logging.getLogger(__name__)


class AuthApi(ApiResource):
    """Login, logout and account endpoints."""

    prefix = "/auth"

    def __init__(self, pipeline: RequestPipeline, credentials: CredentialProvider) -> None:
        super().__init__(pipeline)
        self.credentials = credentials

    async def login(self, email: str, password: str) -> LoginResult:
        """Log in and store the returned token and user in the session."""
        body = await self.post(
            self.path("login"),
            json={"email": email, "password": password},
            context="Login",
        )
        result = msgspec.convert(body, type=LoginResult)
        self.credentials.sign_in(result.token, result.user)
        return result

    async def logout(self) -> None:
        """Log out on the server; the local session is cleared regardless."""
        try:
            await self.post(self.path("logout"), context="Logout")
        except ApiError as e:
            logger.info("Server logout failed (%s); clearing local session", e.kind)
        finally:
            self.credentials.sign_out()

    async def current_user(self) -> UserIdentity:
        """Get the user the current token belongs to."""
        body = await self.get(self.path("me"), context="Loading profile")
        return msgspec.convert(body["user"], type=UserIdentity)

    async def change_password(self, current_password: str, new_password: str) -> dict:
        return await self.post(
            self.path("change-password"),
            json={"currentPassword": current_password, "newPassword": new_password},
            context="Changing password",
        )
