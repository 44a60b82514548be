"""User endpoints."""

from __future__ import annotations

from typing import Any

from portalclient.api.base import ApiResource


class UsersApi(ApiResource):
    """User management (admin and chairperson) and directory lookups."""

    prefix = "/users"

    async def list(self) -> Any:
        return await self.get(self.path(), context="Loading users")

    async def create(self, data: dict[str, Any]) -> Any:
        return await self.post(self.path(), json=data, context="Creating user")

    async def retrieve(self, user_id: str | int) -> Any:
        return await self.get(self.path(user_id), context="Loading user")

    async def update(self, user_id: str | int, data: dict[str, Any]) -> Any:
        return await self.put(self.path(user_id), json=data, context="Updating user")

    async def remove(self, user_id: str | int) -> Any:
        return await self.delete(self.path(user_id), context="Deleting user")

    async def students(self) -> list[dict[str, Any]]:
        body = await self.get(self.path("students"), context="Loading students")
        return body["data"]

    async def counselors(self) -> list[dict[str, Any]]:
        body = await self.get(self.path("counselors"), context="Loading counselors")
        return body["data"]
