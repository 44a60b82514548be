"""Notification endpoints."""

from __future__ import annotations

from typing import Any

from portalclient.api.base import ApiResource


class NotificationsApi(ApiResource):
    prefix = "/notifications"

    async def list(self, filters: dict[str, Any] | None = None) -> Any:
        return await self.get(self.path(), params=filters, context="Loading notifications")

    async def mark_read(self, notification_id: str | int) -> Any:
        return await self.put(
            self.path(notification_id, "read"), context="Updating notification"
        )

    async def mark_all_read(self) -> Any:
        return await self.put(self.path("mark-all-read"), context="Updating notifications")

    async def remove(self, notification_id: str | int) -> Any:
        return await self.delete(
            self.path(notification_id), context="Deleting notification"
        )

    async def unread_count(self) -> int:
        body = await self.get(self.path("unread-count"), context="Loading notifications")
        return int(body["count"])

    async def clear_read(self) -> Any:
        """Delete every notification already marked as read."""
        return await self.delete(self.path("clear-read"), context="Clearing notifications")
