"""Student note endpoints."""

from __future__ import annotations

from typing import Any

from portalclient.api.base import ApiResource


class NotesApi(ApiResource):
    prefix = "/notes"

    async def for_student(
        self, student_id: str | int, filters: dict[str, Any] | None = None
    ) -> Any:
        return await self.get(
            self.path("students", student_id), params=filters, context="Loading notes"
        )

    async def create(self, student_id: str | int, data: dict[str, Any]) -> Any:
        return await self.post(
            self.path("students", student_id), json=data, context="Saving note"
        )

    async def update(self, note_id: str | int, data: dict[str, Any]) -> Any:
        return await self.put(self.path(note_id), json=data, context="Updating note")

    async def remove(self, note_id: str | int) -> Any:
        return await self.delete(self.path(note_id), context="Deleting note")

    async def retrieve(self, note_id: str | int) -> Any:
        return await self.get(self.path(note_id), context="Loading note")

    async def search(self, query: str, filters: dict[str, Any] | None = None) -> Any:
        params = {"q": query, **(filters or {})}
        return await self.get(self.path("search"), params=params, context="Searching notes")
