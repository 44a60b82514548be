"""Appointment endpoints."""

from __future__ import annotations

from typing import Any

from portalclient.api.base import ApiResource


class AppointmentsApi(ApiResource):
    """Booking, rescheduling and counselor availability."""

    prefix = "/appointments"

    async def list(self, filters: dict[str, Any] | None = None) -> Any:
        """List appointments, optionally filtered (status, date range, ...)."""
        return await self.get(self.path(), params=filters, context="Loading appointments")

    async def create(self, data: dict[str, Any]) -> Any:
        return await self.post(self.path(), json=data, context="Booking appointment")

    async def retrieve(self, appointment_id: str | int) -> Any:
        return await self.get(self.path(appointment_id), context="Loading appointment")

    async def update(self, appointment_id: str | int, data: dict[str, Any]) -> Any:
        return await self.put(
            self.path(appointment_id), json=data, context="Updating appointment"
        )

    async def cancel(self, appointment_id: str | int) -> Any:
        return await self.delete(
            self.path(appointment_id), context="Cancelling appointment"
        )

    async def availability(self, counselor_id: str | int, date: str | None = None) -> Any:
        """Get a counselor's free slots, for one day when ``date`` is given."""
        return await self.get(
            self.path("availability", counselor_id),
            params={"date": date},
            context="Loading availability",
        )
