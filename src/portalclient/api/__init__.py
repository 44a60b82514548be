"""Typed resources for the portal REST API."""

from portalclient.api.appointments import AppointmentsApi
from portalclient.api.auth import AuthApi
from portalclient.api.base import ApiResource, decode_body
from portalclient.api.client import PortalClient
from portalclient.api.notes import NotesApi
from portalclient.api.notifications import NotificationsApi
from portalclient.api.users import UsersApi

__all__ = [
    "PortalClient",
    "ApiResource",
    "decode_body",
    "AuthApi",
    "UsersApi",
    "AppointmentsApi",
    "NotesApi",
    "NotificationsApi",
]
