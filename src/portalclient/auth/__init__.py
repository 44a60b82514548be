"""Authentication for portalclient."""
from __future__ import annotations

from portalclient.auth.base import AuthCredentials
from portalclient.auth.base import BearerCredentials
from portalclient.auth.provider import CredentialProvider
from portalclient.auth.provider import Navigator
from portalclient.auth.provider import log_navigation
from portalclient.auth.session import Session
from portalclient.auth.session import SessionState

__all__ = [
    "AuthCredentials",
    "BearerCredentials",
    "CredentialProvider",
    "Navigator",
    "log_navigation",
    "Session",
    "SessionState",
]
