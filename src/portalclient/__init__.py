"""portalclient: Resilient async client for the counselling portal API."""

from __future__ import annotations

__version__ = "0.1.0"

from portalclient.api.client import PortalClient
from portalclient.auth.provider import CredentialProvider
from portalclient.auth.session import Session
from portalclient.core.pipeline import CancellationToken
from portalclient.core.pipeline import RequestOutcome
from portalclient.core.pipeline import RequestPipeline
from portalclient.core.retry import RetryPolicy
from portalclient.display.presenter import handle_api_error
from portalclient.display.presenter import present
from portalclient.errors.types import ApiError
from portalclient.errors.types import ErrorKind
from portalclient.errors.types import NormalizedError
from portalclient.models import HTTPMethod
from portalclient.models import RequestSpec

__all__ = [
    "__version__",
    "PortalClient",
    "RequestPipeline",
    "RequestOutcome",
    "RequestSpec",
    "HTTPMethod",
    "RetryPolicy",
    "CancellationToken",
    "CredentialProvider",
    "Session",
    "ErrorKind",
    "NormalizedError",
    "ApiError",
    "present",
    "handle_api_error",
]


def main() -> None:
    """Entry point for the portalclient CLI."""
    from portalclient.cli.app import run_app

    run_app()
