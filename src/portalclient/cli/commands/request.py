"""Raw request command."""

from __future__ import annotations

import msgspec
import typer

from portalclient.api.base import decode_body
from portalclient.cli.app import app
from portalclient.cli.app import make_console
from portalclient.cli.app import portal_client
from portalclient.cli.display import report_api_error
from portalclient.cli.display import show_body
from portalclient.errors.types import ApiError
from portalclient.models import HTTPMethod
from portalclient.models import RequestSpec


def parse_method(value: str) -> HTTPMethod:
    try:
        return HTTPMethod(value.upper())
    except ValueError:
        choices = ", ".join(m.value for m in HTTPMethod)
        raise typer.BadParameter(f"must be one of {choices}") from None


def parse_params(values: list[str] | None) -> dict[str, str] | None:
    """Parse repeated ``key=value`` options into a dict."""
    if not values:
        return None
    params: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {item!r}")
        params[key] = value
    return params


def parse_data(value: str | None) -> object:
    if value is None:
        return None
    try:
        return msgspec.json.decode(value.encode())
    except msgspec.DecodeError as e:
        raise typer.BadParameter(f"invalid JSON: {e}") from None


@app.command("request")
async def request_command(
    ctx: typer.Context,
    method: str = typer.Argument(..., help="HTTP method (GET, POST, PUT, PATCH, DELETE)"),
    path: str = typer.Argument(..., help="Path relative to the API base URL"),
    data: str = typer.Option(None, "--data", "-d", help="JSON request body"),
    param: list[str] = typer.Option(
        None, "--param", "-P", help="Query parameter as key=value (repeatable)"
    ),
    context: str = typer.Option(
        None, "--context", "-c", help="Operation label used in error messages"
    ),
    max_attempts: int = typer.Option(
        None, "--max-attempts", min=1, help="Override the configured attempt limit"
    ),
    base_delay: float = typer.Option(
        None, "--base-delay", min=0.0, help="Override the first retry delay (seconds)"
    ),
) -> None:
    """Send a request through the retrying pipeline and print the response."""
    console = make_console(ctx)
    verbose = ctx.meta.get("verbose", False)

    spec = RequestSpec(
        method=parse_method(method),
        url=path,
        params=parse_params(param),
        json=parse_data(data),
        context=context,
        max_attempts=max_attempts,
        base_delay=base_delay,
    )

    async with portal_client(ctx) as portal:
        outcome = await portal.execute(spec)
        try:
            response = outcome.unwrap()
        except ApiError as e:
            report_api_error(ctx, e, context)

    if verbose and not ctx.meta.get("json", False):
        console.print(
            f"[dim]{response.status_code} {response.reason_phrase} "
            f"after {outcome.attempts} attempt(s)[/dim]"
        )
    try:
        body = decode_body(response)
    except ValueError:
        # Not JSON
        body = response.text
    show_body(ctx, body, console)
