"""Tests for the error presentation adapter and its renderers."""
from __future__ import annotations

import json
import logging
from io import StringIO
from unittest.mock import MagicMock

import httpx
import msgspec
import pytest
from rich.console import Console
from rich.panel import Panel

from portalclient.display.json import ErrorResponse
from portalclient.display.json import decode_json
from portalclient.display.json import encode_json
from portalclient.display.json import from_presentation
from portalclient.display.json import output_json
from portalclient.display.json import output_json_error
from portalclient.display.json import output_json_pretty
from portalclient.display.presenter import ToastConfig
from portalclient.display.presenter import build_log_record
from portalclient.display.presenter import emit_log_record
from portalclient.display.presenter import handle_api_error
from portalclient.display.presenter import present
from portalclient.display.rich import format_identity
from portalclient.display.rich import make_toast_printer
from portalclient.display.rich import render_toast
from portalclient.errors.types import ApiError
from portalclient.errors.types import ErrorKind
from portalclient.errors.types import FailureDescriptor
from portalclient.errors.types import NormalizedError
from portalclient.models import UserIdentity


def normalized(
    kind: ErrorKind,
    status: int | None = None,
    server_message: str | None = None,
) -> NormalizedError:
    failure = FailureDescriptor(
        has_response=status is not None,
        status_code=status,
        status_text="Service Unavailable" if status == 503 else None,
        server_message=server_message,
        url="http://portal.test/api/notes",
        method="POST",
    )
    return NormalizedError(
        kind=kind,
        message="pipeline message",
        status_code=status,
        is_network_error=status is None,
        failure=failure,
    )


class TestPresent:
    """Tests for present()."""

    def test_default_message_with_context(self):
        presentation = present(normalized(ErrorKind.SERVER, 503), "Saving note")

        assert presentation.kind == ErrorKind.SERVER
        assert presentation.message == "Saving note: Server error. Please try again later."
        assert presentation.toast.message == presentation.message
        assert presentation.toast.description == "Our team has been notified"
        assert presentation.toast.duration_ms == 5000

    def test_presentation_wording(self):
        assert present(normalized(ErrorKind.AUTHENTICATION, 401)).message == "Please log in to continue."
        assert present(normalized(ErrorKind.VALIDATION, 400)).message == "Please check your input and try again."

    def test_server_message_not_prefixed(self):
        presentation = present(normalized(ErrorKind.CONFLICT, 409, "Slot already booked"), "Booking")
        assert presentation.message == "Slot already booked"

    def test_long_server_message_ignored(self):
        presentation = present(normalized(ErrorKind.VALIDATION, 422, "z" * 300))
        assert presentation.message == "Please check your input and try again."

    def test_network_toast(self):
        presentation = present(normalized(ErrorKind.NETWORK))
        assert presentation.toast.description == "Check your internet connection"
        assert presentation.toast.level == "error"

    def test_default_toast_duration(self):
        presentation = present(normalized(ErrorKind.NOT_FOUND, 404))
        assert presentation.toast.description is None
        assert presentation.toast.duration_ms == 4000

    def test_presenting_twice_is_identical(self):
        """Presenting has no side effects on the error."""
        error = normalized(ErrorKind.SERVER, 503)
        assert present(error, "x") == present(error, "x")

    @pytest.mark.parametrize("kind", list(ErrorKind))
    def test_message_never_empty(self, kind):
        assert present(NormalizedError(kind=kind, message="")).message


class TestLogRecord:
    """Tests for the structured diagnostic record."""

    def test_fields(self):
        error = normalized(ErrorKind.SERVER, 503)
        record = build_log_record(error, "Saving note", {"note_id": 4})

        assert record.kind == ErrorKind.SERVER
        assert record.status == 503
        assert record.status_text == "Service Unavailable"
        assert record.url == "http://portal.test/api/notes"
        assert record.method == "POST"
        assert record.context == "Saving note"
        assert record.extra == {"note_id": 4}
        assert record.timestamp == error.timestamp.isoformat()

    def test_encodes_without_empty_fields(self):
        record = build_log_record(NormalizedError(kind=ErrorKind.UNKNOWN, message="x"))
        data = msgspec.to_builtins(record)

        assert data["kind"] == "unknown"
        assert "status" not in data
        assert "context" not in data

    def test_emit(self, caplog):
        record = build_log_record(normalized(ErrorKind.NOT_FOUND, 404), "Loading note")
        with caplog.at_level(logging.ERROR, logger="portalclient.display.presenter"):
            emit_log_record(record)

        assert "API error: Loading note: pipeline message" in caplog.text
        assert caplog.records[-1].api_error["status"] == 404


class TestHandleApiError:
    """Tests for handle_api_error."""

    def test_logs_and_notifies(self, caplog):
        notify = MagicMock()
        with caplog.at_level(logging.ERROR, logger="portalclient.display.presenter"):
            presentation = handle_api_error(normalized(ErrorKind.SERVER, 503), "Saving", notify=notify)

        notify.assert_called_once_with(presentation.toast)
        assert len(caplog.records) == 1

    def test_unserializable_extra_is_stringified(self, caplog):
        marker = object()
        with caplog.at_level(logging.ERROR, logger="portalclient.display.presenter"):
            presentation = handle_api_error(
                normalized(ErrorKind.SERVER, 503), "Saving", extra={"owner": marker}
            )

        assert presentation.log_record.extra == {"owner": marker}
        assert caplog.records[-1].api_error["extra"] == {"owner": str(marker)}

    def test_error_context_used_when_none_given(self):
        error = NormalizedError(kind=ErrorKind.NOT_FOUND, message="x", context="Loading note")
        presentation = handle_api_error(error, log=False)

        assert presentation.message == "Loading note: The requested resource was not found."
        assert presentation.log_record.context == "Loading note"

    def test_silent(self, caplog):
        notify = MagicMock()
        with caplog.at_level(logging.ERROR, logger="portalclient.display.presenter"):
            handle_api_error(normalized(ErrorKind.SERVER, 503), show_toast=False, log=False, notify=notify)

        notify.assert_not_called()
        assert not caplog.records

    def test_accepts_api_error(self):
        presentation = handle_api_error(ApiError(normalized(ErrorKind.AUTHORIZATION, 403)), log=False)
        assert presentation.kind == ErrorKind.AUTHORIZATION
        assert presentation.toast.duration_ms == 6000

    def test_classifies_raw_http_error(self):
        request = httpx.Request("GET", "http://portal.test/api/users/9")
        response = httpx.Response(404, request=request, json={"error": {"message": "No such user"}})
        error = httpx.HTTPStatusError("missing", request=request, response=response)

        presentation = handle_api_error(error, "Loading user", log=False)

        assert presentation.kind == ErrorKind.NOT_FOUND
        assert presentation.message == "No such user"

    def test_classifies_unknown_exception(self):
        presentation = handle_api_error(RuntimeError("boom"), log=False)
        assert presentation.kind == ErrorKind.UNKNOWN
        assert presentation.message == "An unexpected error occurred. Please try again."


class TestRichRendering:
    """Tests for display/rich.py."""

    def test_render_toast(self):
        panel = render_toast(ToastConfig(message="Saving: failed", description="Try later"))
        assert isinstance(panel, Panel)

        console = Console(file=StringIO(), width=80)
        console.print(panel)
        output = console.file.getvalue()
        assert "Saving: failed" in output
        assert "Try later" in output

    def test_toast_printer(self):
        console = Console(file=StringIO(), width=80)
        make_toast_printer(console)(ToastConfig(message="Please log in to continue."))
        assert "Please log in to continue." in console.file.getvalue()

    def test_format_identity(self):
        user = UserIdentity(id=1, email="a@b.edu", name="Ana", role="counselor")
        assert format_identity(user).plain == "Ana <a@b.edu> • counselor"

    def test_format_identity_email_only(self):
        assert format_identity(UserIdentity(id=1, email="a@b.edu")).plain == "a@b.edu"

    def test_format_identity_signed_out(self):
        assert format_identity(None).plain == "Not signed in"


class TestJsonOutput:
    """Tests for display/json.py."""

    def test_from_presentation(self):
        presentation = present(normalized(ErrorKind.SERVER, 503), "Saving")
        response = from_presentation(presentation)

        assert isinstance(response, ErrorResponse)
        assert response.error.kind == "server"
        assert response.error.status_code == 503
        assert response.error.log.context == "Saving"

    def test_output_json_error(self, capsys):
        output_json_error(present(normalized(ErrorKind.NETWORK), "Loading"))
        data = json.loads(capsys.readouterr().out)

        assert data["error"]["kind"] == "network"
        assert data["error"]["is_network_error"] is True
        assert data["error"]["message"].startswith("Loading: ")

    def test_output_json(self, capsys):
        output_json({"a": 1})
        assert capsys.readouterr().out == '{"a":1}\n'

    def test_output_json_pretty(self, capsys):
        output_json_pretty({"a": 1})
        assert capsys.readouterr().out == '{\n  "a": 1\n}\n'

    def test_encode_decode(self):
        assert decode_json(encode_json({"x": [1, 2]})) == {"x": [1, 2]}
        assert decode_json(b'{"token":"t","user":null}', type_hint=dict) == {"token": "t", "user": None}
