"""Display utilities for portalclient.

This module provides the error presentation adapter and its renderers for
both terminal (Rich-based) and JSON output modes.
"""
from __future__ import annotations

from portalclient.display.json import decode_json
from portalclient.display.json import encode_json
from portalclient.display.json import from_presentation
from portalclient.display.json import output_json
from portalclient.display.json import output_json_pretty
from portalclient.display.presenter import ErrorLogRecord
from portalclient.display.presenter import Presentation
from portalclient.display.presenter import ToastConfig
from portalclient.display.presenter import emit_log_record
from portalclient.display.presenter import handle_api_error
from portalclient.display.presenter import present
from portalclient.display.rich import format_identity
from portalclient.display.rich import make_toast_printer
from portalclient.display.rich import render_toast

__all__ = [
    # Presentation
    "Presentation",
    "ToastConfig",
    "ErrorLogRecord",
    "present",
    "emit_log_record",
    "handle_api_error",
    # Rich rendering
    "render_toast",
    "make_toast_printer",
    "format_identity",
    # JSON output
    "from_presentation",
    "output_json",
    "output_json_pretty",
    "encode_json",
    "decode_json",
]
