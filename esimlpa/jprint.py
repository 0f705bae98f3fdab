"""JSON line records written to standard output."""

from __future__ import annotations

import json
import sys
from typing import Any, Optional, TextIO


def _emit(kind: str, code: int, message: Optional[str], data: Any, stream: Optional[TextIO]) -> None:
    out = sys.stdout if stream is None else stream
    record = {"type": kind, "payload": {"code": code, "message": message, "data": data}}
    out.write(json.dumps(record, ensure_ascii=False, separators=(",", ":")) + "\n")
    out.flush()


def emit_error(function_name: Optional[str], detail: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    """Write a failure record; a missing detail becomes an empty string."""
    _emit("lpa", -1, function_name, "" if detail is None else detail, stream)


def emit_progress(function_name: Optional[str], detail: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    """Write a progress record with a textual detail."""
    _emit("progress", 0, function_name, detail, stream)


def emit_progress_obj(function_name: Optional[str], data: Any = None, stream: Optional[TextIO] = None) -> None:
    """Write a progress record carrying structured data."""
    _emit("progress", 0, function_name, data, stream)


def emit_success(data: Any = None, stream: Optional[TextIO] = None) -> None:
    """Write the final success record."""
    _emit("lpa", 0, "success", data, stream)