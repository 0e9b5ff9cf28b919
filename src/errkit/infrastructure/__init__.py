from __future__ import annotations

from .formatting import format_error, to_json, to_records
from .stack_capture import capture_stack

__all__ = ["capture_stack", "format_error", "to_json", "to_records"]
