"""Human and machine renderings of error chains.

Format specs understood by :func:`format_error` (and by ``format(err, spec)``
on chain errors):

``""``, ``s``, ``v``
    the short text, ``str(err)``
``q``
    the short text as a JSON string literal
``-v``
    one detail line for the outermost link: caller, code and coder message
``+v``
    the verbose trace: every link's message followed by the frames it captured
``#v``, ``#+v``
    compact JSON list with one record per link, outermost first; use
    :func:`to_json` for the configured indent
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import TypeAdapter

from errkit.application.inspection import code, iter_chain, parse_coder
from errkit.config import get_settings
from errkit.domain.models import LinkRecord
from errkit.domain.ports import ErrorLink

_RECORDS = TypeAdapter(list[LinkRecord])


def format_error(err: BaseException | None, spec: str = "") -> str:
    match spec:
        case "" | "s" | "v":
            return "" if err is None else str(err)
        case "q":
            return json.dumps("" if err is None else str(err), ensure_ascii=False)
        case "-v":
            return _detail(err)
        case "+v":
            return _verbose(err)
        case "#v" | "#+v":
            return _dump_json(err, indent=None)
    raise ValueError(
        f"Unknown format code {spec!r} for object of type {type(err).__name__!r}"
    )


def _detail(err: BaseException | None) -> str:
    if err is None:
        return ""
    coder = parse_coder(err)
    head = f"{err} - #0"
    if isinstance(err, ErrorLink) and err.stack:
        frame = err.stack[0]
        head = f"{head} [{frame.file}:{frame.line} ({frame.function})]"
    return f"{head} ({code(err)}) {coder}"


def _verbose(err: BaseException | None) -> str:
    lines: list[str] = []
    for link in iter_chain(err):
        if not isinstance(link, ErrorLink):
            lines.append(str(link))
            continue
        if link.message:
            lines.append(link.message)
        if link.owns_stack and link.stack is not None:
            lines.extend(format(frame, "+v") for frame in link.stack)
    return "\n".join(lines)


def _record(link: BaseException) -> LinkRecord:
    if not isinstance(link, ErrorLink):
        return LinkRecord(message=str(link))
    return LinkRecord(
        message=str(link),
        code=link.code or None,
        stack=link.stack if link.owns_stack else None,
    )


def to_records(err: BaseException | None) -> list[dict[str, Any]]:
    """Describe the chain as plain dictionaries, outermost link first."""

    records = [_record(link) for link in iter_chain(err)]
    return _RECORDS.dump_python(records, exclude_none=True)


def to_json(err: BaseException | None, indent: int | None = None) -> str:
    """Render the chain as a JSON list; ``None`` renders ``null``.

    *indent* falls back to ``Settings.json_indent`` when omitted.
    """

    if indent is None:
        indent = get_settings().json_indent
    return _dump_json(err, indent)


def _dump_json(err: BaseException | None, indent: int | None) -> str:
    if err is None:
        return "null"
    records = [_record(link) for link in iter_chain(err)]
    return _RECORDS.dump_json(records, exclude_none=True, indent=indent).decode()
