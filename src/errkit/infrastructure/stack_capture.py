from __future__ import annotations

import sys

from errkit.config import get_settings
from errkit.domain.stack import Frame, StackTrace


def capture_stack(skip: int = 0, depth: int | None = None) -> StackTrace:
    """Record the calling thread's stack, innermost frame first.

    ``skip=0`` starts at the function calling ``capture_stack``; every extra
    level of *skip* drops one more caller. At most *depth* frames are kept
    (``Settings.stack_depth`` when omitted).
    """

    if depth is None:
        depth = get_settings().stack_depth
    try:
        current = sys._getframe(skip + 1)
    except ValueError:
        return StackTrace()

    frames: list[Frame] = []
    while current is not None and len(frames) < depth:
        frames.append(
            Frame(
                code=current.f_code,
                lineno=current.f_lineno or 0,
                module=current.f_globals.get("__name__"),
            )
        )
        current = current.f_back
    return StackTrace(tuple(frames))
