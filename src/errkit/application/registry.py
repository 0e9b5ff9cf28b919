from __future__ import annotations

import threading
from collections.abc import Iterator
from typing import Any

from loguru import logger
from pydantic import ValidationError

from errkit.domain.models import UNKNOWN_CODER, Coder
from errkit.errors import DuplicateCoderError, InvalidCoderError, ReservedCoderError


class CoderRegistry:
    """Mapping from integer error codes to their :class:`Coder`.

    Populate it during start-up. Writes are serialized by a lock; lookups are
    plain dictionary reads and may run concurrently from any thread.
    """

    def __init__(self) -> None:
        self._coders: dict[int, Coder] = {UNKNOWN_CODER.code: UNKNOWN_CODER}
        self._lock = threading.Lock()

    def register(self, coder: Any) -> Coder:
        """Add *coder*; an already registered code is never overwritten."""

        normalized = _normalize(coder)
        if normalized.code == 0:
            logger.error("Rejected coder registration for reserved code 0")
            raise ReservedCoderError(code_value=0)
        with self._lock:
            if normalized.code in self._coders:
                logger.error(
                    "Rejected duplicate coder registration for code {}",
                    normalized.code,
                )
                raise DuplicateCoderError(code_value=normalized.code)
            self._coders[normalized.code] = normalized
        logger.debug(
            "Registered coder {} (HTTP {})", normalized.code, normalized.http_status
        )
        return normalized

    def lookup(self, code: int) -> Coder:
        return self._coders.get(code, UNKNOWN_CODER)

    def is_registered(self, code: int) -> bool:
        return code in self._coders

    def __contains__(self, code: object) -> bool:
        return code in self._coders

    def __len__(self) -> int:
        return len(self._coders)

    def __iter__(self) -> Iterator[Coder]:
        coders = dict(self._coders)
        return iter([coders[c] for c in sorted(coders)])


def _normalize(coder: Any) -> Coder:
    if isinstance(coder, Coder):
        return coder
    try:
        return Coder.model_validate(coder, from_attributes=True)
    except ValidationError as exc:
        logger.error("Rejected invalid coder {!r}: {}", coder, exc)
        raise InvalidCoderError(reason=str(exc)) from exc


_registry = CoderRegistry()


def default_registry() -> CoderRegistry:
    return _registry


def register(coder: Any) -> Coder:
    """Register *coder* in the process-wide registry.

    Raises :class:`~errkit.errors.CoderRegistrationError` subclasses for
    reserved, duplicate or malformed coders.
    """

    return _registry.register(coder)


def lookup(code: int) -> Coder:
    """Return the coder registered for *code*, or the unknown coder."""

    return _registry.lookup(code)


def is_registered(code: int) -> bool:
    return _registry.is_registered(code)
