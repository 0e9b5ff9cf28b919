from __future__ import annotations

import os
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from types import CodeType
from typing import Any, overload

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Frame:
    """A single captured program location.

    ``Frame()`` is the unknown location. Names and paths are derived from the
    code object only when rendered.
    """

    code: CodeType | None = None
    lineno: int = 0
    module: str | None = None

    @property
    def function(self) -> str:
        if self.code is None:
            return UNKNOWN
        if self.module:
            return f"{self.module}.{self.code.co_qualname}"
        return self.code.co_qualname

    @property
    def short_function(self) -> str:
        if self.code is None:
            return UNKNOWN
        return self.code.co_qualname

    @property
    def file(self) -> str:
        if self.code is None or not self.code.co_filename:
            return UNKNOWN
        return self.code.co_filename

    @property
    def line(self) -> int:
        if self.code is None:
            return 0
        return self.lineno

    @property
    def resolved(self) -> bool:
        return self.code is not None

    def marshal_text(self) -> str:
        if not self.resolved:
            return UNKNOWN
        return f"{self.function} {self.file}:{self.line}"

    def __format__(self, spec: str) -> str:
        match spec:
            case "s":
                return os.path.basename(self.file)
            case "+s":
                if not self.resolved:
                    return UNKNOWN
                return f"{self.function}\n\t{self.file}"
            case "d":
                return str(self.line)
            case "n":
                return self.short_function
            case "" | "v":
                return f"{self:s}:{self:d}"
            case "+v":
                if not self.resolved:
                    return UNKNOWN
                return f"{self:+s}:{self:d}"
        raise ValueError(f"Unknown format code {spec!r} for object of type 'Frame'")

    def __str__(self) -> str:
        return format(self, "+v")

    def __reduce__(self) -> tuple[Any, ...]:
        # code objects can't be pickled, keep only what rendering reads
        if self.code is None:
            return Frame, ()
        return _detached_frame, (
            self.code.co_filename,
            self.code.co_qualname,
            self.lineno,
            self.module,
        )

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.is_instance_schema(
            cls,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda f: f.marshal_text(), when_used="always"
            ),
        )


def _detached_frame(
    filename: str, qualname: str, lineno: int, module: str | None
) -> Frame:
    code = compile("", filename, "exec").replace(
        co_name=qualname.rpartition(".")[2], co_qualname=qualname
    )
    return Frame(code=code, lineno=lineno, module=module)


@dataclass(frozen=True, slots=True)
class StackTrace(Sequence[Frame]):
    """Frames captured at error-creation time, innermost call first."""

    frames: tuple[Frame, ...] = field(default=())

    @overload
    def __getitem__(self, index: int) -> Frame: ...
    @overload
    def __getitem__(self, index: slice) -> StackTrace: ...

    def __getitem__(self, index: int | slice) -> Frame | StackTrace:
        if isinstance(index, slice):
            return StackTrace(self.frames[index])
        return self.frames[index]

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self.frames)

    def marshal_text(self) -> list[str]:
        return [frame.marshal_text() for frame in self.frames]

    def __format__(self, spec: str) -> str:
        match spec:
            case "" | "s" | "v":
                return "[" + " ".join(format(f, "v") for f in self.frames) + "]"
            case "+v":
                return "".join(f"\n{f:+v}" for f in self.frames)
        raise ValueError(
            f"Unknown format code {spec!r} for object of type 'StackTrace'"
        )

    def __str__(self) -> str:
        return format(self, "v")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.is_instance_schema(
            cls,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda s: s.marshal_text(), when_used="always"
            ),
        )
