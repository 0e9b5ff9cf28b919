import asyncio

import pytest
from loguru import logger

from errkit import CodedError, code, unwrap
from errkit.infrastructure.error_utils import log_and_wrap, wrap_exceptions


@wrap_exceptions(1003, "load configuration file failed")
def load(path: str) -> str:
    raise FileNotFoundError(path)


@wrap_exceptions(1003, "load configuration file failed")
def load_ok(path: str) -> str:
    return path.upper()


@wrap_exceptions(1003, "async load failed")
async def load_async(path: str) -> str:
    raise PermissionError(path)


@wrap_exceptions(1003, "async load failed")
async def cancelled() -> None:
    raise asyncio.CancelledError


def test_wrap_exceptions_sync(errkit_logs: pytest.LogCaptureFixture) -> None:
    with pytest.raises(CodedError) as exc_info:
        load("app.yaml")
    err = exc_info.value
    assert str(err) == "load configuration file failed"
    assert code(err) == 1003
    assert isinstance(unwrap(err), FileNotFoundError)
    assert err.__cause__ is unwrap(err)
    assert "FileNotFoundError: app.yaml" in errkit_logs.text


def test_wrap_exceptions_passes_results_through() -> None:
    assert load_ok("a") == "A"
    assert load_ok.__name__ == "load_ok"


@pytest.mark.asyncio
async def test_wrap_exceptions_async(errkit_logs: pytest.LogCaptureFixture) -> None:
    with pytest.raises(CodedError) as exc_info:
        await load_async("secret.key")
    assert isinstance(exc_info.value.cause, PermissionError)
    assert "PermissionError: secret.key" in errkit_logs.text


@pytest.mark.asyncio
async def test_wrap_exceptions_lets_cancellation_through() -> None:
    with pytest.raises(asyncio.CancelledError):
        await cancelled()


def test_log_and_wrap_raises_coded_error(errkit_logs: pytest.LogCaptureFixture) -> None:
    original = ValueError("broken")
    with pytest.raises(CodedError) as exc_info:
        log_and_wrap(original, 1001, "decode failed", context={"path": "a.json"})
    assert exc_info.value.cause is original
    assert code(exc_info.value) == 1001
    assert "ValueError: broken" in errkit_logs.text


class FakeLog:
    def __init__(self) -> None:
        self.messages: list[str] = []
        self.bound: dict[str, object] = {}

    def opt(self, **kwargs: object) -> "FakeLog":
        return self

    def bind(self, **kwargs: object) -> "FakeLog":
        self.bound.update(kwargs)
        return self

    def error(self, template: str, *args: object) -> None:
        self.messages.append(template.format(*args))


def test_log_and_wrap_uses_given_logger() -> None:
    log = FakeLog()
    with pytest.raises(CodedError):
        log_and_wrap(RuntimeError("boom"), 1001, "failed", log=log, context={"job": 7})
    assert log.bound == {"job": 7, "error_code": 1001, "error_message": "failed"}
    assert any("RuntimeError: boom" in m for m in log.messages)


def test_wrap_exceptions_binds_code_into_record(
    errkit_logs: pytest.LogCaptureFixture,
) -> None:
    records: list[dict] = []
    sink_id = logger.add(lambda m: records.append(m.record), level="ERROR")
    try:
        with pytest.raises(CodedError):
            load("app.yaml")
    finally:
        logger.remove(sink_id)
    (record,) = records
    assert record["extra"] == {
        "function": "load",
        "error_code": 1003,
        "error_message": "load configuration file failed",
    }
    assert record["message"].startswith("load configuration file failed (code 1003)\n")
