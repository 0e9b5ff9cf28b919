import logging
from collections.abc import Iterator

import pytest
from loguru import logger

from errkit import Coder, CoderRegistry
from errkit.application import registry as registry_module
from errkit.config import get_settings


@pytest.fixture
def registry(monkeypatch: pytest.MonkeyPatch) -> CoderRegistry:
    """Swap the process-wide registry for one holding only the unknown coder."""
    fresh = CoderRegistry()
    monkeypatch.setattr(registry_module, "_registry", fresh)
    return fresh


@pytest.fixture
def sample_codes(registry: CoderRegistry) -> CoderRegistry:
    """Register the configuration loading codes 1000-1003."""
    registry.register(Coder(code=1000, message="ConfigurationNotValid error"))
    registry.register(Coder(code=1001, message="Data is not valid JSON"))
    registry.register(Coder(code=1002, message="End of input"))
    registry.register(Coder(code=1003, message="Load configuration file failed"))
    return registry


@pytest.fixture
def errkit_logs(caplog: pytest.LogCaptureFixture) -> Iterator[pytest.LogCaptureFixture]:
    """Route errkit's loguru output into *caplog*."""
    caplog.set_level(logging.DEBUG)
    logger.enable("errkit")
    sink_id = logger.add(caplog.handler, level="DEBUG", format="{message}")
    try:
        yield caplog
    finally:
        logger.remove(sink_id)
        logger.disable("errkit")


@pytest.fixture
def fresh_settings() -> Iterator[None]:
    """Re-read settings from the environment around the test."""
    get_settings.cache_clear()
    try:
        yield
    finally:
        get_settings.cache_clear()
