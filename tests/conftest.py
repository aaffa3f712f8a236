"""Shared pytest fixtures."""

import logging

import pytest

from fwutil.config import FwutilConfig, set_config
from fwutil.persist.facts import FactProvider, StaticFacts


@pytest.fixture(autouse=True)
def default_config():
    """Use default settings regardless of the environment running the tests."""
    config = FwutilConfig()
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo CLI logging setup so caplog sees fwutil records."""
    yield
    logger = logging.getLogger("fwutil")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


class RecordingFacts(StaticFacts):
    """Static facts that remember which names were flushed."""

    def __init__(self, facts=None, **kwargs):
        super().__init__(facts, **kwargs)
        self.flushed: list[str] = []

    def flush(self, name):
        self.flushed.append(str(getattr(name, "value", name)))


class FakeExecutor:
    """Executor that records commands instead of running them."""

    def __init__(self, output: str = "", error: Exception | None = None):
        self.output = output
        self.error = error
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, command):
        self.calls.append(tuple(command))
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def make_facts():
    def make(**kwargs) -> FactProvider:
        return RecordingFacts(**kwargs)
    return make
