"""
Pytest Configuration and Fixtures for the priority emitter tests.

Purpose
-------
Centralized fixtures shared by the unit tests: fresh emitters, a recording
warning sink, and a call recorder for asserting dispatch order.

Architecture Notes
------------------
- `pytest_configure` pins the environment before Config is re-read, so
  results do not depend on the developer's shell or `.env` file.
- Every fixture is function scoped; emitters never leak between tests.
"""

from __future__ import annotations

import os
from typing import Any, Callable, List

import pytest

# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """Configure pytest environment."""
    os.environ["PRIORITY_EMITTER_ENV"] = "testing"
    os.environ["PRIORITY_EMITTER_LOG_LEVEL"] = "DEBUG"
    os.environ.pop("PRIORITY_EMITTER_MAX_LISTENERS", None)

    from priority_emitter.config import Config

    Config.reload()


# ============================================================================
# FIXTURES
# ============================================================================


class CallRecorder:
    """Builds named listeners that append to a shared call log."""

    def __init__(self) -> None:
        self.calls: List[Any] = []

    def listener(self, name: str, result: Any = None) -> Callable[..., Any]:
        def _listener(*args: Any) -> Any:
            self.calls.append((name, args) if args else name)
            return result

        _listener.__qualname__ = f"listener_{name}"
        return _listener


@pytest.fixture
def emitter():
    """Fresh emitter with default settings."""
    from priority_emitter import PriorityEventEmitter

    return PriorityEventEmitter()


@pytest.fixture
def warnings_sink() -> List[str]:
    """List collecting every max-listener warning."""
    return []


@pytest.fixture
def sink_emitter(warnings_sink):
    """Emitter whose max-listener warnings land in `warnings_sink`."""
    from priority_emitter import PriorityEventEmitter

    return PriorityEventEmitter(warning_sink=warnings_sink.append)


@pytest.fixture
def recorder() -> CallRecorder:
    return CallRecorder()


@pytest.fixture
def env(monkeypatch):
    """monkeypatch for environment changes; Config is re-read after undoing them."""
    from priority_emitter.config import Config

    yield monkeypatch
    monkeypatch.undo()
    Config.reload()
