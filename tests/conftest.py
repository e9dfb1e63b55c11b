"""Shared test fixtures for clapi.

Provides reusable fixtures for loading spec fixtures, loading emitted client
programs as modules, recording the HTTP calls those programs make, and
managing global output state. These fixtures are automatically discovered
by pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

import json
import types
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

from clapi.examples import example_spec
from clapi.models import APISpec
from clapi.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager's Rich console holds a reference to sys.stderr at
    creation time, which CliRunner and capsys replace per test.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def blog_raw() -> dict[str, Any]:
    """Raw blog spec dict (api-key auth, snake_case path parameter)."""
    with open(FIXTURES_DIR / "blog.json") as f:
        return json.load(f)


@pytest.fixture
def blog_spec(blog_raw: dict[str, Any]) -> APISpec:
    """Parsed blog spec."""
    return APISpec.from_dict(blog_raw)


@pytest.fixture
def sample_spec() -> APISpec:
    """The built-in BlogAPI example (bearer auth, five routes)."""
    return example_spec()


# ---------------------------------------------------------------------------
# Generated program helpers
# ---------------------------------------------------------------------------


def load_generated(source: str, name: str = "generated_cli") -> types.ModuleType:
    """Execute emitted program source as a fresh module and return it."""
    module = types.ModuleType(name)
    module.__file__ = f"<{name}>"
    exec(compile(source, module.__file__, "exec"), module.__dict__)
    return module


@pytest.fixture
def load_program() -> Callable[[str], types.ModuleType]:
    """Return :func:`load_generated` for tests that build their own source."""
    return load_generated


class RecordingHttp:
    """Stand-in for :func:`httpx.request` that records calls and replays one response."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.response: httpx.Response = httpx.Response(200, json=[])
        self.error: Optional[Exception] = None

    def __call__(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last(self) -> dict[str, Any]:
        return self.calls[-1]


@pytest.fixture
def http(monkeypatch: pytest.MonkeyPatch) -> RecordingHttp:
    """Patch :func:`httpx.request` so generated programs never touch the network."""
    recorder = RecordingHttp()
    monkeypatch.setattr(httpx, "request", recorder)
    return recorder
