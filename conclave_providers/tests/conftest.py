"""Pytest fixtures shared by the provider test suite.

Mock providers are built with a seeded ``random.Random`` and a no-op sleep so
tests are deterministic and never wait on simulated latency. Health caches are
always pointed at ``tmp_path`` so the real temp-dir cache is never touched.
"""

from __future__ import annotations

import random
import sys
from typing import Iterator, TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from conclave_providers.base.registry import ProviderRegistry
    from conclave_providers.mock import MockProvider
    from conclave_providers.service.health_cache import ProviderHealthCache


def _no_sleep(_seconds: float) -> None:
    return None


@pytest.fixture()
def make_mock():
    """Factory building a deterministic ``MockProvider``."""

    from conclave_providers.mock import MockProvider

    def _make(name: str = "mock", config=None, seed: int = 7) -> "MockProvider":
        return MockProvider(config, name=name, rng=random.Random(seed), sleep=_no_sleep)

    return _make


@pytest.fixture()
def mock_provider(make_mock) -> "MockProvider":
    return make_mock()


@pytest.fixture()
def registry(make_mock) -> "ProviderRegistry":
    """Registry holding two mock providers (``mock`` and ``mock-b``)."""

    from conclave_providers.base.registry import ProviderRegistry

    reg = ProviderRegistry()
    reg.register(make_mock("mock"))
    reg.register(make_mock("mock-b", seed=11))
    return reg


@pytest.fixture()
def health_cache(tmp_path) -> "ProviderHealthCache":
    from conclave_providers.service.health_cache import ProviderHealthCache

    return ProviderHealthCache(tmp_path / "health.json")


@pytest.fixture()
def python_exe() -> str:
    """Absolute path of the running interpreter, used as a stand-in CLI."""
    return sys.executable


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Remove config-related variables and point HOME at an empty directory."""

    import os

    for key in list(os.environ):
        if key.startswith("PROVIDER_") or key.startswith("CONCLAVE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    yield
