"""Architecture enforcement tests for the provider layering.

Lightweight, repository-local invariants keeping the execution core
decoupled from the presentation layer. These are static-file scans so they
have no import-time side effects.

Rules validated here:
1) ``conclave_providers.base`` and the family adapters must not import the
   service layer, FastAPI or uvicorn.
2) ``conclave_providers.base`` must not import ``conclave_providers.config``
   at module level (the factory imports it lazily inside a function).
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parent.parent / "conclave_providers"
CORE_DIRS = ["base", "claude", "gemini", "qwen", "codex", "opencode", "generic", "mock", "config"]


def _iter_python_files(root: Path) -> Iterable[Path]:
    """Yield Python source files under ``root``, skipping caches and tests."""
    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts or "tests" in path.parts:
            continue
        yield path


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def _scan(dirs: List[str], forbidden: List[str]) -> List[str]:
    offenders: List[str] = []
    for name in dirs:
        for py in _iter_python_files(PACKAGE_ROOT / name):
            for lineno, line in enumerate(_read_text(py).splitlines(), start=1):
                stripped = line.strip()
                if any(stripped.startswith(snippet) for snippet in forbidden):
                    offenders.append(f"{py}:{lineno}: {stripped}")
    return offenders


def test_core_does_not_import_presentation() -> None:
    """Core and adapters never depend on the HTTP/CLI layer."""
    if not PACKAGE_ROOT.is_dir():
        pytest.skip("conclave_providers package not found")
    offenders = _scan(
        CORE_DIRS,
        [
            "from ..service",
            "from ...service",
            "from conclave_providers.service",
            "import conclave_providers.service",
            "import fastapi",
            "from fastapi",
            "import uvicorn",
        ],
    )
    if offenders:
        pytest.fail("Core modules must not import outer layers (service/presentation).\n" + "\n".join(offenders))


def test_base_imports_config_only_lazily() -> None:
    """Module-level imports in ``base`` must not reach into ``config``."""
    offenders: List[str] = []
    for py in _iter_python_files(PACKAGE_ROOT / "base"):
        for lineno, line in enumerate(_read_text(py).splitlines(), start=1):
            if line.startswith(("from ..config", "from ...config", "from conclave_providers.config")):
                offenders.append(f"{py}:{lineno}: {line.strip()}")
    if offenders:
        pytest.fail("base must import config lazily, inside functions.\n" + "\n".join(offenders))
