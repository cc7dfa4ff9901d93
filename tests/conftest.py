"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import logging
import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
# This ensures that the local sharpcheck package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of sharpcheck modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("sharpcheck"):
        del sys.modules[module_name]

from sharpcheck.syntax.parser import CSharpParser  # noqa: E402


@pytest.fixture
def parser() -> CSharpParser:
    """A fresh tree-sitter C# parser."""
    return CSharpParser()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep user-level config and SHARPCHECK__ env vars out of every test."""
    import sharpcheck.config.loader as loader

    monkeypatch.setattr(loader, "GLOBAL_CONFIG_PATH", tmp_path_factory.mktemp("home") / "config.yaml")
    for key in [k for k in os.environ if k.startswith("SHARPCHECK__")]:
        monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers and context bound by a test (CLI runs configure logging)."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    logging.getLogger().handlers.clear()
