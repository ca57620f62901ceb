# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0
"""Global test fixtures for ActionWorks.

Provides filesystem isolation, config cache management, and
live-test switching for all test modules.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

from tests.helpers.filesystem import create_test_data_dir
from tests.helpers.mocks import FakeRuntime

logger = logging.getLogger(__name__)

# Load .env at module level so live tests see real credentials.
load_dotenv()


# ── CLI options ───────────────────────────────────────────


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-live",
        action="store_true",
        default=False,
        help="Run @pytest.mark.live tests (skipped by default)",
    )


# ── Fixtures ──────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _skip_live(request: pytest.FixtureRequest) -> None:
    """Auto-skip ``@pytest.mark.live`` tests unless ``--run-live`` is passed."""
    if request.node.get_closest_marker("live"):
        if not request.config.getoption("--run-live", default=False):
            pytest.skip("Skipping live test: use --run-live to enable")


@pytest.fixture(autouse=True)
def _isolate_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point ``ACTIONWORKS_DATA_DIR`` at an empty temp dir for every test.

    Keeps the developer's ``~/.actionworks`` out of config lookups.
    """
    from core.config import invalidate_cache

    monkeypatch.setenv("ACTIONWORKS_DATA_DIR", str(tmp_path / "isolated-data"))
    invalidate_cache()
    yield
    invalidate_cache()


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a populated ActionWorks runtime data directory.

    - Writes a minimal ``config.json`` and an empty ``shared/`` directory
    - Redirects ``ACTIONWORKS_DATA_DIR`` to it and invalidates the config cache
    """
    from core.config import invalidate_cache

    d = create_test_data_dir(tmp_path)
    monkeypatch.setenv("ACTIONWORKS_DATA_DIR", str(d))
    invalidate_cache()
    return d


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Directory that generated images are written to."""
    return tmp_path / "generatedImages"


@pytest.fixture
def make_runtime():
    """Factory fixture for :class:`FakeRuntime` instances."""

    def _make(**kwargs: Any) -> FakeRuntime:
        return FakeRuntime(**kwargs)

    return _make
