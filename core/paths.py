# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ActionWorks core, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Centralized path resolution for ActionWorks.

All modules import directory paths from here instead of computing them ad-hoc.
Runtime data directory can be overridden via ACTIONWORKS_DATA_DIR environment variable.
"""

from __future__ import annotations

import os
from pathlib import Path

# Default runtime data directory
_DEFAULT_DATA_DIR = Path.home() / ".actionworks"

# Generated images land here, relative to the process working directory
DEFAULT_OUTPUT_DIRNAME = "generatedImages"


def get_data_dir() -> Path:
    """Return the runtime data directory, respecting ACTIONWORKS_DATA_DIR env var."""
    env_val = os.environ.get("ACTIONWORKS_DATA_DIR")
    if env_val:
        return Path(env_val).expanduser().resolve()
    return _DEFAULT_DATA_DIR


def get_shared_dir() -> Path:
    return get_data_dir() / "shared"


def get_log_dir() -> Path:
    return get_data_dir() / "logs"


def resolve_output_dir(output_dir: str | Path | None = None) -> Path:
    """Return the absolute image output directory.

    Relative paths (including the ``generatedImages`` default) are
    anchored at the current working directory.
    """
    path = Path(output_dir) if output_dir else Path(DEFAULT_OUTPUT_DIRNAME)
    path = path.expanduser()
    if not path.is_absolute():
        path = Path.cwd() / path
    return path
