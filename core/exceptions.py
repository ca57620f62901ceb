# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ActionWorks core, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Unified exception hierarchy for ActionWorks.

All domain-specific exceptions derive from :class:`ActionWorksError`,
enabling callers to catch the entire family with a single clause::

    try:
        ...
    except ActionWorksError as e:
        logger.error("Domain error: %s", e)
"""

from __future__ import annotations


class ActionWorksError(Exception):
    """Base exception for all ActionWorks errors."""


# ── Actions ──────────────────────────────────────────────────


class ActionError(ActionWorksError):
    """Action execution errors."""


class ActionNotFoundError(ActionError):
    """Requested action is not registered."""


class GenerationEmptyError(ActionError):
    """Generation provider returned no usable data."""


# ── Artifacts ────────────────────────────────────────────────


class ArtifactError(ActionError):
    """Persisting a generated artifact failed.

    Raised per artifact; a failure aborts that artifact only.
    """


class FetchError(ArtifactError):
    """Fetching a URL-sourced image returned a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        status_text: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text


class ArtifactDecodeError(ArtifactError):
    """Inline image payload could not be decoded."""


class ArtifactWriteError(ArtifactError):
    """Output directory or file could not be written."""


# ── Configuration ────────────────────────────────────────────


class ConfigError(ActionWorksError):
    """Configuration errors."""


class ConfigValidationError(ConfigError):
    """Configuration validation failure."""
