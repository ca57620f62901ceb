# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ActionWorks core, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Base infrastructure for ActionWorks actions."""
from __future__ import annotations
import inspect
import json
import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from core.schemas import Content, FileAttachment, Memory

if TYPE_CHECKING:
    from core.config.models import ActionWorksConfig
    from core.runtime import AgentRuntime, HandlerCallback, State

logger = logging.getLogger("actionworks.actions")


# ── Action Interface ─────────────────────────────────────────


@dataclass(frozen=True)
class ActionExample:
    """One turn of an illustrative dialogue."""

    user: str
    content: Content


class Action(ABC):
    """A named capability the runtime can validate and invoke.

    Subclasses declare their identity as class attributes and implement
    :meth:`validate` and :meth:`handler`.
    """

    name: ClassVar[str]
    similes: ClassVar[tuple[str, ...]] = ()
    description: ClassVar[str] = ""
    suppress_initial_message: ClassVar[bool] = False
    examples: ClassVar[tuple[tuple[ActionExample, ...], ...]] = ()

    @abstractmethod
    async def validate(self, runtime: AgentRuntime, message: Memory) -> bool:
        """Return True when the action is allowed to run."""

    @abstractmethod
    async def handler(
        self,
        runtime: AgentRuntime,
        message: Memory,
        state: State | None,
        options: Any,
        callback: HandlerCallback,
    ) -> None:
        """Run the action and report results through *callback*."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


async def emit(
    callback: HandlerCallback,
    content: Content,
    files: list[FileAttachment] | None = None,
) -> None:
    """Invoke a runtime callback, awaiting it when it is a coroutine."""
    result = callback(content, files)
    if inspect.isawaitable(result):
        await result


# ── Setting Resolution ───────────────────────────────────────


class ConfigSettingsSource:
    """Resolve settings via config.json → shared/credentials.json → env cascade.

    Suitable as the ``get_setting`` provider for runtimes that have no
    credential store of their own.  Missing or empty values resolve to
    ``None``.
    """

    def __init__(self, config: ActionWorksConfig | None = None) -> None:
        self._config = config

    def get_setting(self, key: str) -> str | None:
        # 1. config.json
        val = self._lookup_config_secret(key)
        if val:
            _log_resolved(key, "config.json", val)
            return val

        # 2. shared/credentials.json
        val = _lookup_shared_credentials(key)
        if val:
            _log_resolved(key, "shared/credentials.json", val)
            return val

        # 3. Environment variable fallback
        val = os.environ.get(key)
        if val:
            _log_resolved(key, f"env:{key}", val)
            return val

        return None

    def _lookup_config_secret(self, key: str) -> str | None:
        """Read *key* from config secrets; an unreadable config yields ``None``."""
        from core.config.models import load_config
        from core.exceptions import ConfigError

        if self._config is not None:
            return self._config.secrets.get(key)
        try:
            config = load_config()
        except (ConfigError, json.JSONDecodeError) as exc:
            logger.warning("Skipping config.json secrets for '%s': %s", key, exc)
            return None
        return config.secrets.get(key)


def _lookup_shared_credentials(key: str) -> str | None:
    """Look up a key in the shared credentials file.

    Reads ``{data_dir}/shared/credentials.json`` (a flat key-value JSON)
    and returns the value for *key*, or ``None`` if not found.
    """
    from core.paths import get_shared_dir

    cred_file = get_shared_dir() / "credentials.json"
    if not cred_file.is_file():
        return None
    try:
        data = json.loads(cred_file.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Failed to read %s: %s", cred_file, exc)
        return None
    val = data.get(key) if isinstance(data, dict) else None
    return val if val else None


def _log_resolved(key: str, source: str, value: str) -> None:
    """Log setting resolution with masked value."""
    masked = value[:4] + "****" if len(value) > 4 else "****"
    logger.debug("Setting '%s' resolved from %s: %s", key, source, masked)
