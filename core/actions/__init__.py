# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ActionWorks core, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""ActionWorks action registry and plugin descriptors."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core.actions._base import Action, ActionExample, ConfigSettingsSource, emit
from core.actions.image_generation import ImageGenerationAction
from core.actions.web_search import WebSearchAction
from core.exceptions import ActionNotFoundError


@dataclass(frozen=True)
class Plugin:
    """A named bundle of actions the host runtime registers at load time."""

    name: str
    description: str
    actions: tuple[Action, ...] = ()
    evaluators: tuple[Any, ...] = ()
    providers: tuple[Any, ...] = ()


image_generation_plugin = Plugin(
    name="imageGeneration",
    description="Generate images",
    actions=(ImageGenerationAction(),),
)

web_search_plugin = Plugin(
    name="webSearch",
    description="Search web",
    actions=(WebSearchAction(),),
)

PLUGINS: tuple[Plugin, ...] = (image_generation_plugin, web_search_plugin)

ACTIONS: dict[str, Action] = {
    action.name: action
    for plugin in PLUGINS
    for action in plugin.actions
}


def get_action(name: str) -> Action:
    """Look up a registered action by name.

    Raises:
        ActionNotFoundError: No action is registered under *name*.
    """
    try:
        return ACTIONS[name]
    except KeyError:
        raise ActionNotFoundError(
            f"Unknown action: {name!r} (available: {', '.join(sorted(ACTIONS))})"
        ) from None


__all__ = [
    "ACTIONS",
    "PLUGINS",
    "Action",
    "ActionExample",
    "ConfigSettingsSource",
    "ImageGenerationAction",
    "Plugin",
    "WebSearchAction",
    "emit",
    "get_action",
    "image_generation_plugin",
    "web_search_plugin",
]
