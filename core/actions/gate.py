# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ActionWorks core, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Credential gates deciding whether an action may run."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.actions._base import logger

if TYPE_CHECKING:
    from core.runtime import SettingsSource

# Any one of these enables image generation; provider choice happens downstream.
IMAGE_PROVIDER_SETTINGS: tuple[str, ...] = (
    "ANTHROPIC_API_KEY",
    "NINETEEN_AI_API_KEY",
    "TOGETHER_API_KEY",
    "HEURIST_API_KEY",
    "FAL_API_KEY",
    "OPENAI_API_KEY",
    "VENICE_API_KEY",
    "LIVEPEER_GATEWAY_URL",
)

WEB_SEARCH_SETTINGS: tuple[str, ...] = ("TAVILY_API_KEY",)


@dataclass(frozen=True)
class ProviderGate:
    """Passes when at least one of *settings* is present (logical OR)."""

    settings: tuple[str, ...]

    def can_run(self, source: SettingsSource) -> bool:
        available = self.available(source)
        if not available:
            logger.debug("No credential available among %s", ", ".join(self.settings))
        return bool(available)

    def available(self, source: SettingsSource) -> list[str]:
        """Names of the gate's settings that currently resolve to a value."""
        return [name for name in self.settings if _is_set(source.get_setting(name))]


def _is_set(value: object) -> bool:
    # None and "" both mean absent
    return value is not None and value != ""


IMAGE_GATE = ProviderGate(IMAGE_PROVIDER_SETTINGS)
WEB_SEARCH_GATE = ProviderGate(WEB_SEARCH_SETTINGS)
