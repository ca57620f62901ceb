# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from core.config.models import (
    ActionWorksConfig,
    CharacterConfig,
    CharacterSettings,
    ImageDefaults,
    ImageGenerationConfig,
    SystemConfig,
    WebSearchConfig,
    get_config_path,
    invalidate_cache,
    load_character,
    load_config,
    save_config,
)

__all__ = [
    "ActionWorksConfig",
    "CharacterConfig",
    "CharacterSettings",
    "ImageDefaults",
    "ImageGenerationConfig",
    "SystemConfig",
    "WebSearchConfig",
    "get_config_path",
    "invalidate_cache",
    "load_character",
    "load_config",
    "save_config",
]
