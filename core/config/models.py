# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ActionWorks core, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Central configuration module for ActionWorks.

Defines Pydantic models for config.json and the agent character file,
and provides load / save helpers with a module-level singleton cache.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from core.exceptions import ConfigValidationError
from core.paths import DEFAULT_OUTPUT_DIRNAME
from core.schemas import CharacterImageSettings

logger = logging.getLogger("actionworks.config")

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------

DEFAULT_IMAGE_STYLE = (
    "professional, modern, and commercially polished with strong brand appeal"
)


class SystemConfig(BaseModel):
    log_level: str = "INFO"


class ImageDefaults(BaseModel):
    """Hard defaults applied when neither option layer sets a dimension."""

    width: int = 1024
    height: int = 1024


class ImageGenerationConfig(BaseModel):
    """Configuration for the image generation action."""

    output_dir: str = DEFAULT_OUTPUT_DIRNAME
    default_width: int = 1024
    default_height: int = 1024
    captioning_enabled: bool = False
    prompt_style: str = DEFAULT_IMAGE_STYLE

    @property
    def defaults(self) -> ImageDefaults:
        return ImageDefaults(width=self.default_width, height=self.default_height)


class WebSearchConfig(BaseModel):
    """Configuration for the web search action."""

    max_tokens: int = Field(default=4000, gt=0)
    model_encoding: str = "gpt-3.5-turbo"


class ActionWorksConfig(BaseModel):
    version: int = 1
    system: SystemConfig = SystemConfig()
    secrets: dict[str, str] = {}
    image_generation: ImageGenerationConfig = ImageGenerationConfig()
    web_search: WebSearchConfig = WebSearchConfig()


# ── Character ─────────────────────────────────────────────


class CharacterSettings(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    image_settings: CharacterImageSettings = CharacterImageSettings()
    secrets: dict[str, str] = {}


class CharacterConfig(BaseModel):
    """Agent character definition (the subset the actions read)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    name: str = ""
    settings: CharacterSettings = CharacterSettings()


def load_character(path: Path) -> CharacterConfig:
    """Load a character JSON file."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return CharacterConfig.model_validate(data)
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse character file %s: %s", path, exc)
        raise
    except ValidationError as exc:
        raise ConfigValidationError(f"Invalid character file {path}: {exc}") from exc


# ---------------------------------------------------------------------------
# Singleton cache
# ---------------------------------------------------------------------------

_config: ActionWorksConfig | None = None
_config_path: Path | None = None
_config_mtime: float = 0.0


def invalidate_cache() -> None:
    """Reset the module-level singleton cache."""
    global _config, _config_path, _config_mtime
    _config = None
    _config_path = None
    _config_mtime = 0.0


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def get_config_path(data_dir: Path | None = None) -> Path:
    """Return the path to config.json inside *data_dir*.

    If *data_dir* is not given, it is resolved via ``core.paths.get_data_dir``.
    """
    if data_dir is None:
        from core.paths import get_data_dir

        data_dir = get_data_dir()
    return data_dir / "config.json"


# ---------------------------------------------------------------------------
# Load / Save
# ---------------------------------------------------------------------------


def load_config(path: Path | None = None) -> ActionWorksConfig:
    """Load configuration from disk, returning cached instance when possible.

    When the file does not exist the default configuration is returned.
    The cache is invalidated automatically when the file's mtime changes.

    Raises:
        json.JSONDecodeError: config.json is not valid JSON.
        ConfigValidationError: config.json does not match the schema.
    """
    global _config, _config_path, _config_mtime

    if path is None:
        path = get_config_path()

    if _config is not None and _config_path == path:
        try:
            disk_mtime = path.stat().st_mtime
        except OSError:
            disk_mtime = 0.0
        if disk_mtime == _config_mtime:
            return _config
        logger.debug("Config file changed on disk (mtime %.3f → %.3f); reloading", _config_mtime, disk_mtime)

    if path.is_file():
        logger.debug("Loading config from %s", path)
        try:
            data: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
            config = ActionWorksConfig.model_validate(data)
        except json.JSONDecodeError as exc:
            logger.error("Failed to parse %s: %s", path, exc)
            raise
        except ValidationError as exc:
            raise ConfigValidationError(f"Invalid config {path}: {exc}") from exc
    else:
        logger.info("Config file not found at %s; using defaults", path)
        config = ActionWorksConfig()

    _config = config
    _config_path = path
    try:
        _config_mtime = path.stat().st_mtime
    except OSError:
        _config_mtime = 0.0
    return config


def save_config(config: ActionWorksConfig, path: Path | None = None) -> None:
    """Persist *config* to disk as pretty-printed JSON (mode 0o600)."""
    global _config, _config_path, _config_mtime

    if path is None:
        path = get_config_path()

    path.parent.mkdir(parents=True, exist_ok=True)

    payload = config.model_dump(mode="json")
    text = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
    path.write_text(text, encoding="utf-8")

    # Restrict permissions; the file may contain API keys.
    os.chmod(path, 0o600)

    logger.debug("Config saved to %s", path)

    _config = config
    _config_path = path
    try:
        _config_mtime = path.stat().st_mtime
    except OSError:
        _config_mtime = 0.0
