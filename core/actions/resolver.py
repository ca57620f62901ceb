# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ActionWorks core, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Layered resolution of image generation requests.

Resolution uses a 3-layer priority (strongest first):

  1. call-time options passed to the action handler
  2. character ``imageSettings``
  3. hard defaults (width / height only)

A field that no layer sets is left out of the request entirely, so the
downstream provider can apply its own default.  ``None`` is the only
"unset" marker: ``0`` and ``False`` are real values.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Union

from core.config.models import ImageDefaults
from core.schemas import GENERATION_FIELDS, GenerationOptions

OptionLayer = Union[GenerationOptions, Mapping[str, Any], None]

# Fields that always resolve, falling back to ImageDefaults
_DEFAULTED_FIELDS: tuple[str, ...] = ("width", "height")


def as_options(layer: OptionLayer) -> GenerationOptions:
    """Normalize a layer (model, camelCase/snake_case mapping, or None)."""
    if layer is None:
        return GenerationOptions()
    if isinstance(layer, GenerationOptions):
        return layer
    return GenerationOptions.model_validate(dict(layer))


def first_set(layers: Sequence[GenerationOptions], field_name: str) -> Any | None:
    """Return the first non-None value of *field_name* across *layers*."""
    for layer in layers:
        value = getattr(layer, field_name)
        if value is not None:
            return value
    return None


def resolve_generation_request(
    call_options: OptionLayer,
    character_settings: OptionLayer,
    defaults: ImageDefaults | None = None,
) -> dict[str, Any]:
    """Merge option layers into the provider request.

    Returns:
        A dict holding ``width`` and ``height`` plus every other
        generation field set in at least one layer.
    """
    defaults = defaults or ImageDefaults()
    layers = [as_options(call_options), as_options(character_settings)]

    resolved: dict[str, Any] = {}
    for field_name in GENERATION_FIELDS:
        value = first_set(layers, field_name)
        if value is None and field_name in _DEFAULTED_FIELDS:
            value = getattr(defaults, field_name)
        if value is not None:
            resolved[field_name] = value
    return resolved
