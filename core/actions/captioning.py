# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ActionWorks core, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Optional captioning of generated images."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from core.actions._base import logger
from core.schemas import PLACEHOLDER_CAPTION, ImageCaption

if TYPE_CHECKING:
    from core.runtime import AgentRuntime, ImageDescriptionService

IMAGE_DESCRIPTION_SERVICE = "image_description"


class Captioner(Protocol):
    async def caption(self, image_path: Path) -> ImageCaption: ...


class PlaceholderCaptioner:
    """Default captioner: never calls a model, returns ``("...", "...")``."""

    async def caption(self, image_path: Path) -> ImageCaption:
        return PLACEHOLDER_CAPTION


class RuntimeServiceCaptioner:
    """Caption via the runtime's image description service.

    Falls back to the placeholder when the service is missing or fails.
    """

    def __init__(self, runtime: AgentRuntime) -> None:
        self._runtime = runtime

    async def caption(self, image_path: Path) -> ImageCaption:
        service: ImageDescriptionService | None = self._runtime.get_service(
            IMAGE_DESCRIPTION_SERVICE,
        )
        if service is None or not hasattr(service, "describe_image"):
            return PLACEHOLDER_CAPTION
        try:
            described = await service.describe_image(image_url=str(image_path))
        except Exception:
            logger.error("Caption generation failed, using default caption", exc_info=True)
            return PLACEHOLDER_CAPTION
        return ImageCaption(
            title=described.get("title") or PLACEHOLDER_CAPTION.title,
            description=described.get("description") or PLACEHOLDER_CAPTION.description,
        )
