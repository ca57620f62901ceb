# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ActionWorks core, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Host runtime interface consumed by ActionWorks actions.

The agent runtime (state composition, memory storage, text/image/search
providers) lives outside this package.  Actions depend only on the
structural protocols below, so any runtime exposing these members can
host them.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Awaitable, Callable, Protocol, Union

from core.config.models import CharacterConfig
from core.schemas import (
    Content,
    FileAttachment,
    ImageGenerationResult,
    Memory,
    SearchResponse,
)

State = dict[str, Any]

HandlerCallback = Callable[
    [Content, Union[list[FileAttachment], None]],
    Union[Awaitable[Any], Any],
]


class ModelClass(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class SettingsSource(Protocol):
    """Anything that can answer a credential/setting lookup."""

    def get_setting(self, key: str) -> str | None: ...


class MessageManager(Protocol):
    async def create_memory(self, memory: Memory) -> None: ...


class ImageDescriptionService(Protocol):
    async def describe_image(self, *, image_url: str) -> dict[str, str]: ...


class AgentRuntime(SettingsSource, Protocol):
    agent_id: str
    character: CharacterConfig
    message_manager: MessageManager

    async def compose_state(self, message: Memory) -> State: ...

    async def generate_text(
        self,
        *,
        context: str,
        model_class: ModelClass,
        custom_system_prompt: str | None = None,
    ) -> str: ...

    async def generate_image(self, request: dict[str, Any]) -> ImageGenerationResult: ...

    async def generate_web_search(self, query: str) -> SearchResponse | None: ...

    def get_service(self, name: str) -> Any | None: ...
