# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ActionWorks core, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Marketing image generation action.

Pipeline:
  1. Compose runtime state for the triggering message
  2. Turn the message text into a marketing image prompt (text model, MEDIUM)
  3. Resolve the request: call options > character imageSettings > defaults
  4. Generate images through the runtime's image provider
  5. Persist each image in batch order, caption it, and emit one callback
"""
from __future__ import annotations

import time
import uuid
from typing import TYPE_CHECKING, Any, Callable

from core.actions._base import Action, ActionExample, emit, logger
from core.actions.captioning import Captioner, PlaceholderCaptioner, RuntimeServiceCaptioner
from core.actions.gate import IMAGE_GATE, ProviderGate
from core.actions.persistence import ArtifactStore, make_base_name
from core.actions.resolver import resolve_generation_request
from core.config.models import ImageGenerationConfig, load_config
from core.exceptions import ArtifactError
from core.logging_config import bind_action_context
from core.runtime import ModelClass
from core.schemas import (
    Content,
    FileAttachment,
    MediaAttachment,
    Memory,
    PersistedArtifact,
)

if TYPE_CHECKING:
    from core.runtime import AgentRuntime, HandlerCallback, State

# ── Prompts ────────────────────────────────────────────────

IMAGE_SYSTEM_PROMPT = (
    "You are an expert marketing visual designer specializing in creating "
    "compelling prompts for AI-generated marketing content. You excel at "
    "crafting detailed descriptions that result in professional, "
    "brand-appropriate visuals. Focus on creating clean, commercial-quality "
    "imagery that would be suitable for marketing campaigns, social media, and "
    "advertising materials. Consider aspects like brand positioning, target "
    "audience, and marketing objectives. Your output should contain only the "
    "visual description, without instructions or marketing strategy."
)

IMAGE_PROMPT_TEMPLATE = """\
You are tasked with generating a marketing-focused image prompt based on content and specified style.
Create a detailed prompt that will generate a professional marketing visual while incorporating appropriate branding elements.

Inputs:
<content>
{content}
</content>

<style>
{style}
</style>

A effective marketing image prompt should include:

1. Main subject/product focus
2. Brand elements and identity
3. Target audience consideration
4. Marketing context/use case
5. Professional styling
6. Commercial-grade quality markers

Follow these steps:

1. Analyze the marketing objective and target audience

2. Determine the key visual elements:
   - Primary product or service focus
   - Brand identity elements
   - Target audience aspirational elements
   - Marketing context requirements
   - Professional styling needs

3. Consider the marketing environment:
   - Digital vs print considerations
   - Platform-specific requirements
   - Brand consistency elements

4. Choose lighting that enhances product appeal and brand perception

5. Select a color palette aligned with brand guidelines and marketing objectives

6. Define the commercial mood and emotional response

7. Plan composition for maximum marketing impact

8. Incorporate the professional style while maintaining brand integrity

Construct your prompt using:

1. Primary Focus: Main product/service/message
2. Brand Elements: Key visual brand identifiers
3. Environment: Professional context and setting
4. Lighting: Commercial-grade lighting description
5. Colors: Brand-aligned color palette
6. Mood: Desired customer emotional response
7. Composition: Marketing-optimized layout

Keep the prompt under 50 words while ensuring it will generate a professional marketing visual. Write only the prompt, nothing else."""

ATTACHMENT_TITLE = "Generated image"
ATTACHMENT_SOURCE = "imageGeneration"


def _example(request: str, reply: str) -> tuple[ActionExample, ...]:
    return (
        ActionExample(user="{{user1}}", content=Content(text=request)),
        ActionExample(
            user="{{agentName}}",
            content=Content(text=reply, action="GENERATE_IMAGE"),
        ),
    )


def _now_ms() -> int:
    return int(time.time() * 1000)


def build_image_response(
    artifact: PersistedArtifact,
) -> tuple[Content, list[FileAttachment]]:
    """Build the callback content and file list for one persisted image."""
    path = str(artifact.file_path)
    caption = artifact.caption
    content = Content(
        text=caption.description,
        attachments=[
            MediaAttachment(
                id=str(uuid.uuid4()),
                url=path,
                title=ATTACHMENT_TITLE,
                source=ATTACHMENT_SOURCE,
                description=caption.title,
                text=caption.description,
                content_type=artifact.mime_type,
            )
        ],
    )
    return content, [FileAttachment(attachment=path, name=artifact.file_name)]


class ImageGenerationAction(Action):
    name = "GENERATE_IMAGE"
    similes = (
        "IMAGE_GENERATION",
        "IMAGE_GEN",
        "CREATE_IMAGE",
        "MAKE_PICTURE",
        "GENERATE_IMAGE",
        "GENERATE_A",
        "DRAW",
        "DRAW_A",
        "MAKE_A",
    )
    description = "Generate an image to go along with the message."
    suppress_initial_message = True
    examples = (
        _example(
            "Create a social media banner for our new tech product launch",
            "Here's your social media banner",
        ),
        _example(
            "Generate a lifestyle image for our fitness app campaign",
            "Here's your lifestyle marketing image",
        ),
        _example(
            "Design an Instagram post for our organic food delivery service",
            "Here's your Instagram marketing visual",
        ),
        _example(
            "Create a professional LinkedIn header for our B2B software",
            "Here's your LinkedIn header image",
        ),
        _example(
            "Generate an email banner for our holiday sale campaign",
            "Here's your email marketing banner",
        ),
    )

    def __init__(
        self,
        *,
        config: ImageGenerationConfig | None = None,
        store: ArtifactStore | None = None,
        captioner: Captioner | None = None,
        gate: ProviderGate = IMAGE_GATE,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._config = config
        self._store = store
        self._captioner = captioner
        self._gate = gate
        self._clock = clock

    @property
    def gate(self) -> ProviderGate:
        return self._gate

    async def validate(self, runtime: AgentRuntime, message: Memory) -> bool:
        return self._gate.can_run(runtime)

    async def handler(
        self,
        runtime: AgentRuntime,
        message: Memory,
        state: State | None,
        options: Any,
        callback: HandlerCallback,
    ) -> None:
        bind_action_context(self.name, message.id)
        config = self._config or load_config().image_generation

        logger.info("Composing state for message %s", message.id)
        state = await runtime.compose_state(message)
        logger.debug("Agent ID: %s", runtime.agent_id)

        image_prompt = await self.compose_image_prompt(
            runtime, message.content.text, config.prompt_style,
        )
        logger.info("Image prompt received: %s", image_prompt)

        image_settings = runtime.character.settings.image_settings
        logger.debug("Image settings: %s", image_settings.set_fields())

        request: dict[str, Any] = {"prompt": image_prompt}
        request.update(
            resolve_generation_request(options, image_settings, config.defaults)
        )

        logger.info("Generating image with prompt: %s", image_prompt)
        result = await runtime.generate_image(request)

        if not (result.success and result.data):
            logger.error(
                "Image generation failed or returned no data: %s",
                result.error or "empty response",
            )
            return

        logger.info("Image generation successful, number of images: %d", len(result.data))
        store = self._store or ArtifactStore(config.output_dir)
        captioner = self._captioner or self._default_captioner(runtime, config)

        for index, image in enumerate(result.data):
            base_name = make_base_name(index, self._clock())
            try:
                path = await store.persist(image, base_name)
            except ArtifactError:
                logger.error(
                    "Failed to persist image %d (%s); continuing with the batch",
                    index + 1, base_name, exc_info=True,
                )
                continue

            logger.info("Processing image %d: %s", index + 1, base_name)
            artifact = PersistedArtifact(
                file_path=path, caption=await captioner.caption(path),
            )
            logger.debug("Caption for image %d: %s", index + 1, artifact.caption.title)

            content, files = build_image_response(artifact)
            await emit(callback, content, files)

    @staticmethod
    async def compose_image_prompt(
        runtime: AgentRuntime, content: str, style: str,
    ) -> str:
        """Ask the text model for a short marketing image prompt."""
        context = IMAGE_PROMPT_TEMPLATE.format(content=content, style=style)
        prompt = await runtime.generate_text(
            context=context,
            model_class=ModelClass.MEDIUM,
            custom_system_prompt=IMAGE_SYSTEM_PROMPT,
        )
        return prompt.strip()

    @staticmethod
    def _default_captioner(
        runtime: AgentRuntime, config: ImageGenerationConfig,
    ) -> Captioner:
        if config.captioning_enabled:
            return RuntimeServiceCaptioner(runtime)
        return PlaceholderCaptioner()
