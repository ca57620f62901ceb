# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for core.actions.image_generation: GENERATE_IMAGE handler."""

from __future__ import annotations

import itertools
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from core.actions.captioning import PlaceholderCaptioner, RuntimeServiceCaptioner
from core.actions.image_generation import (
    IMAGE_SYSTEM_PROMPT,
    ImageGenerationAction,
    build_image_response,
)
from core.actions.persistence import ArtifactStore
from core.config.models import ImageGenerationConfig
from core.exceptions import ArtifactDecodeError
from core.runtime import ModelClass
from core.schemas import ImageCaption, ImageGenerationResult, PersistedArtifact
from tests.helpers.mocks import (
    TINY_BASE64,
    TINY_PAYLOAD,
    FakeRuntime,
    make_callback,
    make_message,
    make_sync_callback,
)


def _make_action(output_dir: Path, **kwargs) -> ImageGenerationAction:
    counter = itertools.count(1000)
    kwargs.setdefault("config", ImageGenerationConfig(output_dir=str(output_dir)))
    kwargs.setdefault("clock", lambda: next(counter))
    return ImageGenerationAction(**kwargs)


# ── Metadata / validate ──────────────────────────────────────


class TestMetadata:
    def test_identity(self) -> None:
        action = ImageGenerationAction()
        assert action.name == "GENERATE_IMAGE"
        assert "DRAW" in action.similes
        assert action.suppress_initial_message is True
        assert len(action.examples) == 5

    @pytest.mark.asyncio
    async def test_validate_requires_provider_credential(self) -> None:
        action = ImageGenerationAction()
        assert await action.validate(FakeRuntime(), make_message()) is False
        runtime = FakeRuntime(settings={"FAL_API_KEY": "fal"})
        assert await action.validate(runtime, make_message()) is True


# ── Handler ──────────────────────────────────────────────────


class TestHandler:
    @pytest.mark.asyncio
    async def test_single_inline_image(self, output_dir: Path) -> None:
        runtime = FakeRuntime(images=[f"data:image/png;base64,{TINY_BASE64}"])
        callback = make_callback()

        await _make_action(output_dir).handler(runtime, make_message(), None, {}, callback)

        callback.assert_awaited_once()
        content, files = callback.await_args.args
        expected = (output_dir / "generated_1000_0.png").resolve()
        assert expected.read_bytes() == TINY_PAYLOAD
        assert content.text == "..."
        [attachment] = content.attachments
        assert attachment.url == str(expected)
        assert attachment.title == "Generated image"
        assert attachment.source == "imageGeneration"
        assert attachment.description == "..."
        assert attachment.content_type == "image/png"
        assert [f.to_dict() for f in files] == [
            {"attachment": str(expected), "name": "generated_1000_0.png"},
        ]

    @pytest.mark.asyncio
    async def test_prompt_composed_with_medium_model(self, output_dir: Path) -> None:
        runtime = FakeRuntime(images=[TINY_BASE64], prompt="  Neon sneaker ad  ")
        message = make_message("Make an ad for our sneakers")

        await _make_action(output_dir).handler(runtime, message, None, {}, make_callback())

        runtime.compose_state.assert_awaited_once_with(message)
        kwargs = runtime.generate_text.await_args.kwargs
        assert kwargs["model_class"] is ModelClass.MEDIUM
        assert kwargs["custom_system_prompt"] == IMAGE_SYSTEM_PROMPT
        assert "<content>\nMake an ad for our sneakers\n</content>" in kwargs["context"]
        assert runtime.image_request["prompt"] == "Neon sneaker ad"

    @pytest.mark.asyncio
    async def test_request_layers_options_over_character(self, output_dir: Path) -> None:
        runtime = FakeRuntime(
            images=[TINY_BASE64],
            character={"settings": {"imageSettings": {"width": 512, "count": 3, "seed": 9}}},
        )

        await _make_action(output_dir).handler(
            runtime, make_message(), None, {"count": 1, "seed": 0}, make_callback(),
        )

        request = runtime.image_request
        assert request["width"] == 512
        assert request["height"] == 1024
        assert request["count"] == 1
        assert request["seed"] == 0
        assert "negative_prompt" not in request

    @pytest.mark.asyncio
    async def test_config_defaults_used(self, output_dir: Path) -> None:
        runtime = FakeRuntime(images=[TINY_BASE64])
        config = ImageGenerationConfig(
            output_dir=str(output_dir), default_width=768, default_height=432,
        )

        await _make_action(output_dir, config=config).handler(
            runtime, make_message(), None, None, make_callback(),
        )

        assert runtime.image_request["width"] == 768
        assert runtime.image_request["height"] == 432

    @pytest.mark.asyncio
    async def test_batch_emitted_in_order(self, output_dir: Path) -> None:
        runtime = FakeRuntime(images=[TINY_BASE64, TINY_BASE64, TINY_BASE64])
        callback = make_callback()

        await _make_action(output_dir).handler(runtime, make_message(), None, {}, callback)

        names = [call.args[1][0].name for call in callback.await_args_list]
        assert names == ["generated_1000_0.png", "generated_1001_1.png", "generated_1002_2.png"]
        assert len({call.args[0].attachments[0].id for call in callback.await_args_list}) == 3

    @pytest.mark.asyncio
    async def test_failed_generation_emits_nothing(self, output_dir: Path) -> None:
        runtime = FakeRuntime(
            image_result=ImageGenerationResult(success=False, error="quota exceeded"),
        )
        callback = make_callback()

        await _make_action(output_dir).handler(runtime, make_message(), None, {}, callback)

        callback.assert_not_awaited()
        assert not output_dir.exists()

    @pytest.mark.asyncio
    async def test_success_without_data_emits_nothing(self, output_dir: Path) -> None:
        runtime = FakeRuntime(image_result=ImageGenerationResult(success=True, data=[]))
        callback = make_callback()

        await _make_action(output_dir).handler(runtime, make_message(), None, {}, callback)

        callback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failing_image_does_not_stop_batch(self, output_dir: Path) -> None:
        runtime = FakeRuntime(images=[TINY_BASE64, "!!!not-base64!!!", TINY_BASE64])
        callback = make_callback()

        await _make_action(output_dir).handler(runtime, make_message(), None, {}, callback)

        names = [call.args[1][0].name for call in callback.await_args_list]
        assert names == ["generated_1000_0.png", "generated_1002_2.png"]

    @pytest.mark.asyncio
    async def test_generator_exception_propagates(self, output_dir: Path) -> None:
        runtime = FakeRuntime()
        runtime.generate_image = AsyncMock(side_effect=RuntimeError("provider down"))

        with pytest.raises(RuntimeError, match="provider down"):
            await _make_action(output_dir).handler(
                runtime, make_message(), None, {}, make_callback(),
            )

    @pytest.mark.asyncio
    async def test_sync_callback_supported(self, output_dir: Path) -> None:
        runtime = FakeRuntime(images=[TINY_BASE64])
        callback = make_sync_callback()

        await _make_action(output_dir).handler(runtime, make_message(), None, {}, callback)

        callback.assert_called_once()

    @pytest.mark.asyncio
    async def test_injected_store_and_captioner(self, output_dir: Path) -> None:
        class FixedCaptioner:
            async def caption(self, image_path: Path) -> ImageCaption:
                return ImageCaption(title="Hero", description="Hero shot")

        runtime = FakeRuntime(images=[TINY_BASE64])
        callback = make_callback()
        action = _make_action(
            output_dir, store=ArtifactStore(output_dir), captioner=FixedCaptioner(),
        )

        await action.handler(runtime, make_message(), None, {}, callback)

        content, _ = callback.await_args.args
        assert content.text == "Hero shot"
        assert content.attachments[0].description == "Hero"


class TestDefaultCaptioner:
    def test_placeholder_when_disabled(self) -> None:
        captioner = ImageGenerationAction._default_captioner(
            FakeRuntime(), ImageGenerationConfig(captioning_enabled=False),
        )
        assert isinstance(captioner, PlaceholderCaptioner)

    def test_service_when_enabled(self) -> None:
        captioner = ImageGenerationAction._default_captioner(
            FakeRuntime(), ImageGenerationConfig(captioning_enabled=True),
        )
        assert isinstance(captioner, RuntimeServiceCaptioner)


class TestBuildImageResponse:
    def test_wire_form(self, tmp_path: Path) -> None:
        path = tmp_path / "generated_1_0.png"
        content, files = build_image_response(PersistedArtifact(file_path=path))

        payload = content.to_dict()
        assert payload["text"] == "..."
        assert payload["attachments"][0]["contentType"] == "image/png"
        assert payload["attachments"][0]["url"] == str(path)
        assert files[0].name == "generated_1_0.png"


def test_decode_error_type_is_artifact_error() -> None:
    # Batch continuation relies on persistence failures sharing a base class
    from core.exceptions import ArtifactError

    assert issubclass(ArtifactDecodeError, ArtifactError)
