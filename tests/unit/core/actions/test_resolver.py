# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for core.actions.resolver: layered request resolution."""

from __future__ import annotations

from core.actions.resolver import as_options, first_set, resolve_generation_request
from core.config.models import ImageDefaults
from core.schemas import GenerationOptions


class TestAsOptions:
    def test_none_is_empty(self) -> None:
        assert as_options(None).set_fields() == {}

    def test_camel_case_mapping(self) -> None:
        opts = as_options({"negativePrompt": "blurry", "hideWatermark": True})
        assert opts.negative_prompt == "blurry"
        assert opts.hide_watermark is True

    def test_snake_case_mapping(self) -> None:
        opts = as_options({"num_iterations": 30, "model_id": "m"})
        assert opts.num_iterations == 30
        assert opts.model_id == "m"

    def test_model_passthrough(self) -> None:
        opts = GenerationOptions(seed=7)
        assert as_options(opts) is opts

    def test_unknown_keys_ignored(self) -> None:
        assert as_options({"foo": 1}).set_fields() == {}


class TestFirstSet:
    def test_skips_none_only(self) -> None:
        layers = [GenerationOptions(seed=None), GenerationOptions(seed=0)]
        assert first_set(layers, "seed") == 0

    def test_all_unset(self) -> None:
        assert first_set([GenerationOptions()], "count") is None


# ── resolve_generation_request ───────────────────────────────


class TestResolveGenerationRequest:
    def test_defaults_only(self) -> None:
        assert resolve_generation_request({}, {}) == {"width": 1024, "height": 1024}

    def test_character_width_used(self) -> None:
        resolved = resolve_generation_request({}, {"width": 512})
        assert resolved["width"] == 512
        assert resolved["height"] == 1024

    def test_call_options_override_character(self) -> None:
        resolved = resolve_generation_request(
            {"width": 640, "count": 2},
            {"width": 512, "count": 4, "stylePreset": "photographic"},
        )
        assert resolved == {
            "width": 640,
            "height": 1024,
            "count": 2,
            "style_preset": "photographic",
        }

    def test_explicit_zero_and_false_preserved(self) -> None:
        resolved = resolve_generation_request(
            {"seed": 0, "hideWatermark": False},
            {"seed": 42, "hideWatermark": True},
        )
        assert resolved["seed"] == 0
        assert resolved["hide_watermark"] is False

    def test_unset_fields_omitted(self) -> None:
        resolved = resolve_generation_request({"guidanceScale": 7.5}, None)
        assert set(resolved) == {"width", "height", "guidance_scale"}

    def test_custom_defaults(self) -> None:
        resolved = resolve_generation_request(None, None, ImageDefaults(width=256, height=128))
        assert resolved == {"width": 256, "height": 128}

    def test_character_layer_fills_gaps_field_by_field(self) -> None:
        resolved = resolve_generation_request(
            {"negativePrompt": "text"},
            {"negativePrompt": "blur", "jobId": "job-1", "modelId": "flux"},
        )
        assert resolved["negative_prompt"] == "text"
        assert resolved["job_id"] == "job-1"
        assert resolved["model_id"] == "flux"
