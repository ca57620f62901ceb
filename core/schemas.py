# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ActionWorks core, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Data types exchanged between actions and the host runtime."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# ── Generation Options ────────────────────────────────────

GENERATION_FIELDS: tuple[str, ...] = (
    "width",
    "height",
    "count",
    "negative_prompt",
    "num_iterations",
    "guidance_scale",
    "seed",
    "model_id",
    "job_id",
    "style_preset",
    "hide_watermark",
)


class GenerationOptions(BaseModel):
    """Image generation parameters.  Every field is optional (None = unset).

    Accepts both snake_case names and the camelCase names used by
    character files and host runtimes (``negativePrompt``, ``hideWatermark``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
        extra="ignore",
    )

    width: int | None = None
    height: int | None = None
    count: int | None = None
    negative_prompt: str | None = None
    num_iterations: int | None = None
    guidance_scale: float | None = None
    seed: int | None = None
    model_id: str | None = None
    job_id: str | None = None
    style_preset: str | None = None
    hide_watermark: bool | None = None

    def set_fields(self) -> dict[str, Any]:
        """Return only the fields holding a value (``0`` and ``False`` count)."""
        return {
            name: getattr(self, name)
            for name in GENERATION_FIELDS
            if getattr(self, name) is not None
        }


# Character-level image settings share the option shape; they are simply
# the lower-priority layer during resolution.
CharacterImageSettings = GenerationOptions


@dataclass
class ImageGenerationResult:
    """Return value of the runtime's image generation collaborator."""

    success: bool
    data: list[str] = field(default_factory=list)
    error: str | None = None


def is_remote_image(image: str) -> bool:
    """True when a generated image is a URL rather than inline data."""
    return image.startswith("http")


# ── Artifacts ─────────────────────────────────────────────


@dataclass(frozen=True)
class ImageCaption:
    title: str
    description: str


PLACEHOLDER_CAPTION = ImageCaption(title="...", description="...")


@dataclass
class PersistedArtifact:
    """A generated image written to local storage."""

    file_path: Path
    mime_type: str = "image/png"
    caption: ImageCaption = PLACEHOLDER_CAPTION

    @property
    def file_name(self) -> str:
        return self.file_path.name


# ── Message Content ───────────────────────────────────────


@dataclass
class MediaAttachment:
    id: str
    url: str
    title: str
    source: str
    description: str
    text: str
    content_type: str = "image/png"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "title": self.title,
            "source": self.source,
            "description": self.description,
            "text": self.text,
            "contentType": self.content_type,
        }


@dataclass
class FileAttachment:
    """File descriptor passed alongside callback content."""

    attachment: str
    name: str

    def to_dict(self) -> dict[str, str]:
        return {"attachment": self.attachment, "name": self.name}


@dataclass
class Content:
    text: str = ""
    action: str | None = None
    source: str | None = None
    attachments: list[MediaAttachment] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def with_text(self, text: str) -> Content:
        return replace(self, text=text, attachments=list(self.attachments), extra=dict(self.extra))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {**self.extra, "text": self.text}
        if self.action is not None:
            payload["action"] = self.action
        if self.source is not None:
            payload["source"] = self.source
        if self.attachments:
            payload["attachments"] = [a.to_dict() for a in self.attachments]
        return payload


@dataclass
class Memory:
    """A message record as stored by the runtime's message manager."""

    content: Content
    id: str | None = None
    user_id: str | None = None
    agent_id: str | None = None
    room_id: str | None = None
    created_at: int | None = None

    def with_content(self, content: Content) -> Memory:
        return replace(self, content=content)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "agentId": self.agent_id,
            "roomId": self.room_id,
            "createdAt": self.created_at,
            "content": self.content.to_dict(),
        }


# ── Web Search ────────────────────────────────────────────


class SearchResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    title: str
    url: str
    content: str = ""
    score: float | None = None


class SearchResponse(BaseModel):
    """Search collaborator response: an optional answer plus ordered results."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    query: str = ""
    answer: str | None = None
    response_time: float | None = None
    results: list[SearchResult] = []
