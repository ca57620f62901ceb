# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ActionWorks core, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Persistence of generated images to the local output directory.

Two source formats are handled:
  - inline base64 payloads, optionally wrapped in a ``data:image/*;base64,`` URI
  - remote ``http(s)`` URLs, downloaded with httpx

Files are named ``{base_name}.png``; callers build *base_name* with
:func:`make_base_name` so names are unique per invocation and batch index.
"""
from __future__ import annotations

import base64
import binascii
import os
import re
import time
from pathlib import Path

import httpx

from core.actions._base import logger
from core.exceptions import ArtifactDecodeError, ArtifactWriteError, FetchError
from core.paths import resolve_output_dir
from core.schemas import is_remote_image

_DATA_URI_PREFIX_RE = re.compile(r"^data:image/\w+;base64,")

_DOWNLOAD_TIMEOUT = httpx.Timeout(30.0, read=120.0)


def make_base_name(index: int, timestamp_ms: int | None = None) -> str:
    """Return ``generated_{unixMillis}_{index}``."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"generated_{timestamp_ms}_{index}"


def decode_inline_image(data: str) -> bytes:
    """Strip any data-URI prefix and decode base64 image data.

    Raises:
        ArtifactDecodeError: The payload is not valid base64.
    """
    payload = _DATA_URI_PREFIX_RE.sub("", data.strip())
    payload += "=" * (-len(payload) % 4)
    try:
        return base64.b64decode(payload)
    except (binascii.Error, ValueError) as exc:
        raise ArtifactDecodeError(f"Invalid base64 image data: {exc}") from exc


class ArtifactStore:
    """Writes generated images under a single output directory."""

    def __init__(
        self,
        output_dir: str | Path | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._output_dir = resolve_output_dir(output_dir)
        self._client = client

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def ensure_output_dir(self) -> Path:
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ArtifactWriteError(
                f"Cannot create output directory {self._output_dir}: {exc}"
            ) from exc
        return self._output_dir

    async def persist(self, image: str, base_name: str) -> Path:
        """Persist one generated image, choosing the strategy by its format."""
        if is_remote_image(image):
            return await self.save_remote_image(image, base_name)
        return self.save_inline_image(image, base_name)

    def save_inline_image(self, data: str, base_name: str) -> Path:
        self.ensure_output_dir()
        return self._write(decode_inline_image(data), base_name)

    async def save_remote_image(self, url: str, base_name: str) -> Path:
        self.ensure_output_dir()
        content = await self._fetch(url)
        return self._write(content, base_name)

    async def _fetch(self, url: str) -> bytes:
        try:
            if self._client is not None:
                response = await self._client.get(url, follow_redirects=True)
            else:
                async with httpx.AsyncClient(timeout=_DOWNLOAD_TIMEOUT) as client:
                    response = await client.get(url, follow_redirects=True)
        except httpx.HTTPError as exc:
            raise FetchError(f"Failed to fetch image: {exc}") from exc
        if not response.is_success:
            raise FetchError(
                f"Failed to fetch image: {response.reason_phrase}",
                status_code=response.status_code,
                status_text=response.reason_phrase,
            )
        return response.content

    def _write(self, content: bytes, base_name: str) -> Path:
        path = (self._output_dir / f"{base_name}.png").resolve()
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            tmp_path.write_bytes(content)
            os.replace(tmp_path, path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise ArtifactWriteError(f"Failed to write {path}: {exc}") from exc
        logger.debug("Saved %d bytes to %s", len(content), path)
        return path
