# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ActionWorks core, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Token-bounded truncation of text using a model-specific tiktoken encoding."""
from __future__ import annotations

from functools import lru_cache
from typing import Protocol

import tiktoken

from core.actions._base import logger

DEFAULT_MAX_WEB_SEARCH_TOKENS = 4000
DEFAULT_MODEL_ENCODING = "gpt-3.5-turbo"
# Used for model names tiktoken cannot map (local or unreleased models)
FALLBACK_ENCODING = "cl100k_base"


class Encoding(Protocol):
    def encode(self, text: str) -> list[int]: ...


@lru_cache(maxsize=8)
def get_encoding(model: str = DEFAULT_MODEL_ENCODING) -> Encoding:
    try:
        return tiktoken.encoding_for_model(model)
    except KeyError:
        logger.warning(
            "No tiktoken encoding known for model %r; counting with %s",
            model, FALLBACK_ENCODING,
        )
        return tiktoken.get_encoding(FALLBACK_ENCODING)


def count_tokens(text: str, model: str = DEFAULT_MODEL_ENCODING) -> int:
    return len(get_encoding(model).encode(text))


def truncate_to_max_tokens(
    text: str,
    max_tokens: int = DEFAULT_MAX_WEB_SEARCH_TOKENS,
    model: str = DEFAULT_MODEL_ENCODING,
) -> str:
    """Bound *text* to at most *max_tokens* tokens.

    Text at or above the bound is cut to its first *max_tokens*
    characters.  This is an approximation: a character prefix of that
    length normally tokenizes well under the bound.  When characters that
    encode to several tokens keep it over budget, trailing characters are
    dropped until it fits.  The result is always a prefix of *text*.

    Raises:
        ValueError: *max_tokens* is negative.
    """
    if max_tokens < 0:
        raise ValueError(f"max_tokens must be non-negative, got {max_tokens}")

    tokens = count_tokens(text, model)
    if tokens < max_tokens:
        return text

    truncated = text[:max_tokens]
    tokens = count_tokens(truncated, model)
    while tokens > max_tokens:
        keep = min(len(truncated) - 1, len(truncated) * max_tokens // tokens)
        truncated = truncated[:keep]
        tokens = count_tokens(truncated, model)
    return truncated
