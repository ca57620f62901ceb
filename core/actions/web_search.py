# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ActionWorks core, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Web search action.

Queries the runtime's search provider with the message text, formats the
answer plus a numbered resource list, bounds it to the configured token
budget, stores it as a memory and reports it through the callback.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from core.actions._base import Action, ActionExample, emit, logger
from core.actions.gate import WEB_SEARCH_GATE, ProviderGate
from core.actions.truncation import truncate_to_max_tokens
from core.config.models import WebSearchConfig, load_config
from core.logging_config import bind_action_context
from core.schemas import Content, Memory, SearchResponse

if TYPE_CHECKING:
    from core.runtime import AgentRuntime, HandlerCallback, State

RESOURCES_HEADER = "\n\nFor more details, you can check out these resources:\n"


def format_search_response(response: SearchResponse) -> str:
    """Render the answer followed by markdown links to each result.

    A response without an answer renders as an empty string.
    """
    if not response.answer:
        return ""
    links = "\n".join(
        f"{i}. [{result.title}]({result.url})"
        for i, result in enumerate(response.results, start=1)
    )
    return f"{response.answer}{RESOURCES_HEADER}{links}"


def _example(request: str, reply: str) -> tuple[ActionExample, ...]:
    return (
        ActionExample(user="{{user1}}", content=Content(text=request)),
        ActionExample(
            user="{{agentName}}",
            content=Content(text=reply, action="WEB_SEARCH"),
        ),
    )


class WebSearchAction(Action):
    name = "WEB_SEARCH"
    similes = (
        "SEARCH_WEB",
        "INTERNET_SEARCH",
        "LOOKUP",
        "QUERY_WEB",
        "FIND_ONLINE",
        "SEARCH_ENGINE",
        "WEB_LOOKUP",
        "ONLINE_SEARCH",
        "FIND_INFORMATION",
    )
    description = "Perform a web search to find information related to the message."
    examples = (
        _example(
            "What are the current trending marketing strategies for SaaS companies?",
            "Here are the latest trending marketing strategies for SaaS companies:",
        ),
        _example(
            "Find successful social media campaigns in the fashion industry this quarter.",
            "Here are some successful fashion industry social media campaigns I found:",
        ),
        _example(
            "What are the latest changes to Meta's advertising policies?",
            "Here are the recent updates to Meta's advertising policies:",
        ),
        _example(
            "Find the average ROI for email marketing campaigns in the tech sector.",
            "Here are the latest email marketing ROI statistics for the tech sector:",
        ),
        _example(
            "What are the most effective TikTok marketing trends for B2C brands?",
            "Here are the current effective TikTok marketing trends for B2C brands:",
        ),
        _example(
            "Find case studies of successful content marketing strategies in fintech.",
            "Here are some notable content marketing case studies from fintech companies:",
        ),
        _example(
            "What are the key performance metrics for influencer marketing campaigns?",
            "Here are the essential KPIs for measuring influencer marketing success:",
        ),
    )

    def __init__(
        self,
        *,
        config: WebSearchConfig | None = None,
        gate: ProviderGate = WEB_SEARCH_GATE,
    ) -> None:
        self._config = config
        self._gate = gate

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
        config = self._config or load_config().web_search

        logger.info("Composing state for message %s", message.id)
        state = await runtime.compose_state(message)

        query = message.content.text
        logger.info("Web search prompt received: %s", query)

        response = await runtime.generate_web_search(query)
        if response is None or not response.results:
            logger.error("Search failed or returned no data")
            return

        text = truncate_to_max_tokens(
            format_search_response(response),
            max_tokens=config.max_tokens,
            model=config.model_encoding,
        )
        logger.debug("Search response: %d results, %d chars", len(response.results), len(text))

        memory = message.with_content(message.content.with_text(text))
        await runtime.message_manager.create_memory(memory)
        await emit(callback, memory.content)
