"""Shared helpers for connectors backed by langchain chat models."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from .base import ResponsePart, TextPart

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .base import ChatMessage


def to_langchain_messages(messages: Sequence[ChatMessage]) -> list[BaseMessage]:
    lc_messages: list[BaseMessage] = []
    for msg in messages:
        if msg.role == "user":
            lc_messages.append(HumanMessage(content=msg.content))
        elif msg.role == "assistant":
            lc_messages.append(AIMessage(content=msg.content))
        elif msg.role == "system":
            lc_messages.append(SystemMessage(content=msg.content))
    return lc_messages


def parts_from_content(content: str | list[Any]) -> list[ResponsePart]:
    """Turn langchain message content (a string or a list of content blocks) into text parts."""
    if isinstance(content, str):
        return [TextPart(content=content)] if content else []

    parts: list[ResponsePart] = []
    for block in content:
        if isinstance(block, str):
            parts.append(TextPart(content=block))
        elif isinstance(block, dict) and block.get("type") == "text" and block.get("text"):
            parts.append(TextPart(content=block["text"]))
    return parts
