"""Message parser for Claude Code CLI output."""

import logging
from typing import Any

from ..types import (
    AssistantMessage,
    ContentBlock,
    Message,
    ResultMessage,
    SystemMessage,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
    UserMessage,
)

logger = logging.getLogger(__name__)


def parse_content_blocks(blocks: list[dict[str, Any]] | None) -> list[ContentBlock]:
    """Map raw content blocks to typed blocks, dropping unknown block types."""
    content_blocks: list[ContentBlock] = []
    for block in blocks or []:
        if not isinstance(block, dict):
            continue

        match block.get("type"):
            case "text":
                content_blocks.append(TextBlock(text=block.get("text")))
            case "tool_use":
                content_blocks.append(
                    ToolUseBlock(
                        id=block.get("id"),
                        name=block.get("name"),
                        input=block.get("input"),
                    )
                )
            case "tool_result":
                content_blocks.append(
                    ToolResultBlock(
                        tool_use_id=block.get("tool_use_id"),
                        content=block.get("content"),
                        is_error=block.get("is_error"),
                    )
                )
            case other:
                logger.debug(f"Dropping unsupported content block type: {other}")

    return content_blocks


def parse_message(data: Any) -> Message | None:
    """Parse one decoded CLI event into a typed message.

    Never raises. Events with an unknown or missing ``type`` give ``None`` so
    the caller can skip them.

    Args:
        data: Decoded JSON object from the CLI's stdout

    Returns:
        The typed message, or None for unrecognised events
    """
    if not isinstance(data, dict):
        logger.debug(f"Ignoring non-object event: {type(data).__name__}")
        return None

    message = data.get("message")
    if not isinstance(message, dict):
        message = {}

    match data.get("type"):
        case "user":
            return UserMessage(content=message.get("content"))

        case "assistant":
            content = message.get("content")
            return AssistantMessage(
                content=parse_content_blocks(content if isinstance(content, list) else None)
            )

        case "system":
            return SystemMessage(subtype=data.get("subtype"), data=data)

        case "result":
            return ResultMessage(
                subtype=data.get("subtype"),
                duration_ms=data.get("duration_ms"),
                duration_api_ms=data.get("duration_api_ms"),
                is_error=data.get("is_error"),
                num_turns=data.get("num_turns"),
                session_id=data.get("session_id"),
                total_cost_usd=data.get("total_cost_usd"),
                usage=data.get("usage"),
                result=data.get("result"),
            )

        case other:
            logger.debug(f"Ignoring unsupported message type: {other}")
            return None
