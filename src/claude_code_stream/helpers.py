"""Convenience helpers for building turns, MCP configs and printing messages."""

import json
from typing import Any

from .types import (
    AssistantMessage,
    McpServerConfig,
    Message,
    ResultMessage,
    SystemMessage,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)


def create_user_message(text: str) -> dict[str, Any]:
    """Create a user turn in the format the CLI reads from stdin.

    Example:
        >>> create_user_message("Hi")
        {'type': 'user', 'message': {'role': 'user', 'content': [{'type': 'text', 'text': 'Hi'}]}}
    """
    return {
        "type": "user",
        "message": {
            "role": "user",
            "content": [{"type": "text", "text": text}],
        },
    }


def create_conversation(*turns: str | None) -> list[dict[str, Any]]:
    """Create user turns for a multi-turn query, skipping empty ones."""
    return [create_user_message(turn) for turn in turns if turn]


def format_messages_as_jsonl(messages: list[dict[str, Any]]) -> str:
    """Join messages into JSONL text, one message per line."""
    return "\n".join(json.dumps(message) for message in messages)


def add_mcp_server(name: str, config: McpServerConfig) -> dict[str, McpServerConfig]:
    """Wrap a server config for ``ClaudeCodeOptions.mcp_servers``."""
    return {name: config}


def format_message(message: Message) -> str:
    """Render a message as short human-readable text.

    Returns an empty string for messages with nothing worth showing, such as
    the ``init`` system message or user turns.
    """
    match message:
        case SystemMessage(subtype="init"):
            return ""
        case SystemMessage():
            return f"System: {message.subtype}"
        case AssistantMessage():
            lines = []
            for block in message.content:
                match block:
                    case TextBlock():
                        lines.append(block.text or "")
                    case ToolUseBlock():
                        lines.append(f"Tool: {block.name}")
                    case ToolResultBlock():
                        lines.append(f"Tool result: {block.content}")
            return "\n".join(lines)
        case ResultMessage():
            return f"Cost: ${message.total_cost_usd or 0:.6f}"
        case _:
            return ""
